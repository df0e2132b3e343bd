# model/api.py
from typing import Any
from pydantic import BaseModel


class CloudflareError(BaseModel):
    code: int = 0
    message: str = ""


class CloudflareResponse(BaseModel):
    """Envelope wrapped around every Cloudflare v4 API response."""

    success: bool = False
    errors: list[CloudflareError] = []
    messages: list[Any] = []
    result: Any = None

    def error_lines(self) -> list[str]:
        return [f"{e.code}: {e.message}" for e in self.errors]
