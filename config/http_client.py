# config/http_client.py
from typing import Optional
import httpx
from config.settings import Settings


def build_http_client(
    settings: Settings, transport: Optional[httpx.BaseTransport] = None
) -> httpx.Client:
    """
    Authenticated client for the Cloudflare v4 API (global API key + account email).
    Callers own the client and should close it, e.g. `with build_http_client(s) as c:`.
    """
    return httpx.Client(
        base_url=settings.CF_API_BASE_URL,
        headers={
            "X-Auth-Key": settings.CF_API_KEY,
            "X-Auth-Email": settings.CF_API_EMAIL,
            "Accept": "application/json",
        },
        timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS, connect=5.0),
        transport=transport,
    )
