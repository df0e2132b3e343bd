# model/kv.py
from pydantic import BaseModel, ConfigDict


class KVFile(BaseModel):
    """Value stored under each key: base64 file bytes plus sniffed MIME type."""

    model_config = ConfigDict(frozen=True)

    content: str
    contentType: str


class KVNamespace(BaseModel):
    id: str
    title: str
