# repository/workers_kv_repository.py
import logging
from typing import Any
from urllib.parse import quote
import httpx
from pydantic import ValidationError
from model.api import CloudflareResponse
from model.kv import KVNamespace
from util.constants import NAMESPACE_PAGE_SIZE, ExternalURIs
from util.errors import RemoteApiError

logger = logging.getLogger(__name__)


class WorkersKVRepository:
    """
    Cloudflare Workers KV storage for a single account.

    Flow:
    - Namespaces are listed/created under /accounts/{account_id}/storage/kv/namespaces.
    - Values are written raw, one PUT per key; the key is percent-encoded, "/" included.
    - Every non-success answer surfaces as RemoteApiError.
    """

    def __init__(self, client: httpx.Client, account_id: str) -> None:
        self._client = client
        self._account_id = account_id

    def _namespaces_path(self) -> str:
        return ExternalURIs.KV_NAMESPACES.format(account_id=self._account_id)

    def _value_path(self, namespace_id: str, key: str) -> str:
        return ExternalURIs.KV_VALUE.format(
            account_id=self._account_id,
            namespace_id=namespace_id,
            key=quote(key, safe=""),
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> CloudflareResponse:
        try:
            res = self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("cf.request_error method=%s err=%s", method, type(e).__name__)
            raise RemoteApiError(f"{method} request failed: {type(e).__name__}") from e

        try:
            body = CloudflareResponse.model_validate_json(res.content)
        except ValidationError:
            body = None

        if res.status_code // 100 == 2 and body is not None and body.success:
            return body

        errors = body.error_lines() if body is not None else []
        logger.error(
            "cf.bad_status method=%s status=%d errors=%d",
            method,
            res.status_code,
            len(errors),
        )
        raise RemoteApiError(
            f"{method} {res.request.url.path} returned {res.status_code}",
            status_code=res.status_code,
            errors=errors,
        )

    def list_namespaces(self) -> list[KVNamespace]:
        body = self._request(
            "GET", self._namespaces_path(), params={"per_page": NAMESPACE_PAGE_SIZE}
        )
        try:
            return [KVNamespace.model_validate(ns) for ns in body.result or []]
        except ValidationError as e:
            raise RemoteApiError("unexpected namespace listing payload") from e

    def create_namespace(self, title: str) -> KVNamespace:
        body = self._request("POST", self._namespaces_path(), json={"title": title})
        try:
            return KVNamespace.model_validate(body.result)
        except ValidationError as e:
            raise RemoteApiError("unexpected namespace creation payload") from e

    def write_value(self, namespace_id: str, key: str, payload: bytes) -> None:
        self._request(
            "PUT",
            self._value_path(namespace_id, key),
            content=payload,
            headers={"Content-Type": "application/octet-stream"},
        )
