import json
from typing import Callable, Optional

import httpx

from config.settings import Settings
from model.kv import KVNamespace
from util.errors import RemoteApiError

ACCOUNT_ID = "acc123"
BASE_URL = "https://cf.test/client/v4"
NAMESPACES_PATH = f"/client/v4/accounts/{ACCOUNT_ID}/storage/kv/namespaces"


def make_settings(target_directory: str = "/data", **overrides) -> Settings:
    values = {
        "CF_API_KEY": "key",
        "CF_API_EMAIL": "ops@example.com",
        "TARGET_DIRECTORY": target_directory,
        "CF_API_ACCOUNT_ID": ACCOUNT_ID,
        "CF_KV_NAMESPACE": "site-assets",
        "CF_API_BASE_URL": BASE_URL,
    }
    values.update(overrides)
    return Settings(**values)


def envelope(result=None, success: bool = True, errors: Optional[list] = None) -> dict:
    return {
        "success": success,
        "errors": errors or [],
        "messages": [],
        "result": result,
    }


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.Client:
    return httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))


class FakeKVStore:
    """In-memory Cloudflare KV account serving the three endpoints the tool uses."""

    def __init__(self, namespaces: Optional[list[dict]] = None) -> None:
        self.namespaces = list(namespaces or [])
        self.values: dict[tuple[str, str], bytes] = {}
        self.requests: list[httpx.Request] = []
        self.fail_write_keys: set[str] = set()

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == NAMESPACES_PATH and request.method == "GET":
            return httpx.Response(200, json=envelope(self.namespaces))
        if path == NAMESPACES_PATH and request.method == "POST":
            title = json.loads(request.content)["title"]
            ns = {"id": f"ns{len(self.namespaces) + 1}", "title": title}
            self.namespaces.append(ns)
            return httpx.Response(200, json=envelope(ns))
        if path.startswith(NAMESPACES_PATH + "/") and request.method == "PUT":
            ns_id, _, key = path[len(NAMESPACES_PATH) + 1 :].split("/", 2)
            if key in self.fail_write_keys:
                return httpx.Response(
                    500,
                    json=envelope(
                        success=False, errors=[{"code": 10001, "message": "boom"}]
                    ),
                )
            self.values[(ns_id, key)] = request.content
            return httpx.Response(200, json=envelope())
        return httpx.Response(404, json=envelope(success=False))


class FakeRepository:
    """Stands in for WorkersKVRepository in service tests."""

    def __init__(self, namespaces: Optional[list[KVNamespace]] = None) -> None:
        self.namespaces = list(namespaces or [])
        self.created: list[str] = []
        self.writes: list[tuple[str, str, bytes]] = []
        self.fail_on_key: Optional[str] = None
        self.fail_listing = False
        self.fail_create = False

    def list_namespaces(self) -> list[KVNamespace]:
        if self.fail_listing:
            raise RemoteApiError("GET failed", status_code=403)
        return list(self.namespaces)

    def create_namespace(self, title: str) -> KVNamespace:
        if self.fail_create:
            raise RemoteApiError("POST failed", status_code=400)
        ns = KVNamespace(id=f"new-{len(self.created) + 1}", title=title)
        self.created.append(title)
        self.namespaces.append(ns)
        return ns

    def write_value(self, namespace_id: str, key: str, payload: bytes) -> None:
        if key == self.fail_on_key:
            raise RemoteApiError("PUT failed", status_code=500)
        self.writes.append((namespace_id, key, payload))
