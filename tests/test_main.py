"""End-to-end runs of the driver against an in-memory KV account."""

import base64
import json
import logging

import httpx
import pytest

import main
from config.http_client import build_http_client
from tests.utils_kv import ACCOUNT_ID, BASE_URL, FakeKVStore


@pytest.fixture()
def site(tmp_path):
    root = tmp_path / "site"
    (root / "css").mkdir(parents=True)
    (root / "index.html").write_bytes(b"<html></html>")
    (root / "css" / "app.css").write_bytes(b"body { color: red }")
    return root


@pytest.fixture()
def store(monkeypatch, site):
    store = FakeKVStore([{"id": "existing", "title": "unrelated"}])
    env = {
        "APP_ENV": "prod",
        "CF_API_KEY": "key",
        "CF_API_EMAIL": "ops@example.com",
        "TARGET_DIRECTORY": str(site),
        "CF_API_ACCOUNT_ID": ACCOUNT_ID,
        "CF_KV_NAMESPACE": "site-assets",
        "CF_API_BASE_URL": BASE_URL,
    }
    for name, value in env.items():
        monkeypatch.setenv(name, value)
    monkeypatch.setattr(main, "init_logger", lambda settings: logging.getLogger("test"))
    monkeypatch.setattr(
        main,
        "build_http_client",
        lambda settings: build_http_client(settings, transport=httpx.MockTransport(store)),
    )
    return store


def test_run_uploads_every_file(store, site, capsys):
    assert main.run() == 0

    created = [ns for ns in store.namespaces if ns["title"] == "site-assets"]
    assert len(created) == 1
    ns_id = created[0]["id"]
    assert set(store.values) == {(ns_id, "index.html"), (ns_id, "css/app.css")}

    record = json.loads(store.values[(ns_id, "css/app.css")])
    assert base64.b64decode(record["content"]) == (site / "css" / "app.css").read_bytes()
    assert record["contentType"] == "text/plain; charset=utf-8"
    assert "All values written to WorkersKV successfully" in capsys.readouterr().out


def test_run_reuses_existing_namespace(store):
    store.namespaces.append({"id": "keep", "title": "site-assets"})

    assert main.run() == 0

    assert not [r for r in store.requests if r.method == "POST"]
    assert {ns for ns, _ in store.values} == {"keep"}


def test_missing_env_vars_fail_before_any_work(store, monkeypatch, capsys):
    monkeypatch.delenv("CF_API_KEY")
    monkeypatch.delenv("TARGET_DIRECTORY")

    assert main.run() == 1

    err = capsys.readouterr().err
    assert "CF_API_KEY not found" in err
    assert "TARGET_DIRECTORY not found" in err
    assert store.requests == []


def test_missing_directory_fails_before_any_request(store, monkeypatch, tmp_path):
    monkeypatch.setenv("TARGET_DIRECTORY", str(tmp_path / "missing"))

    assert main.run() == 1
    assert store.requests == []


def test_write_failure_exits_non_zero(store):
    store.fail_write_keys.add("css/app.css")

    assert main.run() == 1
    # keys written before the failure stay written
    assert [key for _, key in store.values] == ["index.html"]


def test_main_exits_with_run_status(monkeypatch):
    monkeypatch.setattr(main, "run", lambda: 3)
    with pytest.raises(SystemExit) as exc:
        main.main()
    assert exc.value.code == 3
