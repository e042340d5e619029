"""Integration Tests: /todos 与 /health 接口

Invariants:
    - 应用启动时 hydrate 一次，已持久化的列表直接可见
    - POST / DELETE 返回变更后的完整快照
    - 越界删除返回 404，列表保持不变
    - 关闭时在途写入全部落盘
"""

import asyncio
import json

import pytest
from fastapi.testclient import TestClient

from todolist.config import Settings
from todolist.main import create_app
from todolist.store import MemoryStore

from tests.support import FailingStore

KEY = "todo:api"


def _settings() -> Settings:
    return Settings(
        REDIS_URL="redis://localhost:6379/15",
        STORE_BACKEND="memory",
        TODO_LIST_KEY=KEY,
        TODO_WRITE_RETRY_DELAY=0,
    )


def _stored(store: MemoryStore) -> list[str] | None:
    raw = asyncio.run(store.get(KEY))
    return None if raw is None else json.loads(raw)


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore({KEY: '["x","y"]'})


@pytest.fixture
def client(store):
    with TestClient(create_app(store=store, settings=_settings())) as c:
        yield c


def test_list_returns_hydrated_items(client):
    resp = client.get("/todos")
    assert resp.status_code == 200
    assert resp.json() == {"items": ["x", "y"], "empty": False}


def test_empty_list_is_flagged():
    with TestClient(create_app(store=MemoryStore(), settings=_settings())) as c:
        assert c.get("/todos").json() == {"items": [], "empty": True}


def test_add_then_remove_persists_on_shutdown(store):
    with TestClient(create_app(store=store, settings=_settings())) as c:
        resp = c.post("/todos", json={"text": "buy milk"})
        assert resp.status_code == 201
        assert resp.json()["items"] == ["x", "y", "buy milk"]

        resp = c.delete("/todos/0")
        assert resp.status_code == 200
        assert resp.json()["items"] == ["y", "buy milk"]

    assert _stored(store) == ["y", "buy milk"]


def test_remove_out_of_bounds_returns_404(client):
    resp = client.delete("/todos/5")
    assert resp.status_code == 404
    assert client.get("/todos").json()["items"] == ["x", "y"]


def test_remove_negative_position_returns_404(client):
    assert client.delete("/todos/-1").status_code == 404


def test_add_requires_text(client):
    assert client.post("/todos", json={}).status_code == 422


def test_trace_id_is_echoed(client):
    resp = client.get("/todos", headers={"X-Trace-ID": "trace-123"})
    assert resp.headers["X-Trace-ID"] == "trace-123"


def test_health_ok(client):
    assert client.get("/health").json() == {"status": "ok", "store": "ok", "todo_list": "ready"}


def test_store_outage_degrades_but_still_serves():
    with TestClient(create_app(store=FailingStore(), settings=_settings())) as c:
        health = c.get("/health").json()
        assert health["status"] == "degraded"
        assert health["todo_list"] == "ready"

        resp = c.post("/todos", json={"text": "offline"})
        assert resp.status_code == 201
        assert resp.json() == {"items": ["offline"], "empty": False}
