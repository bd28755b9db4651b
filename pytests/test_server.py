"""Tests for the HTTP API."""

import pathlib
import sqlite3
import threading
import time
from collections.abc import Generator
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def client(db_path: str) -> Generator[TestClient, None, None]:
    """Create a TestClient with the server configured to use the test database."""
    from sqlite_eval import config
    from sqlite_eval.server.services import db

    original_db_path = config.DB_PATH
    config.DB_PATH = db_path
    db.reset_connection()

    from sqlite_eval.server.main import app

    yield TestClient(app)

    config.DB_PATH = original_db_path
    db.close_connection()
    db.reset_connection()


def test_health(client: TestClient) -> None:
    resp = client.get("/api/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "ok"
    assert data["db_exists"] is True
    assert data["connected"] is True


def test_info(client: TestClient, db_path: str) -> None:
    resp = client.get("/api/info")
    assert resp.status_code == 200
    assert resp.json() == {"database_file": db_path, "buffer_size": 5000}


def test_query(client: TestClient) -> None:
    resp = client.post("/api/query", json={"sql": "SELECT id, v FROM mixed ORDER BY id", "buffer_size": 4})
    assert resp.status_code == 200
    data = resp.json()
    assert data["columns"] == ["id", "v"]
    assert data["row_count"] == 6
    assert [r["v"] for r in data["rows"]] == [10, "two", None, 4.5, 5, None]


def test_query_empty(client: TestClient) -> None:
    resp = client.post("/api/query", json={"sql": "SELECT * FROM empty"})
    assert resp.json() == {"columns": [], "row_count": 0, "rows": []}


def test_query_engine_error(client: TestClient) -> None:
    resp = client.post("/api/query", json={"sql": "SELECT * FROM nonexistent_table"})
    assert resp.status_code == 400
    assert "no such table" in resp.json()["detail"]


def test_query_is_read_only(client: TestClient) -> None:
    resp = client.post("/api/query", json={"sql": "DELETE FROM items"})
    assert resp.status_code == 400
    assert "readonly" in resp.json()["detail"]


def test_query_rejects_bad_buffer_size(client: TestClient) -> None:
    resp = client.post("/api/query", json={"sql": "SELECT 1", "buffer_size": 0})
    assert resp.status_code == 422


def test_missing_database(tmp_path: pathlib.Path) -> None:
    from sqlite_eval import config
    from sqlite_eval.server.main import app
    from sqlite_eval.server.services import db

    original_db_path = config.DB_PATH
    config.DB_PATH = str(tmp_path / "nonexistent.db")
    db.close_connection()
    db.reset_connection()

    try:
        test_client = TestClient(app)
        health = test_client.get("/api/health").json()
        assert health["connected"] is False
        assert "Database not found" in health["error"]

        resp = test_client.post("/api/query", json={"sql": "SELECT 1"})
        assert resp.status_code == 503
        assert "Database not found" in resp.json()["detail"]
    finally:
        config.DB_PATH = original_db_path
        db.close_connection()
        db.reset_connection()


@pytest.mark.skipif(
    not hasattr(sqlite3.Connection, "load_extension"),
    reason="sqlite3 built without loadable extension support",
)
def test_query_cannot_load_extensions(client: TestClient, tmp_path: pathlib.Path) -> None:
    sql = f"SELECT load_extension('{tmp_path / 'missing_ext'}')"
    resp = client.post("/api/query", json={"sql": sql})
    assert resp.status_code == 400
    assert "not authorized" in resp.json()["detail"]


def test_get_connection_creates_one_singleton(db_path: str, monkeypatch: pytest.MonkeyPatch) -> None:
    """Concurrent first calls share a single connection."""
    from sqlite_eval.server.services import db

    created = []
    real_connection = db.Connection

    def slow_connection(*args, **kwargs):
        time.sleep(0.05)
        conn = real_connection(*args, **kwargs)
        created.append(conn)
        return conn

    monkeypatch.setattr(db, "Connection", slow_connection)
    db.reset_connection()
    start = threading.Barrier(8)

    def first_call():
        start.wait()
        return db.get_connection(db_path)

    try:
        with ThreadPoolExecutor(max_workers=8) as pool:
            conns = list(pool.map(lambda _: first_call(), range(8)))
        assert len(created) == 1
        assert all(c is created[0] for c in conns)
    finally:
        db.close_connection()
        db.reset_connection()
