"""Tests for the SQLite connection and schema setup."""

import sqlite3
from pathlib import Path

from weatherdash.storage.database import SCHEMA_VERSION, connect, ensure_schema
from weatherdash.storage.kv_store import SqliteStore


def test_connect_creates_kv_store(tmp_path: Path):
    conn = connect(tmp_path / "test.db")
    tables = {
        r[0]
        for r in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")
    }
    assert "kv_store" in tables
    assert conn.execute("PRAGMA user_version").fetchone()[0] == SCHEMA_VERSION
    conn.close()


def test_ensure_schema_idempotent(db: sqlite3.Connection):
    assert ensure_schema(db) is False


def test_ensure_schema_on_bare_database(tmp_path: Path):
    conn = sqlite3.connect(str(tmp_path / "bare.db"))
    assert ensure_schema(conn) is True
    SqliteStore(conn).set("recent_searches", '["Paris"]')
    assert SqliteStore(conn).get("recent_searches") == '["Paris"]'
    conn.close()


def test_reconnect_keeps_records(tmp_path: Path):
    path = tmp_path / "persist.db"
    conn = connect(path)
    SqliteStore(conn).set("recent_searches", '["Oslo"]')
    conn.close()

    conn = connect(path)
    assert SqliteStore(conn).get("recent_searches") == '["Oslo"]'
    conn.close()


def test_connect_creates_parent_dir(tmp_path: Path):
    conn = connect(tmp_path / "nested" / "dir" / "test.db")
    assert (tmp_path / "nested" / "dir").is_dir()
    conn.close()
