"""Unit tests for the session cache backends and engine options."""

from __future__ import annotations

from app.database import engine_options
from app.services import cache as cache_module
from app.services.cache import InMemoryCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_entries_expire_and_touch_extends(monkeypatch):
    clock = FakeClock()
    monkeypatch.setattr(cache_module.time, "monotonic", clock)
    store = InMemoryCache()

    store.set("session:a", "payload", ttl_seconds=10)
    clock.now += 8
    assert store.touch("session:a", ttl_seconds=10) is True
    clock.now += 8
    assert store.get("session:a") == "payload"

    clock.now += 11
    assert store.get("session:a") is None
    assert store.touch("session:a", ttl_seconds=10) is False


def test_zero_ttl_never_expires(monkeypatch):
    clock = FakeClock()
    monkeypatch.setattr(cache_module.time, "monotonic", clock)
    store = InMemoryCache()

    store.set("k", "v", ttl_seconds=0)
    clock.now += 10**9
    assert store.get("k") == "v"
    store.delete("k")
    store.delete("k")
    assert store.get("k") is None


def test_engine_options_by_driver():
    sqlite = engine_options("sqlite+pysqlite:///:memory:")
    assert sqlite["connect_args"] == {"check_same_thread": False}
    assert "pool_recycle" not in sqlite

    mysql = engine_options("mysql+pymysql://hearth:secret@db:3306/hearth")
    assert mysql["pool_pre_ping"] is True
    assert "connect_args" not in mysql
