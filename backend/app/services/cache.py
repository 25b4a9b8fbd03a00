"""Key/value stores with expiry, used for server-side sessions.

Redis is used when ``SESSION_CACHE_URL`` is set. Otherwise entries live in a
process-local dictionary, which is only suitable for a single worker.
"""

from __future__ import annotations

import logging
import threading
import time
from functools import lru_cache
from typing import Protocol

from redis import Redis

from app.config import get_settings

logger = logging.getLogger(__name__)


class CacheBackend(Protocol):
    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        ...

    def get(self, key: str) -> str | None:
        ...

    def touch(self, key: str, ttl_seconds: int) -> bool:
        """Push back the expiry of ``key``; ``False`` when it is gone."""

    def delete(self, key: str) -> None:
        ...


class InMemoryCache:
    """Thread-safe dictionary store; expired entries are dropped lazily."""

    def __init__(self) -> None:
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()

    @staticmethod
    def _deadline(ttl_seconds: int) -> float:
        return time.monotonic() + ttl_seconds if ttl_seconds > 0 else float("inf")

    def _live(self, key: str) -> tuple[str, float] | None:
        entry = self._entries.get(key)
        if entry is not None and entry[1] <= time.monotonic():
            del self._entries[key]
            return None
        return entry

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            self._entries[key] = (value, self._deadline(ttl_seconds))

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._live(key)
        return entry[0] if entry else None

    def touch(self, key: str, ttl_seconds: int) -> bool:
        with self._lock:
            entry = self._live(key)
            if entry is None:
                return False
            self._entries[key] = (entry[0], self._deadline(ttl_seconds))
            return True

    def delete(self, key: str) -> None:
        with self._lock:
            self._entries.pop(key, None)


class RedisCache:
    def __init__(self, url: str) -> None:
        self._client = Redis.from_url(url, decode_responses=True)

    def set(self, key: str, value: str, ttl_seconds: int) -> None:
        self._client.set(key, value, ex=ttl_seconds if ttl_seconds > 0 else None)

    def get(self, key: str) -> str | None:
        return self._client.get(key)

    def touch(self, key: str, ttl_seconds: int) -> bool:
        if ttl_seconds <= 0:
            return bool(self._client.persist(key)) or bool(self._client.exists(key))
        return bool(self._client.expire(key, ttl_seconds))

    def delete(self, key: str) -> None:
        self._client.delete(key)


@lru_cache(maxsize=1)
def get_cache() -> CacheBackend:
    settings = get_settings()
    if settings.session_cache_url:
        logger.info("Using Redis session store")
        return RedisCache(settings.session_cache_url)
    logger.info("SESSION_CACHE_URL is not set; sessions are kept in process memory")
    return InMemoryCache()
