"""In-memory cache backend for local development and single-process deployments."""

from __future__ import annotations

import time


class MemoryCacheBackend:
    """Dict-backed ICacheBackend. Expired entries are swept on every write."""

    def __init__(self) -> None:
        self._store: dict[str, tuple[float, str]] = {}

    def _sweep(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._store.items() if expires_at <= now]
        for key in expired:
            del self._store[key]

    def get(self, key: str) -> str | None:
        entry = self._store.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if expires_at <= time.monotonic():
            del self._store[key]
            return None
        return value

    def setex(self, key: str, ttl: int, value: str) -> None:
        now = time.monotonic()
        self._sweep(now)
        self._store[key] = (now + ttl, value)

    def delete(self, key: str) -> None:
        self._store.pop(key, None)
