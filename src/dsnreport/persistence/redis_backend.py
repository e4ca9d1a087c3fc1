"""Redis cache backend implementing ICacheBackend for upload sessions."""

from __future__ import annotations

import redis

from dsnreport.core.config import RedisConfig
from dsnreport.core.exceptions import CacheError


class RedisCacheBackend:
    """ICacheBackend backed by Redis. Keys are namespaced under ``prefix``."""

    def __init__(self, host: str = "localhost", port: int = 6379, db: int = 0,
                 prefix: str = "dsnreport:", decode_responses: bool = True) -> None:
        self._prefix = prefix
        self._client = redis.Redis(host=host, port=port, db=db, decode_responses=decode_responses)

    @classmethod
    def from_config(cls, config: RedisConfig) -> "RedisCacheBackend":
        return cls(host=config.host, port=config.port, db=config.db,
                   decode_responses=config.decode_responses)

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def get(self, key: str) -> str | None:
        try:
            return self._client.get(self._key(key))
        except Exception as exc:
            raise CacheError(f"Redis GET failed for key={key!r}: {exc}") from exc

    def setex(self, key: str, ttl: int, value: str) -> None:
        try:
            self._client.setex(self._key(key), ttl, value)
        except Exception as exc:
            raise CacheError(f"Redis SETEX failed for key={key!r}: {exc}") from exc

    def delete(self, key: str) -> None:
        try:
            self._client.delete(self._key(key))
        except Exception as exc:
            raise CacheError(f"Redis DELETE failed for key={key!r}: {exc}") from exc
