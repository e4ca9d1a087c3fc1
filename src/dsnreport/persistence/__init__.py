"""Pluggable session cache backends behind the ICacheBackend protocol."""

from __future__ import annotations

from dsnreport.core.config import AppSettings
from dsnreport.core.protocols import ICacheBackend
from dsnreport.persistence.memory_backend import MemoryCacheBackend
from dsnreport.persistence.redis_backend import RedisCacheBackend


def create_cache(settings: AppSettings | None = None) -> ICacheBackend:
    """Create the session cache selected by ``settings.cache.backend``."""
    if settings is None:
        settings = AppSettings()

    if settings.cache.backend == "redis":
        return RedisCacheBackend.from_config(settings.redis)
    return MemoryCacheBackend()


__all__ = ["MemoryCacheBackend", "RedisCacheBackend", "create_cache"]
