"""Integration test fixtures: a live Redis for the session cache."""

from __future__ import annotations

import os

import pytest
import redis

REDIS_HOST = os.environ.get("DSNREPORT_REDIS_HOST", "localhost")
REDIS_PORT = int(os.environ.get("DSNREPORT_REDIS_PORT", "6379"))
KEY_PREFIX = "dsnreport-inttest:"


def _redis_available() -> bool:
    """Check if Redis is reachable."""
    try:
        return bool(redis.Redis(host=REDIS_HOST, port=REDIS_PORT, socket_connect_timeout=1).ping())
    except redis.RedisError:
        return False


skip_no_redis = pytest.mark.skipif(
    not _redis_available(),
    reason="Redis not available",
)


@pytest.fixture
def redis_client():
    client = redis.Redis(host=REDIS_HOST, port=REDIS_PORT, decode_responses=True)
    yield client
    for key in client.scan_iter(f"{KEY_PREFIX}*"):
        client.delete(key)
