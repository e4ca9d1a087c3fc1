"""Unit tests for RedisCacheBackend using fakeredis."""

from __future__ import annotations

from unittest.mock import patch

import fakeredis
import pytest

from dsnreport.core.config import RedisConfig
from dsnreport.core.exceptions import CacheError
from dsnreport.persistence.redis_backend import RedisCacheBackend
from dsnreport.services.session import session_key


@pytest.fixture
def fake_server():
    return fakeredis.FakeServer()


@pytest.fixture
def fake_client(fake_server):
    return fakeredis.FakeRedis(server=fake_server, decode_responses=True)


@pytest.fixture
def backend(fake_client):
    with patch("redis.Redis", return_value=fake_client):
        return RedisCacheBackend(host="localhost", port=6379, db=0)


class TestGet:
    def test_returns_none_on_miss(self, backend):
        assert backend.get("nonexistent") is None

    def test_returns_stored_value(self, backend):
        backend.setex(session_key("abc"), 300, '{"session_id": "abc"}')
        assert backend.get(session_key("abc")) == '{"session_id": "abc"}'


class TestSetex:
    def test_keys_are_prefixed(self, backend, fake_client):
        backend.setex("session:abc:dsn", 60, "payload")
        assert fake_client.get("dsnreport:session:abc:dsn") == "payload"

    def test_sets_ttl(self, backend, fake_client):
        backend.setex("k", 60, "v")
        assert 0 < fake_client.ttl("dsnreport:k") <= 60

    def test_overwrites_existing_value(self, backend):
        backend.setex("k", 60, "old")
        backend.setex("k", 60, "new")
        assert backend.get("k") == "new"


class TestDelete:
    def test_removes_existing_key(self, backend):
        backend.setex("del_me", 60, "val")
        backend.delete("del_me")
        assert backend.get("del_me") is None

    def test_noop_on_missing_key(self, backend):
        backend.delete("never_existed")


class TestFromConfig:
    def test_uses_config_connection_settings(self):
        with patch("redis.Redis") as redis_cls:
            RedisCacheBackend.from_config(RedisConfig(host="cache", port=6380, db=2))
        redis_cls.assert_called_once_with(host="cache", port=6380, db=2, decode_responses=True)

    def test_passes_decode_responses(self):
        with patch("redis.Redis") as redis_cls:
            RedisCacheBackend.from_config(RedisConfig(decode_responses=False))
        assert redis_cls.call_args.kwargs["decode_responses"] is False


class TestErrorWrapping:
    def _broken(self) -> RedisCacheBackend:
        b = RedisCacheBackend.__new__(RedisCacheBackend)
        b._prefix = "dsnreport:"
        b._client = None  # AttributeError -> CacheError
        return b

    def test_get_wraps_redis_error(self):
        with pytest.raises(CacheError):
            self._broken().get("k")

    def test_setex_wraps_redis_error(self):
        with pytest.raises(CacheError):
            self._broken().setex("k", 60, "v")

    def test_delete_wraps_redis_error(self):
        with pytest.raises(CacheError):
            self._broken().delete("k")
