"""Unit tests for the Redis-backed access-token denylist."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import fakeredis
import pytest

from dalgona.infra.redis.redis_denylist_store import RedisTokenDenylistStore


@pytest.fixture()
def redis_client():
    return fakeredis.FakeRedis()


@pytest.fixture()
def store(redis_client):
    return RedisTokenDenylistStore(redis_client, prefix="test")


class TestRedisTokenDenylistStore:
    def test_unknown_jti_is_not_revoked(self, store):
        assert store.is_revoked("never-seen") is False

    def test_revoke_sets_marker_with_ttl(self, store, redis_client):
        store.revoke_jti(jti="abc", expires_at=datetime.now(UTC) + timedelta(minutes=10))

        assert store.is_revoked("abc") is True
        ttl = redis_client.ttl("test:deny:at:abc")
        assert 0 < ttl <= 600

    def test_already_expired_token_still_gets_short_ttl(self, store, redis_client):
        store.revoke_jti(jti="old", expires_at=datetime.now(UTC) - timedelta(minutes=1))

        assert store.is_revoked("old") is True
        assert redis_client.ttl("test:deny:at:old") == 1

    def test_revoking_twice_is_idempotent(self, store):
        expires = datetime.now(UTC) + timedelta(minutes=5)
        store.revoke_jti(jti="twice", expires_at=expires)
        store.revoke_jti(jti="twice", expires_at=expires)
        assert store.is_revoked("twice")
