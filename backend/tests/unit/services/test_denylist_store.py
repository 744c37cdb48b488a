from datetime import UTC, datetime, timedelta

from dalgona.services._shared.ports.denylist_store import InMemoryDenylistStore


def test_revoked_until_expiry():
    store = InMemoryDenylistStore()
    store.revoke_jti(jti="live", expires_at=datetime.now(UTC) + timedelta(minutes=5))
    store.revoke_jti(jti="live", expires_at=datetime.now(UTC) + timedelta(minutes=5))

    assert store.is_revoked("live")
    assert not store.is_revoked("other")


def test_expired_entries_are_forgotten():
    store = InMemoryDenylistStore()
    store.revoke_jti(jti="old", expires_at=datetime.now(UTC) - timedelta(seconds=1))

    assert not store.is_revoked("old")
    assert "old" not in store._until
