from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol


class TokenDenylistStore(Protocol):
    """Revoked access tokens keyed by ``jti``; revoking twice is harmless."""

    def is_revoked(self, jti: str) -> bool: ...
    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None: ...


class InMemoryDenylistStore(TokenDenylistStore):
    """
    Process-local denylist, used when ``REDIS_URL`` is unset.

    Entries are dropped lazily once the token would have expired anyway.
    """

    def __init__(self) -> None:
        self._until: dict[str, datetime] = {}

    def is_revoked(self, jti: str) -> bool:
        until = self._until.get(jti)
        if until is None:
            return False
        if until <= datetime.now(UTC):
            del self._until[jti]
            return False
        return True

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None:
        self._until[jti] = expires_at
