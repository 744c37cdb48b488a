from __future__ import annotations

from datetime import UTC, datetime
from typing import cast

import redis  # type: ignore[import-untyped]

from dalgona.services._shared.ports.denylist_store import TokenDenylistStore


class RedisTokenDenylistStore(TokenDenylistStore):
    """
    Minimal denylist for **access tokens** by jti.

    Each revoked jti is a marker key that expires together with the token.
    """

    def __init__(self, r: redis.Redis, *, prefix: str = "dalgona"):
        self.r = r
        self.prefix = prefix

    def _k(self, jti: str) -> str:
        return f"{self.prefix}:deny:at:{jti}"

    def is_revoked(self, jti: str) -> bool:
        return cast(int, self.r.exists(self._k(jti))) == 1

    def revoke_jti(self, *, jti: str, expires_at: datetime) -> None:
        now = datetime.now(UTC).timestamp()
        ttl = max(1, int(expires_at.timestamp() - now))
        # idempotent: re-revoking only refreshes the TTL
        self.r.set(self._k(jti), "1", ex=ttl)
