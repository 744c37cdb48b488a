"""Token provider backed by Flask-JWT-Extended (needs an app context)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

from flask_jwt_extended import create_access_token, decode_token

from dalgona.services._shared.ports import TokenProvider


@dataclass(slots=True)
class JWTTokenProvider(TokenProvider):
    """
    Issue and read access tokens with the app's ``JWT_*`` settings.

    The library assigns each token a fresh ``jti``; ``expires_delta=None``
    means the configured ``JWT_ACCESS_TOKEN_EXPIRES``.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        return create_access_token(
            identity=str(identity),
            additional_claims=dict(additional_claims or {}),
            expires_delta=expires_delta,
            fresh=True,
        )

    def decode(self, token: str) -> dict[str, Any]:
        """:raises jwt.PyJWTError: On a bad signature or an expired token."""
        return dict(decode_token(token))

    def get_jti(self, token: str) -> str:
        return str(self.decode(token)["jti"])

    def get_subject(self, token: str) -> str:
        return str(self.decode(token)["sub"])

    def get_expires_at(self, token: str) -> datetime:
        return datetime.fromtimestamp(int(self.decode(token)["exp"]), tz=UTC)
