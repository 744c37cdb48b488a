from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Protocol


class TokenProvider(Protocol):
    """
    Issues access tokens and reads back the claims the auth service needs.

    ``identity`` is the account id as a string; it comes back as ``sub``.
    """

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str: ...

    def decode(self, token: str) -> dict[str, Any]: ...

    def get_jti(self, token: str) -> str: ...

    def get_subject(self, token: str) -> str: ...

    def get_expires_at(self, token: str) -> datetime: ...
