# dalgona/services/auth/service.py
from __future__ import annotations

import logging
from datetime import timedelta
from typing import Any

from dalgona.repositories.account import AccountRepository
from dalgona.repositories.profile import UserProfileRepository
from dalgona.services._shared.base import BaseService
from dalgona.services._shared.errors import AuthenticationError, NotFoundError
from dalgona.services._shared.ports.denylist_store import TokenDenylistStore
from dalgona.services._shared.ports.token_provider import TokenProvider
from dalgona.services.auth.dto import (
    AccessTokenOut,
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    ProfileOut,
)

log = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Authentication lifecycle service (login / logout / whoami).

    Issues access JWTs through a pluggable :class:`TokenProvider` and revokes
    them early by JTI through a :class:`TokenDenylistStore`.
    """

    def __init__(
        self,
        *,
        token_provider: TokenProvider,
        denylist_store: TokenDenylistStore,
        token_cfg: AuthTokenConfig | None = None,
    ) -> None:
        """
        :param token_provider: Adapter for issuing/decoding JWTs.
        :param denylist_store: Denylist for access tokens (JTI-based).
        :param token_cfg: Access token expiry configuration.
        """
        super().__init__()
        self.tokens = token_provider
        self.denylist = denylist_store
        self.cfg = token_cfg or AuthTokenConfig(access_expires=timedelta(minutes=60))

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> AccessTokenOut:
        """
        Authenticate credentials and issue an access token.

        :param dto: Login input.
        :returns: Access token and its lifetime.
        :raises AuthenticationError: If credentials are invalid.
        """
        with self.ro_uow() as uow:
            repo: AccountRepository = uow.accounts
            account = repo.authenticate(dto.email, dto.password)
            if account is None:
                log.warning("Login rejected")
                raise AuthenticationError("Invalid credentials")
            # 'tv' snapshots token_version for future global invalidation.
            claims: dict[str, Any] = {"tv": account.token_version}
            account_id = account.id

        access = self.tokens.create_access_token(
            identity=str(account_id),
            additional_claims=claims,
            expires_delta=self.cfg.access_expires,
        )
        log.info("Login succeeded", extra={"account_id": account_id})
        return AccessTokenOut(
            access_token=access,
            expires_in=int(self.cfg.access_expires.total_seconds()),
        )

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: LogoutIn) -> None:
        """
        Revoke the provided access token until its natural expiry.

        :param dto: Logout input carrying the encoded token.
        :raises AuthenticationError: When the token subject is not an account id.
        """
        jti = self.tokens.get_jti(dto.token)
        account_id = self._coerce_account_id(self.tokens.get_subject(dto.token))
        self.denylist.revoke_jti(jti=jti, expires_at=self.tokens.get_expires_at(dto.token))
        log.info("Access token revoked", extra={"account_id": account_id})

    # ------------------------------------------------------------------ #
    # Who am I
    # ------------------------------------------------------------------ #

    def whoami(self, account_id: int) -> ProfileOut:
        """
        Return the profile of the authenticated account.

        :raises NotFoundError: When the account has no profile row (sign-up
            stopped after the account was created).
        """
        with self.ro_uow() as uow:
            repo: UserProfileRepository = uow.profiles
            profile = repo.get(account_id)
            if profile is None:
                raise NotFoundError("UserProfile", account_id)
            return ProfileOut(
                id=profile.id,
                email=profile.email,
                nickname=profile.nickname,
                name=profile.name,
            )

    @staticmethod
    def _coerce_account_id(subject: int | str) -> int:
        """Ensure the JWT subject can be treated as an integer account id."""
        if isinstance(subject, int):
            return subject
        if isinstance(subject, str) and subject.isdigit():
            return int(subject)
        raise AuthenticationError("Invalid token subject.")
