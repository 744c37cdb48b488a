"""Inputs and outputs of :class:`~dalgona.services.auth.service.AuthService`."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta


@dataclass(frozen=True, slots=True)
class LoginIn:
    """Credentials as submitted; the repository normalises ``email``."""

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    token: str


@dataclass(frozen=True, slots=True)
class AccessTokenOut:
    """
    :param access_token: Encoded JWT.
    :param expires_in: Seconds until ``access_token`` expires.
    """

    access_token: str
    expires_in: int
    token_type: str = "Bearer"


@dataclass(frozen=True, slots=True)
class ProfileOut:
    """Profile row of the signed-in account (``id`` is the account id)."""

    id: int
    email: str
    nickname: str
    name: str


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    access_expires: timedelta
