from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from dalgona.services._shared.result import Result

# Message the identity provider uses for an email that already has an account.
DUPLICATE_ACCOUNT_MESSAGE = "User already registered"


@dataclass(frozen=True, slots=True)
class AccountPayload:
    """
    Account created by the identity provider.

    :param id: Provider-issued account id; also keys the profile row.
    :type id: int
    :param email: Normalized login email.
    :type email: str
    """

    id: int
    email: str


class IdentityProvider(Protocol):
    """Port for the service that issues login identities."""

    def create_account(self, email: str, password: str) -> Result[AccountPayload | None]:
        """
        Create a login identity.

        Returns ``Failure(ErrorKind.DUPLICATE_ACCOUNT, DUPLICATE_ACCOUNT_MESSAGE)``
        when the email is taken. ``Success(None)`` means the provider answered
        without an account payload.
        """
        ...
