"""Identity provider backed by the local ``accounts`` table."""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from dalgona.models.account import Account
from dalgona.services._shared.ports.identity_provider import (
    DUPLICATE_ACCOUNT_MESSAGE,
    AccountPayload,
    IdentityProvider,
)
from dalgona.services._shared.result import ErrorKind, Failure, Result, Success
from dalgona.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)


class SQLAlchemyIdentityProvider(IdentityProvider):
    """
    Create login accounts in their own committed transaction.

    The account is committed before the caller goes on to write the profile,
    the same way a hosted auth service would have created it already.
    Expected failures come back as :class:`Failure` values:

    - email already taken: ``DUPLICATE_ACCOUNT`` with ``"User already registered"``
    - rejected email/password: ``INVALID_INPUT``
    - database errors: ``UNAVAILABLE``
    """

    def create_account(self, email: str, password: str) -> Result[AccountPayload | None]:
        try:
            with SQLAlchemyUnitOfWork() as uow:
                if uow.accounts.exists_by_email(email):
                    return Failure(ErrorKind.DUPLICATE_ACCOUNT, DUPLICATE_ACCOUNT_MESSAGE)
                account = Account(email=email, password=password)
                uow.accounts.add(account)
                payload = AccountPayload(id=account.id, email=account.email)
        except IntegrityError:
            # Lost a race against a concurrent sign-up with the same email.
            log.warning("Account insert hit the unique email constraint")
            return Failure(ErrorKind.DUPLICATE_ACCOUNT, DUPLICATE_ACCOUNT_MESSAGE)
        except ValueError as exc:
            return Failure(ErrorKind.INVALID_INPUT, str(exc))
        except SQLAlchemyError as exc:
            log.error("Account store unavailable", exc_info=True)
            return Failure(ErrorKind.UNAVAILABLE, exc.__class__.__name__)

        log.info("Account created", extra={"account_id": payload.id})
        return Success(payload)
