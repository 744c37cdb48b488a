"""Account repository for credential lookups."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from dalgona.models.account import Account
from dalgona.repositories.base import BaseRepository


class AccountRepository(BaseRepository[Account]):
    """Looks up and verifies credentials; never issues tokens."""

    model = Account
    filterable = {"email": Account.email}

    def get_by_email(self, email: str) -> Account | None:
        """Fetch an account by email, ignoring case and surrounding blanks.

        :param email: Address as typed by the user.
        :returns: Account or ``None`` when not found.
        """
        stmt = select(Account).where(Account.email == email.lower().strip())
        return cast(Account | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        stmt = select(Account.id).where(Account.email == email.lower().strip())
        return self.session.execute(stmt).first() is not None

    def authenticate(self, email: str, password: str) -> Account | None:
        """Return the account when ``password`` matches, else ``None``."""
        account = self.get_by_email(email)
        if account is None or not account.verify_password(password):
            return None
        return account
