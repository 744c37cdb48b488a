"""In-memory doubles for the identity provider, record store and token ports.

The store doubles record every call and can be scripted to fail, so tests can
assert how many times a collaborator was reached.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any

from dalgona.services._shared.ports import AccountPayload, Row, RowFilter
from dalgona.services._shared.ports.identity_provider import DUPLICATE_ACCOUNT_MESSAGE
from dalgona.services._shared.result import ErrorKind, Failure, Result, Success


@dataclass
class FakeIdentityProvider:
    """
    Identity provider keeping accounts in a dict.

    Attributes
    ----------
    failure:
        Returned instead of creating an account when set.
    error:
        Raised instead of creating an account when set.
    empty_success:
        Answer ``Success(None)`` (no payload, no error).
    """

    failure: Failure | None = None
    error: Exception | None = None
    empty_success: bool = False
    accounts: dict[str, AccountPayload] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)
    next_id: int = 100

    def create_account(self, email: str, password: str) -> Result[AccountPayload | None]:
        self.calls.append((email, password))
        if self.error is not None:
            raise self.error
        if self.failure is not None:
            return self.failure
        if self.empty_success:
            return Success(None)
        if email in self.accounts:
            return Failure(ErrorKind.DUPLICATE_ACCOUNT, DUPLICATE_ACCOUNT_MESSAGE)
        payload = AccountPayload(id=self.next_id, email=email)
        self.next_id += 1
        self.accounts[email] = payload
        return Success(payload)


@dataclass
class FakeRecordStore:
    """
    Record store keeping rows per collection in lists.

    Attributes
    ----------
    insert_failure / select_failure:
        Returned instead of touching the rows when set.
    select_error:
        Raised from :meth:`select` when set.
    """

    tables: dict[str, list[Row]] = field(default_factory=dict)
    insert_failure: Failure | None = None
    select_failure: Failure | None = None
    select_error: Exception | None = None
    inserts: list[tuple[str, Row]] = field(default_factory=list)
    selects: list[tuple[str, RowFilter]] = field(default_factory=list)

    def insert(self, collection: str, row: Mapping[str, Any]) -> Result[Row]:
        self.inserts.append((collection, dict(row)))
        if self.insert_failure is not None:
            return self.insert_failure
        stored = dict(row)
        self.tables.setdefault(collection, []).append(stored)
        return Success(stored)

    def select(self, collection: str, row_filter: RowFilter) -> Result[list[Row]]:
        self.selects.append((collection, row_filter))
        if self.select_error is not None:
            raise self.select_error
        if self.select_failure is not None:
            return self.select_failure
        rows = []
        for row in self.tables.get(collection, []):
            if any(row.get(k) != v for k, v in row_filter.equals.items()):
                continue
            if row_filter.date_range is not None and row.get(row_filter.date_column) not in row_filter.date_range:
                continue
            rows.append({k: row.get(k) for k in row_filter.columns} if row_filter.columns else dict(row))
        return Success(rows)


def unavailable(message: str = "connection refused") -> Failure:
    return Failure(ErrorKind.UNAVAILABLE, message)


class StubTokenProvider:
    """Token provider issuing ``access.<sub>.<jti>`` strings with sequential jtis."""

    def __init__(self) -> None:
        self._now = datetime.now(tz=UTC)
        self._seq = 0
        self._issued: dict[str, dict[str, Any]] = {}

    def create_access_token(
        self,
        *,
        identity: str,
        additional_claims: dict[str, Any] | None = None,
        expires_delta: timedelta | None = None,
    ) -> str:
        self._seq += 1
        jti = f"jti-{self._seq}"
        token = f"access.{identity}.{jti}"
        lifetime = expires_delta or timedelta(minutes=60)
        self._issued[token] = {
            **(additional_claims or {}),
            "sub": identity,
            "type": "access",
            "jti": jti,
            "exp": int((self._now + lifetime).timestamp()),
        }
        return token

    def decode(self, token: str) -> dict[str, Any]:
        return self._issued[token]

    def get_jti(self, token: str) -> str:
        return str(self.decode(token)["jti"])

    def get_subject(self, token: str) -> str:
        return str(self.decode(token)["sub"])

    def get_expires_at(self, token: str) -> datetime:
        return datetime.fromtimestamp(int(self.decode(token)["exp"]), tz=UTC)
