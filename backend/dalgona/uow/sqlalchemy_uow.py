"""Units of Work over the Flask-SQLAlchemy scoped session."""

from __future__ import annotations

import logging
import re

from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.exc import InvalidRequestError, SQLAlchemyError
from sqlalchemy.orm import Session, SessionTransaction

from dalgona.core.extensions import db
from dalgona.repositories import (
    AccountRepository,
    DiaryRepository,
    UserProfileRepository,
)
from dalgona.uow.base import UnitOfWork

log = logging.getLogger(__name__)

_WRITE_STATEMENT = re.compile(
    r"^\s*(insert|update|delete|merge|replace|create|alter|drop|truncate|grant|revoke)\b",
    re.IGNORECASE,
)
_READ_ONLY_DIALECTS = frozenset({"postgresql", "mysql", "mariadb"})
ISOLATION_LEVELS = frozenset({"READ UNCOMMITTED", "READ COMMITTED", "REPEATABLE READ", "SERIALIZABLE"})


class _Repositories:
    """``accounts``, ``profiles`` and ``diaries`` bound to one session."""

    def __init__(self, session: Session) -> None:
        self.session = session
        self.accounts = AccountRepository(session=session)
        self.profiles = UserProfileRepository(session=session)
        self.diaries = DiaryRepository(session=session)


class SQLAlchemyUnitOfWork(_Repositories, UnitOfWork):
    """Commit when the block exits cleanly, roll back when it raises."""

    def __init__(self) -> None:
        super().__init__(db.session)

    def __enter__(self) -> SQLAlchemyUnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is not None:
            self.rollback()
            return
        try:
            self.commit()
        except SQLAlchemyError:
            self.rollback()
            raise

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


class _WriteGuard:
    """Event hooks that turn any write inside a read-only scope into ``RuntimeError``."""

    def __init__(self, session: Session, connection: Connection) -> None:
        def on_flush(session, flush_context, instances) -> None:
            if session.new or session.dirty or session.deleted:
                raise RuntimeError("Read-only UnitOfWork: ORM flush blocked (pending changes present).")

        def on_execute(conn, cursor, statement, parameters, context, executemany) -> None:
            match = _WRITE_STATEMENT.match(statement or "")
            if match:
                raise RuntimeError(
                    f"Read-only UnitOfWork: SQL statement blocked: {match.group(1).upper()}"
                )

        # Fresh closures per scope; nested scopes detach only their own.
        self._hooks = (
            (session, "before_flush", on_flush),
            (connection, "before_cursor_execute", on_execute),
        )

    def install(self) -> None:
        for target, name, fn in self._hooks:
            event.listen(target, name, fn)

    def remove(self) -> None:
        for target, name, fn in self._hooks:
            if event.contains(target, name, fn):
                event.remove(target, name, fn)


class SQLAlchemyReadOnlyUnitOfWork(_Repositories, UnitOfWork):
    """
    Read-only scope used by list and aggregate queries.

    Opens its own transaction when the session is idle and, outside SQLite,
    sets the isolation level and ``READ ONLY`` on it. When a transaction is
    already running (nested calls, the test savepoint) it joins it and relies
    on the write guards alone. Leaving the block always rolls back.

    :param isolation_level: ``SET TRANSACTION ISOLATION LEVEL`` value, or ``None``.
    :param enforce_db_readonly: Also send ``SET TRANSACTION READ ONLY`` on
        PostgreSQL and MySQL/MariaDB.
    """

    def __init__(
        self,
        *,
        isolation_level: str | None = "READ COMMITTED",
        enforce_db_readonly: bool = True,
    ) -> None:
        super().__init__(db.session)
        self.isolation_level = isolation_level
        self.enforce_db_readonly = enforce_db_readonly
        self._own_txn: SessionTransaction | None = None
        self._guard: _WriteGuard | None = None

    def __enter__(self) -> SQLAlchemyReadOnlyUnitOfWork:
        try:
            self._own_txn = self.session.begin()
        except InvalidRequestError:
            self._own_txn = None

        connection = self.session.connection()
        self._guard = _WriteGuard(self.session, connection)
        self._guard.install()
        if self._own_txn is not None:
            self._set_transaction(connection.dialect.name)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            if self._own_txn is not None:
                self._own_txn.rollback()
        finally:
            self._own_txn = None
            if self._guard is not None:
                self._guard.remove()
                self._guard = None

    def _set_transaction(self, dialect: str) -> None:
        if dialect == "sqlite":
            return
        statements = []
        if self.isolation_level:
            level = self.isolation_level.strip().upper()
            if level not in ISOLATION_LEVELS:
                log.warning("unknown isolation level %r, sending it unchanged", level)
            statements.append(f"SET TRANSACTION ISOLATION LEVEL {level}")
        if self.enforce_db_readonly and dialect in _READ_ONLY_DIALECTS:
            statements.append("SET TRANSACTION READ ONLY")
        try:
            for stmt in statements:
                self.session.execute(text(stmt))
        except SQLAlchemyError:
            log.warning("SET TRANSACTION rejected; continuing with write guards only", exc_info=True)

    def commit(self) -> None:
        """:raises RuntimeError: always."""
        raise RuntimeError("Read-only UnitOfWork does not allow commit().")

    def rollback(self) -> None:
        self.session.rollback()
