"""
Record store over the SQLAlchemy models.

Named collections map onto mapped classes:

=============  =====================================
collection     model
=============  =====================================
``users``      :class:`dalgona.models.UserProfile`
``diary``      :class:`dalgona.models.DiaryEntry`
=============  =====================================

Rows travel as plain dicts keyed by column name. Every failure is reported as
a :class:`~dalgona.services._shared.result.Failure`; nothing is raised.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from dalgona.models.diary import DiaryEntry
from dalgona.models.profile import UserProfile
from dalgona.services._shared.ports.record_store import RecordStore, Row, RowFilter
from dalgona.services._shared.result import ErrorKind, Failure, Result, Success
from dalgona.uow.sqlalchemy_uow import SQLAlchemyReadOnlyUnitOfWork, SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)

COLLECTIONS: Mapping[str, type[Any]] = {
    "users": UserProfile,
    "diary": DiaryEntry,
}


def _column_names(model: type[Any]) -> tuple[str, ...]:
    return tuple(attr.key for attr in inspect(model).column_attrs)


def _to_row(instance: Any, columns: tuple[str, ...]) -> Row:
    return {name: getattr(instance, name) for name in columns}


class SQLAlchemyRecordStore(RecordStore):
    """:class:`RecordStore` adapter writing through the Unit of Work."""

    def __init__(self, collections: Mapping[str, type[Any]] | None = None) -> None:
        self.collections = dict(collections or COLLECTIONS)

    def _model(self, collection: str) -> type[Any] | None:
        return self.collections.get(collection)

    # ------------------------------------------------------------------ #
    # Insert
    # ------------------------------------------------------------------ #

    def insert(self, collection: str, row: Mapping[str, Any]) -> Result[Row]:
        model = self._model(collection)
        if model is None:
            return Failure(ErrorKind.UNKNOWN_COLLECTION, f"Unknown collection: {collection}")

        columns = _column_names(model)
        unknown = sorted(set(row) - set(columns))
        if unknown:
            return Failure(ErrorKind.INVALID_INPUT, f"Unknown columns for {collection}: {unknown}")

        try:
            with SQLAlchemyUnitOfWork() as uow:
                instance = model(**dict(row))
                uow.session.add(instance)
                uow.session.flush()
                stored = _to_row(instance, columns)
        except IntegrityError as exc:
            log.warning(
                "Insert into %s violated a constraint", collection, extra={"collection": collection}
            )
            return Failure(ErrorKind.CONSTRAINT_VIOLATION, str(exc.orig))
        except ValueError as exc:
            return Failure(ErrorKind.INVALID_INPUT, str(exc))
        except SQLAlchemyError as exc:
            log.error(
                "Insert into %s failed", collection, exc_info=True, extra={"collection": collection}
            )
            return Failure(ErrorKind.UNAVAILABLE, exc.__class__.__name__)

        return Success(stored)

    # ------------------------------------------------------------------ #
    # Select
    # ------------------------------------------------------------------ #

    def select(self, collection: str, row_filter: RowFilter) -> Result[list[Row]]:
        model = self._model(collection)
        if model is None:
            return Failure(ErrorKind.UNKNOWN_COLLECTION, f"Unknown collection: {collection}")

        all_columns = _column_names(model)
        wanted = row_filter.columns or all_columns
        referenced = set(wanted) | set(row_filter.equals)
        if row_filter.date_range is not None:
            referenced.add(row_filter.date_column)
        unknown = sorted(referenced - set(all_columns))
        if unknown:
            return Failure(ErrorKind.INVALID_INPUT, f"Unknown columns for {collection}: {unknown}")

        stmt = select(*(getattr(model, name) for name in wanted))
        for name, value in row_filter.equals.items():
            stmt = stmt.where(getattr(model, name) == value)
        if row_filter.date_range is not None:
            column = getattr(model, row_filter.date_column)
            stmt = stmt.where(
                column >= row_filter.date_range.start,
                column <= row_filter.date_range.end,
            )

        try:
            with SQLAlchemyReadOnlyUnitOfWork() as uow:
                rows = [dict(r._mapping) for r in uow.session.execute(stmt)]
        except SQLAlchemyError as exc:
            log.error(
                "Select from %s failed", collection, exc_info=True, extra={"collection": collection}
            )
            return Failure(ErrorKind.UNAVAILABLE, exc.__class__.__name__)

        return Success(rows)
