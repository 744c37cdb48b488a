"""
Shared persistence helpers for the diary repositories (SQLAlchemy 2.x).

Repositories never commit: the Unit of Work owns the transaction. Each
subclass whitelists the columns callers may sort, filter and update by,
so request data can never reach an arbitrary attribute.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, ClassVar, Generic, TypeVar, cast

from sqlalchemy import Select, func, select
from sqlalchemy.orm import InstrumentedAttribute, Session

from dalgona.core.extensions import db

E = TypeVar("E")

Columns = Mapping[str, InstrumentedAttribute[Any]]


def parse_sort_tokens(raw: Iterable[str]) -> list[tuple[str, bool]]:
    """``["-date", "title"]`` -> ``[("date", True), ("title", False)]``; blanks are dropped."""
    tokens = []
    for token in raw:
        name = token.lstrip("-").strip()
        if name:
            tokens.append((name, token.startswith("-")))
    return tokens


class BaseRepository(Generic[E]):
    """
    Persistence-only access to one mapped class.

    Subclasses set ``model`` and fill ``sortable``, ``filterable`` and
    ``updatable``.

    :param session: Session of the surrounding Unit of Work; the
        Flask-scoped session is used when omitted.
    """

    model: type[E]
    sortable: ClassVar[Columns] = {}
    filterable: ClassVar[Columns] = {}
    updatable: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        return self._session if self._session is not None else cast(Session, db.session)

    @property
    def pk(self) -> InstrumentedAttribute[Any]:
        return getattr(self.model, "id")

    def where(self, stmt: Select[Any], filters: Mapping[str, Any]) -> Select[Any]:
        """Add ``column == value`` for each filter.

        :raises ValueError: When a key is not in ``filterable``.
        """
        unknown = sorted(set(filters) - set(self.filterable))
        if unknown:
            raise ValueError(f"Unknown or non-filterable fields: {unknown}")
        return stmt.where(*(self.filterable[k] == v for k, v in filters.items()))

    def order_by(self, stmt: Select[Any], tokens: Iterable[str]) -> Select[Any]:
        """Sort by whitelisted tokens, ignoring the rest, with ``id`` as tiebreaker."""
        orders = [
            self.sortable[name].desc() if desc else self.sortable[name].asc()
            for name, desc in parse_sort_tokens(tokens)
            if name in self.sortable
        ]
        return stmt.order_by(*orders, self.pk.asc())

    def add(self, instance: E) -> E:
        """Stage ``instance`` and flush so its primary key is assigned."""
        self.session.add(instance)
        self.session.flush()
        return instance

    def get(self, entity_id: Any) -> E | None:
        return cast(E | None, self.session.get(self.model, entity_id))

    def find_one(self, **filters: Any) -> E | None:
        stmt = self.where(select(self.model), filters)
        return cast(E | None, self.session.execute(stmt).scalars().first())

    def exists(self, **filters: Any) -> bool:
        stmt = self.where(select(func.count()).select_from(self.model), filters)
        return bool(self.session.execute(stmt).scalar())

    def delete(self, instance: E) -> None:
        self.session.delete(instance)
        self.session.flush()

    def assign_updates(
        self,
        instance: E,
        fields: Mapping[str, Any],
        *,
        strict: bool = True,
        flush: bool = True,
    ) -> E:
        """
        Copy whitelisted ``fields`` onto ``instance`` through ``setattr`` so
        model validators run.

        :raises ValueError: When ``strict`` and a key is not in ``updatable``.
        """
        unknown = sorted(set(fields) - self.updatable)
        if unknown and strict:
            raise ValueError(f"Unknown or non-updatable fields: {unknown}")
        for key, value in fields.items():
            if key in self.updatable:
                setattr(instance, key, value)
        if flush:
            self.session.flush()
        return instance

    def update(self, instance: E, **fields: Any) -> E:
        return self.assign_updates(instance, fields)
