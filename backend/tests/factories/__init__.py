"""Factory Boy base wired to the per-test SQLAlchemy session."""

from __future__ import annotations

import factory
from sqlalchemy.orm import Session

_current: Session | None = None


def bind_session(session: Session | None) -> None:
    """Point every factory at ``session``; ``None`` unbinds."""
    global _current
    _current = session


def current_session() -> Session:
    if _current is None:
        raise RuntimeError("No factory session bound; request the 'session' fixture.")
    return _current


class BaseFactory(factory.alchemy.SQLAlchemyModelFactory):
    """Rows are flushed, never committed; the test transaction discards them."""

    class Meta:
        abstract = True
        sqlalchemy_session_factory = current_session
        sqlalchemy_session_persistence = "flush"
