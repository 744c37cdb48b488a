"""
Shared fixtures: one app and one in-memory SQLite database per run, with
every test isolated inside a transaction that is rolled back afterwards.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from typing import Any

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from dalgona.api.deps import IDENTITY_PROVIDER_KEY, RECORD_STORE_KEY
from dalgona.core.config import TestingConfig
from dalgona.core.extensions import db as _db
from dalgona.factory import create_app
from tests.factories import bind_session


class TestConfig(TestingConfig):
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SECRET_KEY = "test-secret"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    LOG_LEVEL = "WARNING"
    # Limiter active; tests lower AUTH_RATE_LIMIT to trip it.
    RATELIMIT_ENABLED = True
    AUTH_RATE_LIMIT = "10000 per minute"


def _sqlite_savepoints(engine) -> None:
    """Let SQLAlchemy emit BEGIN itself so SAVEPOINT/ROLLBACK behave on pysqlite."""

    @event.listens_for(engine, "connect")
    def _no_driver_transactions(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _begin(conn):
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def app():
    for name in ("DATABASE_URL", "REDIS_URL"):
        os.environ.pop(name, None)
    app = create_app(TestConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create the schema once and keep an app context open for the run."""
    with app.app_context():
        if _db.engine.url.get_backend_name() == "sqlite":
            _sqlite_savepoints(_db.engine)
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    conn = db.engine.connect()
    yield conn
    conn.close()


@pytest.fixture(autouse=True)
def session(db, connection):
    """
    Session joined to an outer transaction on the shared connection.

    ``join_transaction_mode="create_savepoint"`` turns every commit made
    by a Unit of Work into a SAVEPOINT release, so the final rollback of
    the outer transaction still discards all rows written by the test.
    """
    outer = connection.begin()
    scoped = scoped_session(
        sessionmaker(bind=connection, join_transaction_mode="create_savepoint")
    )
    app_session = db.session
    app_session.remove()
    db.session = scoped
    bind_session(scoped)
    try:
        yield scoped
    finally:
        bind_session(None)
        scoped.remove()
        db.session = app_session
        outer.rollback()


@pytest.fixture()
def client(app, session):
    return app.test_client()


@pytest.fixture()
def use_collaborators(app) -> Iterator[Callable[..., None]]:
    """
    Install replacement adapters for the API for one test::

        def test_x(use_collaborators, client):
            use_collaborators(record_store=FailingStore())
    """

    def _install(*, identity_provider: Any = None, record_store: Any = None) -> None:
        for key, adapter in ((IDENTITY_PROVIDER_KEY, identity_provider), (RECORD_STORE_KEY, record_store)):
            if adapter is not None:
                app.extensions[key] = adapter

    yield _install
    app.extensions.pop(IDENTITY_PROVIDER_KEY, None)
    app.extensions.pop(RECORD_STORE_KEY, None)


@pytest.fixture()
def profile(session):
    """Account plus profile row; the password is ``Passw0rd!``."""
    from tests.factories.profile import UserProfileFactory

    return UserProfileFactory()


@pytest.fixture()
def auth_header(profile) -> dict[str, str]:
    from tests.helpers.auth import issue_token

    return {"Authorization": f"Bearer {issue_token(profile.id)}"}
