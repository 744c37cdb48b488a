"""Extension singletons shared by the whole app, plus their wiring."""

from __future__ import annotations

from typing import Any

import redis  # type: ignore[import-untyped]
from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import MetaData

from dalgona.services._shared.ports.denylist_store import InMemoryDenylistStore, TokenDenylistStore

# Named constraints; the sign-up flow recognises duplicates by these names.
NAMING_CONVENTION = {
    "pk": "pk_%(table_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
}

REDIS_EXTENSION_KEY = "redis_client"
DENYLIST_EXTENSION_KEY = "token_denylist"

db: SQLAlchemy = SQLAlchemy(
    metadata=MetaData(naming_convention=NAMING_CONVENTION),
    session_options={"autoflush": False},
)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()
limiter = Limiter(key_func=get_remote_address)


def _connect_redis(url: str) -> redis.Redis:
    client = redis.Redis.from_url(url)
    try:
        client.ping()
    except RedisError as exc:
        raise RuntimeError(f"Failed to connect to Redis at {url!r}") from exc
    return client


def init_app(app: Flask) -> None:
    """
    Bind SQLAlchemy, Alembic, JWT and the rate limiter to ``app``, then pick
    the token denylist.

    Importing :mod:`dalgona.models` registers the three tables on the
    metadata so ``flask db migrate`` can see them. With ``REDIS_URL`` set,
    revoked tokens live in Redis and startup fails if it is unreachable;
    otherwise they live in process memory.
    """
    db.init_app(app)

    from dalgona import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)
    limiter.init_app(app)

    store: TokenDenylistStore
    redis_url = app.config.get("REDIS_URL")
    if redis_url:
        from dalgona.infra.redis.redis_denylist_store import RedisTokenDenylistStore

        client = _connect_redis(redis_url)
        app.extensions[REDIS_EXTENSION_KEY] = client
        store = RedisTokenDenylistStore(client)
    else:
        app.extensions.pop(REDIS_EXTENSION_KEY, None)
        store = InMemoryDenylistStore()
    app.extensions[DENYLIST_EXTENSION_KEY] = store

    @jwt.token_in_blocklist_loader
    def _token_is_revoked(jwt_header: dict[str, Any], jwt_payload: dict[str, Any]) -> bool:
        return get_denylist_store().is_revoked(str(jwt_payload.get("jti", "")))


def get_denylist_store() -> TokenDenylistStore:
    """Return the denylist bound to the current application."""
    store = current_app.extensions.get(DENYLIST_EXTENSION_KEY)
    if store is None:
        raise RuntimeError("Token denylist is not initialized. Call init_app() first.")
    return store
