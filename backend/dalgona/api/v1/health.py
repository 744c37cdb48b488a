"""Liveness/readiness probe."""

from __future__ import annotations

from http import HTTPStatus

from flask import Blueprint, current_app
from redis.exceptions import RedisError  # type: ignore[import-untyped]
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from dalgona.api.deps import json_response, timing
from dalgona.core.extensions import REDIS_EXTENSION_KEY, db

bp = Blueprint("health", __name__)


def _database_status() -> str:
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:
        current_app.logger.exception("health: database probe failed")
        return "fail"
    return "ok"


def _denylist_status() -> str:
    """``memory`` without Redis, else the outcome of a ``PING``."""
    client = current_app.extensions.get(REDIS_EXTENSION_KEY)
    if client is None:
        return "memory"
    try:
        client.ping()
    except RedisError:
        current_app.logger.exception("health: redis probe failed")
        return "fail"
    return "ok"


@bp.get("/health")
@timing
def healthcheck():
    """Report database and token-denylist reachability plus the build."""

    checks = {"db": _database_status(), "denylist": _denylist_status()}
    healthy = "fail" not in checks.values()
    payload = {
        "status": "ok" if healthy else "degraded",
        **checks,
        "version": current_app.config.get("APP_VERSION", "dev"),
        "commit": current_app.config.get("APP_COMMIT", "unknown"),
    }
    return json_response(payload, status=HTTPStatus.OK if healthy else HTTPStatus.SERVICE_UNAVAILABLE)
