"""Shared API helpers for request parsing, auth and collaborator wiring."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from dalgona.core.errors import Unauthorized
from dalgona.services._shared.base import BaseService
from dalgona.services._shared.errors import ServiceError
from dalgona.services._shared.ports import IdentityProvider, RecordStore

F = TypeVar("F", bound=Callable[..., Any])

# ``app.extensions`` keys that override the default SQL-backed collaborators.
IDENTITY_PROVIDER_KEY = "identity_provider"
RECORD_STORE_KEY = "record_store"


def require_auth(func: F) -> F:
    """Ensure the request carries a valid, non-revoked JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_account_id() -> int:
    """Return the account id carried by the verified token's ``sub`` claim."""

    identity = get_jwt_identity()
    try:
        return int(identity)
    except (TypeError, ValueError) as exc:
        raise Unauthorized("Invalid token subject") from exc


def bearer_token() -> str:
    """Return the raw bearer token of the current request."""

    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise Unauthorized("Missing bearer token")
    return token.strip()


def get_identity_provider() -> IdentityProvider:
    """Return the identity provider bound to the app (SQL-backed by default)."""

    provider = current_app.extensions.get(IDENTITY_PROVIDER_KEY)
    if provider is None:
        from dalgona.infra.identity import SQLAlchemyIdentityProvider

        provider = SQLAlchemyIdentityProvider()
    return provider


def get_record_store() -> RecordStore:
    """Return the record store bound to the app (SQL-backed by default)."""

    store = current_app.extensions.get(RECORD_STORE_KEY)
    if store is None:
        from dalgona.infra.store import SQLAlchemyRecordStore

        store = SQLAlchemyRecordStore()
    return store


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


@contextmanager
def service_errors(service: BaseService) -> Iterator[None]:
    """Re-raise service-layer errors as the matching API errors."""

    try:
        yield
    except ServiceError as exc:
        raise service.translate_exceptions(exc) from exc
