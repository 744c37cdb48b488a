"""
Problem+json (RFC 7807) responses for every failure the API surfaces.

Each body carries ``type``, ``title``, ``status``, ``detail``, ``instance``,
a stable ``code`` and the ``request_id``. Extension members such as
``errors`` or ``show_dialog`` sit at the top level next to them.
"""

from __future__ import annotations

import logging
from http import HTTPStatus
from typing import Any, ClassVar

from flask import Flask, Response, has_request_context, jsonify, request
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError, OperationalError
from werkzeug.exceptions import HTTPException

from dalgona.core.logger import ensure_request_id

log = logging.getLogger(__name__)

PROBLEM_MIMETYPE = "application/problem+json"


def _code_for(status: int) -> str:
    """``405`` -> ``"method_not_allowed"``; unknown statuses give ``"error"``."""
    try:
        return HTTPStatus(status).phrase.lower().replace(" ", "_").replace("-", "_")
    except ValueError:
        return "error"


def problem(
    status: int,
    code: str,
    detail: str,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Assemble a problem document for the current request."""
    body: dict[str, Any] = {
        "type": "about:blank",
        "title": HTTPStatus(status).phrase,
        "status": int(status),
        "detail": detail,
        "instance": request.path if has_request_context() else None,
        "code": code,
    }
    body.update(extra or {})
    body["request_id"] = ensure_request_id()
    return body


def problem_response(body: dict[str, Any], *, exc_info: bool = False) -> tuple[Response, int]:
    status = int(body["status"])
    (log.error if status >= 500 else log.warning)(
        "%s %s: %s",
        status,
        body["code"],
        body["detail"],
        extra={"status": status},
        exc_info=exc_info,
    )
    resp = jsonify(body)
    resp.mimetype = PROBLEM_MIMETYPE
    return resp, status


class APIError(Exception):
    """
    Base class for errors that map to a problem response.

    Subclasses pin ``status_code``, ``code`` and ``default_message``;
    callers may still override any of them per raise.

    :param message: Client-safe summary; ``default_message`` when omitted.
    :param status_code: HTTP status of the response.
    :param code: Machine-readable snake_case identifier.
    :param details: Extension members merged into the body.
    """

    status_code: int = HTTPStatus.BAD_REQUEST
    code: str = "bad_request"
    default_message: ClassVar[str] = "Bad request"

    def __init__(
        self,
        message: str | None = None,
        status_code: int | None = None,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        if status_code is not None:
            self.status_code = int(status_code)
        if code is not None:
            self.code = code
        self.details = dict(details or {})

    def to_problem(self) -> dict[str, Any]:
        return problem(int(self.status_code), self.code, self.message, self.details)


class NotFound(APIError):
    status_code = HTTPStatus.NOT_FOUND
    code = "not_found"
    default_message = "Resource not found"


class Unauthorized(APIError):
    status_code = HTTPStatus.UNAUTHORIZED
    code = "unauthorized"
    default_message = "Unauthorized"


class Forbidden(APIError):
    """Caller is authenticated but does not own the record."""

    status_code = HTTPStatus.FORBIDDEN
    code = "forbidden"
    default_message = "Forbidden"


class PreconditionFailed(APIError):
    """``If-Match`` no longer matches the stored entry."""

    status_code = HTTPStatus.PRECONDITION_FAILED
    code = "precondition_failed"
    default_message = "Precondition failed"


class ServiceUnavailable(APIError):
    status_code = HTTPStatus.SERVICE_UNAVAILABLE
    code = "service_unavailable"
    default_message = "Service temporarily unavailable"


def init_app(app: Flask) -> None:
    """Register problem+json handlers; database messages never reach clients."""

    @app.errorhandler(APIError)
    def _api_error(err: APIError):
        return problem_response(err.to_problem())

    @app.errorhandler(HTTPException)
    def _http_error(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        if status == HTTPStatus.NOT_FOUND:
            detail = f"Route '{request.path}' not found"
        else:
            detail = (err.description or HTTPStatus(status).phrase).strip()
        return problem_response(problem(status, _code_for(status), detail))

    @app.errorhandler(MarshmallowValidationError)
    def _validation_error(err: MarshmallowValidationError):
        body = problem(
            HTTPStatus.UNPROCESSABLE_ENTITY,
            "validation_error",
            "Validation failed",
            {"errors": err.messages},
        )
        return problem_response(body)

    @app.errorhandler(IntegrityError)
    def _integrity_error(err: IntegrityError):
        body = problem(HTTPStatus.CONFLICT, "conflict", "Resource conflict")
        return problem_response(body, exc_info=True)

    @app.errorhandler(OperationalError)
    def _database_down(err: OperationalError):
        body = problem(
            HTTPStatus.SERVICE_UNAVAILABLE,
            "service_unavailable",
            ServiceUnavailable.default_message,
        )
        return problem_response(body, exc_info=True)

    @app.errorhandler(Exception)
    def _unexpected(err: Exception):
        body = problem(HTTPStatus.INTERNAL_SERVER_ERROR, "internal_server_error", "Unexpected error")
        return problem_response(body, exc_info=True)


__all__ = [
    "APIError",
    "Forbidden",
    "NotFound",
    "PreconditionFailed",
    "ServiceUnavailable",
    "Unauthorized",
    "init_app",
    "problem",
    "problem_response",
]
