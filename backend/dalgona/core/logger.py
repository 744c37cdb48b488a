"""
Process logging for the diary API.

One stdout handler on the root logger, rendered either as JSON lines
(``LOG_FORMAT = "json"``, the default) or as short text lines for local
development. Every record carries the ``request_id`` of the request it was
emitted in, and each finished request produces one ``dalgona.access`` line.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

ACCESS_LOGGER = "dalgona.access"

# ``extra=`` keys lifted onto the rendered record.
CONTEXT_FIELDS = (
    "account_id",
    "state",
    "collection",
    "endpoint",
    "elapsed_ms",
    "method",
    "path",
    "status",
)

TEXT_FORMAT = "%(asctime)s %(levelname)-7s [%(request_id)s] %(name)s: %(message)s"


def _context(record: logging.LogRecord) -> dict[str, Any]:
    return {key: getattr(record, key) for key in CONTEXT_FIELDS if hasattr(record, key)}


class JSONFormatter(logging.Formatter):
    """One JSON object per record; Korean text is written as-is."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(_context(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str, ensure_ascii=False)


class TextFormatter(logging.Formatter):
    """Readable single-line records with the context fields appended."""

    def __init__(self) -> None:
        super().__init__(TEXT_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        context = _context(record)
        if context:
            line += " " + " ".join(f"{k}={v}" for k, v in context.items())
        return line


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on records (``"-"`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else "-"
        return True


def ensure_request_id() -> str:
    """
    Return the id of the current request.

    Taken from ``X-Request-ID`` or ``X-Correlation-ID`` when the caller sent
    one, generated otherwise, and cached on :data:`flask.g`. Outside a request
    a fresh id is returned on every call.
    """

    if not has_request_context():
        return str(uuid4())
    cached = g.get("request_id")
    if cached:
        return cached
    incoming = next(
        (request.headers[h] for h in CORRELATION_HEADERS if request.headers.get(h)), None
    )
    g.request_id = incoming or str(uuid4())
    return g.request_id


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(level.strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(
    level: str | int = "INFO",
    *,
    fmt: str = "json",
    overrides: Mapping[str, str | int] | None = None,
) -> None:
    """
    Install the stdout handler on the root logger.

    :param level: Root level name or number; unknown names fall back to INFO.
    :param fmt: ``"json"`` or ``"text"``.
    :param overrides: Per-logger levels, e.g. ``{"sqlalchemy.engine": "WARNING"}``.
    """

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(TextFormatter() if fmt == "text" else JSONFormatter())
    handler.addFilter(RequestIdFilter())

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))

    for name, value in (overrides or {}).items():
        logging.getLogger(name).setLevel(_resolve_level(value))


def init_app(app: Flask) -> None:
    """Seed the request id, time the request and write the access line."""

    app.logger.addFilter(RequestIdFilter())
    access_log = logging.getLogger(ACCESS_LOGGER)

    @app.before_request
    def _start_request() -> None:
        # ``g`` outlives the request when the app context was pushed beforehand.
        g.pop("request_id", None)
        g.request_started = time.perf_counter()
        ensure_request_id()

    @app.after_request
    def _finish_request(response: Response) -> Response:
        response.headers.setdefault(REQUEST_ID_HEADER, ensure_request_id())
        started = g.pop("request_started", None)
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2) if started else None
        access_log.info(
            "%s %s %s",
            request.method,
            request.path,
            response.status_code,
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "elapsed_ms": elapsed_ms,
            },
        )
        return response


__all__ = [
    "configure_logging",
    "ensure_request_id",
    "init_app",
    "JSONFormatter",
    "TextFormatter",
]
