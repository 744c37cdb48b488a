"""Entity tags for diary entries (optimistic concurrency on PATCH)."""

from __future__ import annotations

import hashlib
from datetime import date, datetime
from typing import Any

from flask import Response

# ``updated_at`` has one-second resolution on SQLite.
ETAG_FIELDS = ("id", "updated_at", "date", "emotion", "title", "type", "contents", "draw")


def _stamp(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def generate_etag(entity: Any) -> str | None:
    """Fingerprint the user-visible state of ``entity``; ``None`` without an id."""

    if getattr(entity, "id", None) is None:
        return None
    raw = "\x1f".join(_stamp(getattr(entity, name, None)) for name in ETAG_FIELDS)
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()[:32]


def _parse_tags(header: str) -> list[str]:
    tags = []
    for token in header.split(","):
        token = token.strip()
        if token.startswith("W/"):
            token = token[2:]
        token = token.strip('"')
        if token:
            tags.append(token)
    return tags


def verify_etag(entity: Any, provided: str | None) -> bool:
    """
    Check an ``If-Match`` header against ``entity``.

    Accepts a list of tags and the ``*`` wildcard; weak tags compare like
    strong ones.
    """

    if not provided:
        return False
    tags = _parse_tags(provided)
    if "*" in tags:
        return True
    current = generate_etag(entity)
    return current is not None and current in tags


def set_response_etag(response: Response, entity: Any) -> Response:
    value = generate_etag(entity)
    if value is not None:
        response.set_etag(value)
    return response
