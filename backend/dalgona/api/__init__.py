"""HTTP delivery layer: mounts every API version under ``API_BASE_PREFIX``."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def join_prefix(*parts: str) -> str:
    """``join_prefix("/api/", "v1", "")`` -> ``"/api/v1"``."""
    segments = [p.strip("/") for p in parts if p and p.strip("/")]
    return "/" + "/".join(segments)


def mount(app: Flask, version_prefix: str, registry: Iterable[tuple[Blueprint, str]]) -> None:
    """Register each ``(blueprint, sub_prefix)`` below ``version_prefix``."""
    for blueprint, sub_prefix in registry:
        app.register_blueprint(blueprint, url_prefix=join_prefix(version_prefix, sub_prefix))


def init_app(app: Flask) -> None:
    from dalgona.api import v1

    mount(app, join_prefix(app.config.get("API_BASE_PREFIX", "/api"), v1.API_VERSION), v1.REGISTRY)


__all__ = ["init_app", "join_prefix", "mount"]
