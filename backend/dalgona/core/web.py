"""
WSGI-level wiring: reverse-proxy headers and CORS for the diary web client.

Settings
--------
PROXY_FIX_HOPS : int
    Number of trusted proxies in front of the app; ``0`` disables
    :class:`~werkzeug.middleware.proxy_fix.ProxyFix`.
CORS_ORIGINS : str
    Comma-separated origins. Blank or ``*`` allows any origin without
    credentials.
CORS_MAX_AGE : int
    Preflight cache lifetime in seconds.
"""

from __future__ import annotations

from flask import Flask
from flask_cors import CORS
from werkzeug.middleware.proxy_fix import ProxyFix

# Clients send If-Match on PATCH and read back ETag and the request id.
CORS_ALLOW_HEADERS = ["Authorization", "Content-Type", "If-Match", "X-Request-ID"]
CORS_EXPOSE_HEADERS = ["ETag", "X-Request-ID"]


def parse_origins(raw: str | None) -> list[str] | str:
    """Return the origin list, or ``"*"`` when any origin is allowed."""
    origins = [o.strip().rstrip("/") for o in (raw or "").split(",") if o.strip()]
    if not origins or "*" in origins:
        return "*"
    return origins


def init_proxy(app: Flask) -> None:
    hops = int(app.config.get("PROXY_FIX_HOPS", 1))
    if hops > 0:
        app.wsgi_app = ProxyFix(  # type: ignore[method-assign]
            app.wsgi_app, x_for=hops, x_proto=hops, x_host=hops, x_prefix=hops
        )


def init_cors(app: Flask) -> None:
    origins = parse_origins(app.config.get("CORS_ORIGINS"))
    CORS(
        app,
        resources={r"/api/*": {"origins": origins}},
        supports_credentials=origins != "*",
        allow_headers=CORS_ALLOW_HEADERS,
        expose_headers=CORS_EXPOSE_HEADERS,
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )


__all__ = ["init_cors", "init_proxy", "parse_origins"]
