"""
Settings classes for the diary API, selected by ``APP_ENV``.

Every value can be overridden from the environment (or a ``.env`` file
next to the process); the classes only carry defaults.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Final

from dotenv import load_dotenv

ENV_VAR: Final[str] = "APP_ENV"
_TRUTHY: Final[frozenset[str]] = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Read ``name`` as a flag; ``1/true/yes/y/on`` (any case) mean ``True``."""
    raw = os.getenv(name)
    return default if raw is None else raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    """Read ``name`` as an integer; blank or malformed values give ``default``."""
    raw = (os.getenv(name) or "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


class BaseConfig:
    """
    Defaults shared by every environment.

    API
        ``API_BASE_PREFIX`` mounts the versioned blueprints (``/api/v1``).
        ``APP_VERSION`` and ``APP_COMMIT`` are echoed by the health probe.
    Auth
        ``JWT_SECRET_KEY`` signs access tokens, which live
        ``JWT_ACCESS_TOKEN_MINUTES``. With ``REDIS_URL`` set, logged-out
        tokens are denied through Redis instead of process memory.
        Sign-up and login are limited to ``AUTH_RATE_LIMIT`` per client
        address (Flask-Limiter, counters in ``RATELIMIT_STORAGE_URI``).
    Storage
        ``DATABASE_URL`` feeds ``SQLALCHEMY_DATABASE_URI``.
    Sign-up
        ``SIGNUP_NEXT_ROUTE`` is returned once account and profile exist;
        ``SIGNUP_COMPLETE_ROUTE`` is offered by the completion screen.
    Logging
        ``LOG_LEVEL`` for the root logger, ``LOG_FORMAT`` ``json`` or
        ``text``, and ``LOG_LEVELS`` for per-logger overrides.
    HTTP
        ``CORS_ORIGINS`` is a comma-separated allow list. ``PROXY_FIX_HOPS``
        counts trusted reverse proxies; ``0`` disables ProxyFix.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")
    APP_COMMIT = os.getenv("APP_COMMIT", "unknown")

    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", "CHANGE_ME_JWT")
    JWT_ACCESS_TOKEN_MINUTES = env_int("JWT_ACCESS_TOKEN_MINUTES", 60)
    REDIS_URL = os.getenv("REDIS_URL") or None
    AUTH_RATE_LIMIT = os.getenv("AUTH_RATE_LIMIT", "5 per minute")
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI") or REDIS_URL or "memory://"

    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dalgona.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    SIGNUP_NEXT_ROUTE = os.getenv("SIGNUP_NEXT_ROUTE", "/sign-up/profile")
    SIGNUP_COMPLETE_ROUTE = os.getenv("SIGNUP_COMPLETE_ROUTE", "/main")

    # Korean text goes out as-is, keys in declaration order
    JSON_AS_ASCII = False
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT = os.getenv("LOG_FORMAT", "json")
    LOG_LEVELS = {"sqlalchemy.engine": "WARNING", "werkzeug": "WARNING"}

    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:3000")
    CORS_MAX_AGE = env_int("CORS_MAX_AGE", 600)
    PROXY_FIX_HOPS = env_int("PROXY_FIX_HOPS", 1)

    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    DEBUG = env_bool("FLASK_DEBUG", True)
    LOG_FORMAT = os.getenv("LOG_FORMAT", "text")
    PROXY_FIX_HOPS = env_int("PROXY_FIX_HOPS", 0)


class TestingConfig(BaseConfig):
    """In-memory SQLite unless ``TEST_DATABASE_URL`` is set; Redis and rate limiting are off."""

    TESTING = True
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    REDIS_URL = None
    RATELIMIT_ENABLED = False
    RATELIMIT_STORAGE_URI = "memory://"
    PROXY_FIX_HOPS = 0


class ProductionConfig(BaseConfig):
    SQLALCHEMY_ECHO = False


CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Config class named by ``APP_ENV``; development when unset or unknown."""
    return CONFIG_MAP.get(os.getenv(ENV_VAR, "development").strip().lower(), DevelopmentConfig)
