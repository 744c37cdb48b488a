"""Version 1 of the diary API."""

from __future__ import annotations

from flask import Blueprint

from .auth import bp as auth_bp
from .diary import bp as diary_bp
from .health import bp as health_bp
from .mypage import bp as mypage_bp

API_VERSION = "v1"

# (blueprint, path below /api/v1)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),
    (auth_bp, "/auth"),
    (diary_bp, "/diary"),
    (mypage_bp, "/mypage"),
]
