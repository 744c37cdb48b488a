"""Tests for environment-driven configuration helpers."""

from __future__ import annotations

import pytest

from dalgona.core.config import (
    ENV_VAR,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
)


@pytest.mark.parametrize("raw,expected", [("1", True), ("Yes", True), ("on", True), ("0", False), ("nah", False)])
def test_env_bool(monkeypatch, raw, expected):
    monkeypatch.setenv("DALGONA_FLAG", raw)
    assert env_bool("DALGONA_FLAG") is expected


def test_env_bool_default(monkeypatch):
    monkeypatch.delenv("DALGONA_FLAG", raising=False)
    assert env_bool("DALGONA_FLAG", default=True) is True


@pytest.mark.parametrize("raw,expected", [("30", 30), ("", 60), ("thirty", 60)])
def test_env_int(monkeypatch, raw, expected):
    monkeypatch.setenv("DALGONA_MINUTES", raw)
    assert env_int("DALGONA_MINUTES", 60) == expected


@pytest.mark.parametrize(
    "name,expected",
    [
        ("production", ProductionConfig),
        (" Testing ", TestingConfig),
        ("development", DevelopmentConfig),
        ("staging", DevelopmentConfig),
    ],
)
def test_get_config(monkeypatch, name, expected):
    monkeypatch.setenv(ENV_VAR, name)
    assert get_config() is expected


def test_testing_config_never_uses_redis():
    assert TestingConfig.REDIS_URL is None
    assert TestingConfig.TESTING is True


def test_app_uses_unescaped_json(app):
    assert app.json.ensure_ascii is False
