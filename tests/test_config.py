"""Tests configuration — variables d'environnement."""
from pathlib import Path

import pytest

from layout_pipeline.config import env_flag, load_settings

ENV_VARS = ("LAYOUT_APP_DIR", "LAYOUT_AREA", "LAYOUT_CACHE_ENABLED", "LAYOUT_CACHE_TTL", "LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = load_settings()
    assert settings.app_dir == Path("app")
    assert settings.area == "frontend"
    assert settings.layout_cache_enabled is False
    assert settings.layout_cache_ttl == 3600
    assert settings.log_level == "INFO"


def test_overrides(clean_env, tmp_path):
    clean_env.setenv("LAYOUT_APP_DIR", str(tmp_path))
    clean_env.setenv("LAYOUT_AREA", "adminhtml")
    clean_env.setenv("LAYOUT_CACHE_ENABLED", "yes")
    clean_env.setenv("LAYOUT_CACHE_TTL", "60")
    clean_env.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.app_dir == tmp_path
    assert settings.area == "adminhtml"
    assert settings.layout_cache_enabled is True
    assert settings.layout_cache_ttl == 60
    assert settings.log_level == "DEBUG"


@pytest.mark.parametrize("value, expected", [
    ("1", True), ("true", True), (" ON ", True), ("Yes", True),
    ("0", False), ("false", False), ("", False), ("nope", False),
])
def test_env_flag(value, expected):
    assert env_flag(value) is expected


def test_env_flag_default():
    assert env_flag(None) is False
    assert env_flag(None, True) is True
