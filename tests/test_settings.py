from __future__ import annotations

import importlib

import pytest

from config import get_settings_module


@pytest.mark.parametrize("module_name", ["config.development", "config.production", "config.testing"])
def test_overtime_rule_ignores_environment(monkeypatch, module_name):
    monkeypatch.setenv("OVERTIME_THRESHOLD_HOURS", "30")
    monkeypatch.setenv("OVERTIME_MULTIPLIER", "2")

    settings = importlib.reload(importlib.import_module(module_name))

    assert settings.OVERTIME_THRESHOLD_HOURS == 40
    assert settings.OVERTIME_MULTIPLIER == 1.5


@pytest.mark.parametrize(
    "env, expected",
    [("production", "config.production"), ("test", "config.testing"), ("", "config.development")],
)
def test_settings_module_follows_app_env(monkeypatch, env, expected):
    monkeypatch.setenv("APP_ENV", env)

    assert get_settings_module() == expected
