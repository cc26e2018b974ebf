"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from config.config import ConfigError, Settings, load_settings
from interaction.failures import FailureKind
from interaction.policy import RetryPolicy

_VARS = ("UI_MAX_WAIT", "UI_POLL_INTERVAL", "UI_ACTION_TIMEOUT", "UI_LOG_LEVEL", "BASE_URL", "GEMINI_API_KEY")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = load_settings()
    assert settings == Settings()
    assert settings.base_url is None


def test_values_from_environment(monkeypatch):
    monkeypatch.setenv("UI_MAX_WAIT", "30")
    monkeypatch.setenv("UI_POLL_INTERVAL", "0.25")
    monkeypatch.setenv("UI_LOG_LEVEL", "debug")
    monkeypatch.setenv("BASE_URL", "https://localhost:5001")

    settings = load_settings()
    assert settings.max_wait == 30.0
    assert settings.poll_interval == 0.25
    assert settings.log_level == "DEBUG"
    assert settings.base_url == "https://localhost:5001"


@pytest.mark.parametrize(
    "name, raw",
    [
        ("UI_MAX_WAIT", "soon"),
        ("UI_MAX_WAIT", "-1"),
        ("UI_POLL_INTERVAL", "0"),
        ("UI_ACTION_TIMEOUT", "0"),
    ],
)
def test_invalid_durations(monkeypatch, name, raw):
    monkeypatch.setenv(name, raw)
    with pytest.raises(ConfigError, match=name):
        load_settings()


def test_zero_max_wait_is_allowed(monkeypatch):
    monkeypatch.setenv("UI_MAX_WAIT", "0")
    assert RetryPolicy.from_settings(load_settings()).max_wait == 0.0


def test_unknown_log_level(monkeypatch):
    monkeypatch.setenv("UI_LOG_LEVEL", "chatty")
    with pytest.raises(ConfigError, match="UI_LOG_LEVEL"):
        load_settings()


def test_policy_from_settings():
    policy = RetryPolicy.from_settings(Settings(max_wait=3.0, poll_interval=0.1))
    assert policy.max_wait == 3.0
    assert policy.poll_interval == 0.1
    assert policy.retryable_kinds == {FailureKind.STALE, FailureKind.NOT_INTERACTABLE, FailureKind.OBSCURED}
    assert not policy.is_retryable(FailureKind.SESSION)
