"""Unit tests for src/core/config.py"""

import logging

import pytest

from src.core.config import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_TIME_CONTROL,
    Settings,
    configure_logging,
    load_settings,
)


def test_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("QUORIDOR_LOG_LEVEL", raising=False)
    monkeypatch.delenv("QUORIDOR_DEFAULT_TIME_CONTROL", raising=False)
    settings = load_settings()
    assert settings == Settings()
    assert settings.log_level == DEFAULT_LOG_LEVEL
    assert settings.default_time_control == DEFAULT_TIME_CONTROL


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("QUORIDOR_LOG_LEVEL", "debug")
    monkeypatch.setenv("QUORIDOR_DEFAULT_TIME_CONTROL", "Correspondence")
    settings = load_settings()
    assert settings.log_level == "DEBUG"
    assert settings.default_time_control == "correspondence"


def test_configure_logging() -> None:
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging(Settings(log_level="WARNING"))
        assert root.level == logging.WARNING
    finally:
        root.setLevel(previous)
