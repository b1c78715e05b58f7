"""Tests for environment configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from fallible import FallibleSettings, clear_settings_cache, configure_logging, get_settings


def test_defaults() -> None:
    settings = get_settings()

    assert settings.capture_traceback is False
    assert settings.classify_errors is True
    assert settings.log_level == "WARNING"


def test_cached_until_cleared(monkeypatch: pytest.MonkeyPatch) -> None:
    first = get_settings()
    monkeypatch.setenv("FALLIBLE_CAPTURE_TRACEBACK", "1")

    assert get_settings() is first
    clear_settings_cache()
    assert get_settings().capture_traceback is True


def test_log_level_normalized(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLIBLE_LOG_LEVEL", "debug")
    assert FallibleSettings().log_level == "DEBUG"


def test_invalid_log_level_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("FALLIBLE_LOG_LEVEL", "chatty")
    with pytest.raises(ValidationError):
        FallibleSettings()


def test_env_file(tmp_path: Path) -> None:
    (tmp_path / ".env").write_text("FALLIBLE_CLASSIFY_ERRORS=false\n", encoding="utf-8")
    assert FallibleSettings().classify_errors is False


def test_configure_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    log = logging.getLogger("fallible")
    monkeypatch.setattr(log, "level", log.level)
    monkeypatch.setenv("FALLIBLE_LOG_LEVEL", "INFO")

    assert configure_logging() is log
    assert log.level == logging.INFO
    configure_logging("ERROR")
    assert log.level == logging.ERROR


def test_package_installs_null_handler() -> None:
    assert any(isinstance(h, logging.NullHandler) for h in logging.getLogger("fallible").handlers)
