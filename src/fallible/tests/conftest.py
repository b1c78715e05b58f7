"""Shared fixtures for fallible tests."""

from pathlib import Path

import pytest

from fallible.config import clear_settings_cache


@pytest.fixture(autouse=True)
def fresh_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> object:
    """Isolate each test from FALLIBLE_* variables, stray .env files and the settings cache."""
    for var in ("FALLIBLE_CAPTURE_TRACEBACK", "FALLIBLE_CLASSIFY_ERRORS", "FALLIBLE_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    clear_settings_cache()
    yield
    clear_settings_cache()
