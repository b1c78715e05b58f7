"""Environment-based configuration using pydantic-settings.

Example:
    >>> from fallible.config import get_settings
    >>> get_settings().capture_traceback
    False

    # Or with environment variables:
    # FALLIBLE_CAPTURE_TRACEBACK=true
    # FALLIBLE_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class FallibleSettings(BaseSettings):
    """Settings for the exception-to-Result boundary.

    Loaded from environment variables with the FALLIBLE_ prefix, or a .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_default=True,
    )

    capture_traceback: bool = Field(
        default=False,
        description="Store the formatted traceback in ErrorInfo.details when converting exceptions",
    )
    classify_errors: bool = Field(
        default=True,
        description="Assign an ErrorCode to converted exceptions by name/message pattern",
    )
    log_level: LogLevel = "WARNING"

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


@lru_cache(maxsize=1)
def get_settings() -> FallibleSettings:
    """Get the global settings instance (cached)."""
    return FallibleSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()


def configure_logging(level: LogLevel | None = None) -> logging.Logger:
    """Set the level of the "fallible" logger (from settings when level is None).

    Handlers are left to the application; the package only installs a NullHandler.
    """
    log = logging.getLogger("fallible")
    log.setLevel(level or get_settings().log_level)
    return log
