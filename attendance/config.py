"""
Configuration Module
====================

Loads application settings from environment variables and the ``.env``
file: log level, default manual year and CLI output directory.
"""

import logging
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    """
    Application settings, populated from the environment by Pydantic.

    Attributes:
        ATTENDANCE_LOG_LEVEL: level name for the ``attendance`` logger
        ATTENDANCE_MANUAL_YEAR: year forced onto every parse when set
        ATTENDANCE_OUTPUT_DIR: default directory for CLI JSON output
    """
    ATTENDANCE_LOG_LEVEL: str = "INFO"
    ATTENDANCE_MANUAL_YEAR: Optional[int] = None
    ATTENDANCE_OUTPUT_DIR: str = "."

    @field_validator("ATTENDANCE_LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = (v or "").strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @field_validator("ATTENDANCE_MANUAL_YEAR")
    @classmethod
    def validate_manual_year(cls, v: Optional[int]) -> Optional[int]:
        if v is None:
            return v
        if not 1900 <= v <= 9999:
            raise ValueError(f"ATTENDANCE_MANUAL_YEAR out of range: {v}")
        return v

    class Config:
        env_file = ".env"
        case_sensitive = False


# Module-level singleton so .env is parsed once
_settings_instance = None


def get_settings() -> Settings:
    """Return the cached :class:`Settings` instance, creating it on first call."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def reset_settings() -> None:
    """Drop the cached instance so the next :func:`get_settings` re-reads the environment."""
    global _settings_instance
    _settings_instance = None
