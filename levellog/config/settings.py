"""Logger settings loaded from environment variables."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggerSettings(BaseSettings):
    """Process-wide logger configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
    )

    log_level: str | None = Field(default=None, alias="LOG_LEVEL")


def get_settings() -> LoggerSettings:
    """Return logger settings."""

    return LoggerSettings()
