"""Application configuration settings."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./notifications.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    service_name: str = Field(
        default="notification-service",
        description="Name reported by the health endpoint",
        min_length=1,
    )
    service_version: str = Field(
        default="1.0.0",
        description="Version reported by the health endpoint",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used to stamp notification creation times",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    log_json: bool = Field(
        default=True, description="Emit log records as JSON lines on stdout"
    )
    api_prefix: str = Field(
        default="/api", description="Path prefix of the REST surface"
    )
    notification_service_url: str = Field(
        default="http://localhost:6432/api",
        description="Base URL sibling services use to reach the notification API",
        min_length=1,
    )
    client_timeout_seconds: float = Field(
        default=5.0,
        description="Timeout applied to outbound notification API calls",
        gt=0,
    )

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"LOG_LEVEL must be a logging level name, got '{value}'")
        return normalized

    @field_validator("api_prefix")
    @classmethod
    def _normalize_api_prefix(cls, value: str) -> str:
        stripped = value.strip().strip("/")
        return f"/{stripped}" if stripped else ""


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
