"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./sakhi.db",
        description="Database connection URL used by SQLAlchemy for the snapshot storage",
        min_length=1,
    )
    app_timezone: str = Field(
        default="Asia/Kolkata",
        description="IANA timezone (or UTC+HH:MM offset) used for notification timestamps",
    )
    notification_capacity: int = Field(
        default=20,
        description="Maximum number of notifications retained, newest first",
        gt=0,
    )
    notification_storage_key: str = Field(
        default="notifications",
        description="Storage slot that holds the serialized notification snapshot",
        min_length=1,
    )
    notification_preview_size: int = Field(
        default=5,
        description="Number of notifications shown by the bell before expanding",
        gt=0,
    )
    stock_low_threshold: int = Field(
        default=10,
        description="Inventory quantity at or below which a stock_low notification is raised",
        ge=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
        description="Origins allowed to call the API from the dashboard",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
