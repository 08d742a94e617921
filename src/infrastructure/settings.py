"""Infrastructure-level configuration helpers for background workers."""

from __future__ import annotations

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _DatabaseSettings(BaseSettings):
    mongo_uri: str = Field(
        default="mongodb://localhost:27017/breeding_calendar",
        validation_alias=AliasChoices("DB_MONGO_URI", "MONGO_URI"),
        description="MongoDB connection URI",
    )
    database_name: str = Field(
        default="breeding_calendar",
        validation_alias=AliasChoices("DB_DATABASE_NAME", "DATABASE_NAME"),
        description="MongoDB database name",
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class _ReminderSettings(BaseSettings):
    schedule_hour: int = Field(
        default=5,
        ge=0,
        le=23,
        validation_alias=AliasChoices(
            "CELERY_REMINDER_SCHEDULE_HOUR", "REMINDER_SCHEDULE_HOUR"
        ),
        description="UTC hour of the daily reminder regeneration",
    )
    default_interval_days: int = Field(
        default=180,
        gt=0,
        validation_alias=AliasChoices(
            "FORECAST_DEFAULT_INTERVAL_DAYS", "DEFAULT_INTERVAL_DAYS"
        ),
        description="Heat interval used when an animal has none",
    )

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")


class InfrastructureSettings(BaseSettings):
    database: _DatabaseSettings = Field(default_factory=_DatabaseSettings)
    reminders: _ReminderSettings = Field(default_factory=_ReminderSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )


_settings: InfrastructureSettings | None = None


def get_settings() -> InfrastructureSettings:
    """Lazy-load infrastructure settings for Celery workers."""
    global _settings
    if _settings is None:
        _settings = InfrastructureSettings()
    return _settings
