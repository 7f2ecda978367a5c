"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the notification store",
        min_length=1,
    )
    app_timezone: str | None = Field(
        default=None,
        description="IANA timezone (or UTC+HH:MM offset) used to compute local midnight",
    )
    scheduler_mode: Literal["testing", "production"] = Field(
        default="testing",
        description="Tick cadence: 'testing' fires every minute, 'production' every 8 hours",
    )
    scheduler_stagger_seconds: float = Field(
        default=2.0,
        ge=0,
        description="Delay added between consecutive task launches within a tick",
    )
    scheduler_tasks: str | None = Field(
        default=None,
        description="Comma separated subset of alert task names to run (all tasks when empty)",
    )
    log_level: str = Field(default="INFO", description="Root logging level for scripts")
    frontend_url: str = Field(
        default="http://localhost:3000",
        description="Base URL of the front-end used to build links inside alerts",
    )
    cors_origins: str = Field(
        default="http://localhost:3000",
        description="Comma separated list of origins allowed to call the API",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    openai_api_key: str | None = Field(
        default=None, description="API key used for task detail generation"
    )
    openai_base_url: str | None = Field(default=None)
    openai_model: str = Field(default="gpt-4.1-mini")
    openai_temperature: float = Field(default=0.2, ge=0, le=2)
    openai_max_output_tokens: int | None = Field(default=None)

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    def selected_task_names(self) -> list[str]:
        """Return the task names listed in ``SCHEDULER_TASKS`` in order."""

        if not self.scheduler_tasks:
            return []
        return [name.strip() for name in self.scheduler_tasks.split(",") if name.strip()]

    def allowed_origins(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
