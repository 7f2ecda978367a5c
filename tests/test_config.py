"""Tests for environment driven settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from groona.config import Settings, get_settings, reset_settings_cache


def test_defaults_select_testing_cadence() -> None:
    settings = Settings(database_url="sqlite://")

    assert settings.scheduler_mode == "testing"
    assert settings.scheduler_stagger_seconds == 2.0
    assert settings.selected_task_names() == []


def test_settings_are_read_from_the_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SCHEDULER_MODE", "production")
    monkeypatch.setenv("SCHEDULER_TASKS", "generate_alarm, ,generate_alerts")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")
    reset_settings_cache()

    settings = get_settings()

    assert settings.scheduler_mode == "production"
    assert settings.selected_task_names() == ["generate_alarm", "generate_alerts"]
    assert settings.allowed_origins() == ["http://a.test", "http://b.test"]
    assert get_settings() is settings


def test_unknown_scheduler_mode_is_a_configuration_error() -> None:
    with pytest.raises(ValidationError):
        Settings(database_url="sqlite://", scheduler_mode="hourly")


def test_negative_stagger_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Settings(database_url="sqlite://", scheduler_stagger_seconds=-1)


def test_sendgrid_credentials_must_be_provided_together() -> None:
    with pytest.raises(ValidationError, match="SENDGRID_API_KEY and SENDGRID_SENDER"):
        Settings(database_url="sqlite://", sendgrid_api_key="SG.fake")


def test_missing_database_url_is_a_configuration_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DATABASE_URL", raising=False)

    with pytest.raises(ValidationError):
        Settings(_env_file=None)
