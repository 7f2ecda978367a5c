"""Shared fixtures: an isolated in-memory database and alert task helpers."""

from __future__ import annotations

import os
from datetime import datetime
from typing import Any

import pytest

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["APP_TIMEZONE"] = "UTC"
for _name in ("SENDGRID_API_KEY", "SENDGRID_SENDER", "OPENAI_API_KEY", "SCHEDULER_TASKS"):
    os.environ.pop(_name, None)

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from groona.application.scheduler import TaskContext
from groona.config import reset_settings_cache
from groona.infrastructure.database import Base, initialize_database
from groona.infrastructure.models import (
    ProjectModel,
    SprintVelocityModel,
    TaskModel,
    TimesheetModel,
    UserModel,
)
from groona.utils import get_app_timezone


@pytest.fixture(autouse=True)
def _fresh_settings():
    reset_settings_cache()
    get_app_timezone.cache_clear()
    yield
    reset_settings_cache()
    get_app_timezone.cache_clear()


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    initialize_database(engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def session(session_factory):
    db = session_factory()
    yield db
    db.close()


class RecordingMailer:
    """Collect emails instead of sending them."""

    def __init__(self, result: bool = True) -> None:
        self.result = result
        self.sent: list[tuple[str, str, str]] = []

    def __call__(self, subject: str, html_content: str, recipient: str) -> bool:
        self.sent.append((subject, html_content, recipient))
        return self.result

    def recipients(self) -> list[str]:
        return [recipient for _, _, recipient in self.sent]


@pytest.fixture()
def mailer() -> RecordingMailer:
    return RecordingMailer()


@pytest.fixture()
def make_context(session_factory, mailer):
    """Return a factory building a :class:`TaskContext` frozen at ``now``."""

    def _make(now: datetime) -> TaskContext:
        return TaskContext(
            session_factory=session_factory,
            clock=lambda: now,
            send_email=mailer,
            frontend_url="https://app.groona.test",
        )

    return _make


@pytest.fixture()
def add_user(session):
    def _add(email: str, **values: Any) -> UserModel:
        model = UserModel(email=email, full_name=values.pop("full_name", email.split("@")[0].title()), **values)
        session.add(model)
        session.commit()
        session.refresh(model)
        return model

    return _add


@pytest.fixture()
def add_project(session):
    def _add(name: str, **values: Any) -> ProjectModel:
        model = ProjectModel(name=name, **values)
        session.add(model)
        session.commit()
        session.refresh(model)
        return model

    return _add


@pytest.fixture()
def add_task(session):
    def _add(title: str, **values: Any) -> TaskModel:
        model = TaskModel(title=title, **values)
        session.add(model)
        session.commit()
        session.refresh(model)
        return model

    return _add


@pytest.fixture()
def add_timesheet(session):
    def _add(email: str, day: datetime, **values: Any) -> TimesheetModel:
        model = TimesheetModel(user_email=email, timesheet_date=day, **values)
        session.add(model)
        session.commit()
        return model

    return _add


@pytest.fixture()
def add_velocity(session):
    def _add(project_id: int, sprint_id: str, accuracy: float, **values: Any) -> SprintVelocityModel:
        model = SprintVelocityModel(
            project_id=project_id,
            sprint_id=sprint_id,
            sprint_name=values.pop("sprint_name", sprint_id.upper()),
            accuracy=accuracy,
            **values,
        )
        session.add(model)
        session.commit()
        return model

    return _add
