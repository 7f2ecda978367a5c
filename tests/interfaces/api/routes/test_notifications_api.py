"""Integration tests for the notification and task details endpoints."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from groona.domain.entities import (
    LOW_WORKLOAD_ALERT,
    NOTIFICATION_STATUS_RESOLVED,
    TASK_OVERDUE_ALERT,
    Notification,
    TaskDetails,
)
from groona.infrastructure.database import get_db
from groona.infrastructure.openai_client import OpenAIServiceError
from groona.infrastructure.repositories import NotificationRepository
from groona.interfaces.api.dependencies import get_task_detail_service

NOW = datetime(2024, 5, 8, 14, 30, tzinfo=timezone.utc)


@pytest.fixture()
def client(session_factory):
    """Return a test client whose requests use the in-memory database."""

    from main import create_app

    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app = create_app()
    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def _store(session, **values):
    values.setdefault("type", TASK_OVERDUE_ALERT)
    values.setdefault("recipient_email", "ana@example.com")
    values.setdefault("created_date", NOW)
    return NotificationRepository(session).create(Notification(id=None, **values))


def test_root_reports_service_health(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_list_notifications_applies_filters(client: TestClient, session) -> None:
    older = _store(session, created_date=NOW - timedelta(hours=1))
    newer = _store(session, title="Task Overdue (3 Days)")
    _store(session, type=LOW_WORKLOAD_ALERT)
    _store(session, status=NOTIFICATION_STATUS_RESOLVED)
    _store(session, recipient_email="bob@example.com")

    response = client.get(
        "/notifications",
        params={"recipient_email": "ana@example.com", "type": TASK_OVERDUE_ALERT, "status": "OPEN"},
    )

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body] == [newer.id, older.id]
    assert body[0]["title"] == "Task Overdue (3 Days)"
    assert body[0]["read"] is False


def test_list_notifications_validates_limit(client: TestClient) -> None:
    assert client.get("/notifications", params={"limit": 0}).status_code == 422
    assert client.get("/notifications", params={"limit": 201}).status_code == 422


def test_mark_notifications_read(client: TestClient, session) -> None:
    first = _store(session)
    second = _store(session)

    response = client.post("/notifications/read", json={"ids": [first.id, second.id, first.id]})

    assert response.status_code == 200
    assert response.json() == {"updated": 2}
    unread = client.get("/notifications", params={"unread_only": True}).json()
    assert unread == []


def test_mark_notifications_read_requires_ids(client: TestClient) -> None:
    assert client.post("/notifications/read", json={"ids": []}).status_code == 422


class StubGenerator:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    def generate(self, title, *, project_name=None, notes=None):
        if self.error is not None:
            raise self.error
        return self.result


def test_task_details_returns_generated_fields(client: TestClient) -> None:
    details = TaskDetails(
        description="Build the login page.",
        acceptance_criteria=["Users can sign in"],
        subtasks=["Form"],
        estimated_hours=6.0,
        priority="high",
    )
    client.app.dependency_overrides[get_task_detail_service] = lambda: StubGenerator(details)

    response = client.post("/tasks/details", json={"title": "Login page"})

    assert response.status_code == 200
    assert response.json() == {
        "description": "Build the login page.",
        "acceptance_criteria": ["Users can sign in"],
        "subtasks": ["Form"],
        "estimated_hours": 6.0,
        "priority": "high",
    }


def test_task_details_maps_provider_errors_to_bad_gateway(client: TestClient) -> None:
    client.app.dependency_overrides[get_task_detail_service] = lambda: StubGenerator(
        error=OpenAIServiceError("The OpenAI answer is not valid JSON.")
    )

    response = client.post("/tasks/details", json={"title": "Login page"})

    assert response.status_code == 502


def test_task_details_unavailable_without_api_key(client: TestClient) -> None:
    response = client.post("/tasks/details", json={"title": "Login page"})

    assert response.status_code == 503
