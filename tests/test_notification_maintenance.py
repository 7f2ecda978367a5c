"""Tests for the notification maintenance and listing use cases."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from groona.application.use_cases.notifications import (
    delete_open_notifications,
    list_notifications,
    mark_notifications_read,
    raise_alert,
    reset_todays_alarms,
)
from groona.domain.entities import (
    LOW_WORKLOAD_ALERT,
    NOTIFICATION_STATUS_APPEALED,
    NOTIFICATION_STATUS_OPEN,
    NOTIFICATION_STATUS_RESOLVED,
    TASK_OVERDUE_ALERT,
    TIMESHEET_LOCKOUT_ALARM,
    TIMESHEET_MISSING_ALERT,
    Notification,
)
from groona.infrastructure.repositories import NotificationRepository

NOW = datetime(2024, 5, 8, 14, 30, tzinfo=timezone.utc)


def _store(session, type=TIMESHEET_MISSING_ALERT, status=NOTIFICATION_STATUS_OPEN, **values):
    values.setdefault("recipient_email", "ana@example.com")
    values.setdefault("created_date", NOW)
    return NotificationRepository(session).create(
        Notification(id=None, type=type, status=status, **values)
    )


def test_delete_open_notifications_removes_only_open_ones(session) -> None:
    _store(session)
    _store(session, type=TASK_OVERDUE_ALERT)
    resolved = _store(session, status=NOTIFICATION_STATUS_RESOLVED)
    appealed = _store(session, status=NOTIFICATION_STATUS_APPEALED)

    assert delete_open_notifications(session) == 2

    remaining = NotificationRepository(session).search(limit=None)
    assert sorted(n.id for n in remaining) == sorted([resolved.id, appealed.id])


def test_delete_open_notifications_on_empty_store(session) -> None:
    assert delete_open_notifications(session) == 0


def test_reset_todays_alarms_only_targets_today_and_timesheet_types(session) -> None:
    midnight = datetime(2024, 5, 8, tzinfo=timezone.utc)
    _store(session, type=TIMESHEET_LOCKOUT_ALARM, created_date=midnight)
    _store(session, type=TIMESHEET_MISSING_ALERT, created_date=NOW - timedelta(hours=1))
    _store(session, type=TIMESHEET_MISSING_ALERT, created_date=NOW, status=NOTIFICATION_STATUS_RESOLVED)
    yesterday = _store(
        session, type=TIMESHEET_LOCKOUT_ALARM, created_date=midnight - timedelta(seconds=1)
    )
    other_type = _store(session, type=LOW_WORKLOAD_ALERT, created_date=NOW)

    counts = reset_todays_alarms(session, now=NOW)

    assert counts == {TIMESHEET_LOCKOUT_ALARM: 1, TIMESHEET_MISSING_ALERT: 2}
    remaining = {n.id for n in NotificationRepository(session).search(limit=None)}
    assert remaining == {yesterday.id, other_type.id}


def test_raise_alert_skips_when_an_open_duplicate_exists(session) -> None:
    first = raise_alert(
        session,
        Notification(id=None, type=TASK_OVERDUE_ALERT, recipient_email="ana@example.com", entity_id="7"),
    )
    duplicate = raise_alert(
        session,
        Notification(id=None, type=TASK_OVERDUE_ALERT, recipient_email="ana@example.com", entity_id="7"),
    )
    other_task = raise_alert(
        session,
        Notification(id=None, type=TASK_OVERDUE_ALERT, recipient_email="ana@example.com", entity_id="8"),
    )

    assert first is not None
    assert duplicate is None
    assert other_task is not None


def test_raise_alert_creates_again_once_the_previous_one_is_resolved(session) -> None:
    _store(session, type=TASK_OVERDUE_ALERT, entity_id="7", status=NOTIFICATION_STATUS_RESOLVED)

    created = raise_alert(
        session,
        Notification(id=None, type=TASK_OVERDUE_ALERT, recipient_email="ana@example.com", entity_id="7"),
    )

    assert created is not None
    assert created.status == NOTIFICATION_STATUS_OPEN


def test_list_notifications_filters_and_orders_newest_first(session) -> None:
    older = _store(session, created_date=NOW - timedelta(hours=2))
    newer = _store(session, created_date=NOW)
    _store(session, recipient_email="bob@example.com")
    _store(session, read=True)

    result = list_notifications(
        session, recipient_email="ana@example.com", unread_only=True, limit=10
    )

    assert [n.id for n in result] == [newer.id, older.id]


@pytest.mark.parametrize("limit", [0, 201])
def test_list_notifications_rejects_out_of_range_limits(session, limit) -> None:
    with pytest.raises(ValueError):
        list_notifications(session, limit=limit)


def test_mark_notifications_read_counts_distinct_ids(session) -> None:
    first = _store(session)
    second = _store(session)

    assert mark_notifications_read(session, [first.id, second.id, first.id]) == 2
    assert NotificationRepository(session).get(first.id).read is True


def test_mark_notifications_read_requires_ids(session) -> None:
    with pytest.raises(ValueError):
        mark_notifications_read(session, [])
