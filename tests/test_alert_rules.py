"""Tests for the alert generation tasks run by the scheduler."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from groona.application.use_cases.alerts import (
    generate_alarm,
    generate_alerts,
    generate_low_velocity_alert,
    generate_low_workload_alert,
    generate_multiple_overdue_alarm,
    generate_rework_alarm,
    generate_task_overdue,
)
from groona.application.use_cases.alerts.rework import rework_level
from groona.application.use_cases.alerts.timesheets import first_incomplete_day
from groona.domain.entities import (
    HIGH_REWORK_ALARM,
    LOW_WORKLOAD_ALERT,
    MULTIPLE_OVERDUE_ALARM,
    NOTIFICATION_STATUS_APPEALED,
    NOTIFICATION_STATUS_RESOLVED,
    PM_CONSISTENT_VELOCITY_DROP,
    PM_VELOCITY_DROP,
    REWORK_ALARM,
    REWORK_ALERT,
    TASK_ESCALATION_ALERT,
    TASK_OVERDUE_ALERT,
    TEAM_MEMBER_LOCKOUT_NOTICE,
    TIMESHEET_LOCKOUT_ALARM,
    TIMESHEET_MISSING_ALERT,
    Notification,
)
from groona.infrastructure.models import NotificationModel
from groona.infrastructure.repositories import (
    NotificationRepository,
    ProjectRepository,
    TimesheetRepository,
    UserRepository,
)

# Wednesday afternoon.
NOW = datetime(2024, 5, 8, 14, 30, tzinfo=timezone.utc)


def _day(day: int, hour: int = 0) -> datetime:
    return datetime(2024, 5, day, hour)


def _notifications(session, type):
    session.expire_all()
    return NotificationRepository(session).search(type=type, limit=None)


def test_generate_alarm_locks_member_and_notifies_managers(
    session, make_context, mailer, add_user, add_project, add_timesheet
) -> None:
    add_user("ana@example.com", tenant_id="t1")
    add_user("ben@example.com", tenant_id="t1")
    add_user("pm@example.com", role="project_manager", tenant_id="t1")
    add_user("boss@example.com", role="admin", tenant_id="t1")
    add_project(
        "Website",
        tenant_id="t1",
        owner_email="pm@example.com",
        team_members=[
            {"email": "ana@example.com", "role": "member"},
            {"email": "pm@example.com", "role": "project_manager"},
        ],
    )
    # Ben only misses two of the six working days in the window.
    for day in (7, 6, 4, 3):
        add_timesheet("ben@example.com", _day(day), status="submitted", total_minutes=480)

    created = generate_alarm(make_context(NOW))

    assert created == 3
    session.expire_all()
    assert UserRepository(session).get_by_email("ana@example.com").is_timesheet_locked is True
    assert UserRepository(session).get_by_email("ben@example.com").is_timesheet_locked is False

    [alarm] = _notifications(session, TIMESHEET_LOCKOUT_ALARM)
    assert alarm.recipient_email == "ana@example.com"
    assert alarm.category == "alarm"
    assert "missed 6 daily timesheets" in alarm.message
    assert len(alarm.attributes["missing_dates"]) == 6
    assert "2024-05-05" not in alarm.attributes["missing_dates"]

    notices = _notifications(session, TEAM_MEMBER_LOCKOUT_NOTICE)
    assert sorted(n.recipient_email for n in notices) == ["boss@example.com", "pm@example.com"]
    assert sorted(mailer.recipients()) == [
        "ana@example.com",
        "boss@example.com",
        "pm@example.com",
    ]


def test_generate_alarm_does_not_repeat_while_alarm_is_open(
    session, make_context, mailer, add_user
) -> None:
    add_user("ana@example.com")

    assert generate_alarm(make_context(NOW)) == 1
    assert generate_alarm(make_context(NOW + timedelta(minutes=1))) == 0

    assert len(_notifications(session, TIMESHEET_LOCKOUT_ALARM)) == 1
    assert mailer.recipients() == ["ana@example.com"]


def test_generate_alarm_does_not_repeat_while_alarm_is_appealed(
    session, make_context, mailer, add_user
) -> None:
    add_user("ana@example.com")
    assert generate_alarm(make_context(NOW)) == 1

    session.query(NotificationModel).filter(
        NotificationModel.type == TIMESHEET_LOCKOUT_ALARM
    ).update({"status": NOTIFICATION_STATUS_APPEALED})
    session.commit()

    assert generate_alarm(make_context(NOW + timedelta(hours=8))) == 0
    [alarm] = _notifications(session, TIMESHEET_LOCKOUT_ALARM)
    assert alarm.status == NOTIFICATION_STATUS_APPEALED
    assert mailer.recipients() == ["ana@example.com"]


def test_generate_alarm_raises_again_once_the_lockout_is_resolved(
    session, make_context, mailer, add_user
) -> None:
    add_user("ana@example.com")
    assert generate_alarm(make_context(NOW)) == 1

    session.query(NotificationModel).update({"status": NOTIFICATION_STATUS_RESOLVED})
    session.commit()

    assert generate_alarm(make_context(NOW + timedelta(hours=8))) == 1
    assert mailer.recipients() == ["ana@example.com", "ana@example.com"]


def test_generate_alerts_reports_first_incomplete_day(
    session, make_context, add_user, add_timesheet
) -> None:
    add_user("vic@example.com", custom_role="viewer")
    add_user("val@example.com", custom_role="viewer")
    add_user("plain@example.com")
    for day in (7, 6, 4, 3, 2, 1):
        add_timesheet("vic@example.com", _day(day), total_minutes=480)
    add_timesheet("val@example.com", _day(7), total_minutes=480)
    add_timesheet("val@example.com", _day(6), total_minutes=300)

    assert generate_alerts(make_context(NOW)) == 1
    assert generate_alerts(make_context(NOW)) == 0

    [alert] = _notifications(session, TIMESHEET_MISSING_ALERT)
    assert alert.recipient_email == "val@example.com"
    assert "2024-05-06" in alert.message


def test_first_incomplete_day_includes_today_after_the_workday(session, add_timesheet) -> None:
    for day in (7, 6, 4, 3, 2, 1):
        add_timesheet("vic@example.com", _day(day), total_minutes=480)
    timesheets = TimesheetRepository(session)

    assert first_incomplete_day(timesheets, "vic@example.com", NOW) is None
    evening = NOW.replace(hour=19)
    assert first_incomplete_day(timesheets, "vic@example.com", evening) == evening.date()


def test_generate_low_workload_alert_compares_against_weekly_capacity(
    session, make_context, add_user, add_task
) -> None:
    add_user("ana@example.com")
    add_user("ben@example.com")
    add_task("Design", assigned_to=["ana@example.com"], due_date=_day(9), estimated_hours=10)
    add_task("Build", assigned_to=["ana@example.com"], due_date=_day(10), estimated_hours=10)
    add_task(
        "Shipped", status="Done", assigned_to=["ana@example.com"], due_date=_day(9), estimated_hours=20
    )
    add_task("Next week", assigned_to=["ana@example.com"], due_date=_day(14), estimated_hours=20)
    add_task("Big", assigned_to=["ben@example.com"], due_date=_day(12, 18), estimated_hours=30)

    assert generate_low_workload_alert(make_context(NOW)) == 1
    assert generate_low_workload_alert(make_context(NOW)) == 0

    [alert] = _notifications(session, LOW_WORKLOAD_ALERT)
    assert alert.recipient_email == "ana@example.com"
    assert alert.entity_id == "2024-05-06"
    assert alert.message == "Low Hours Detected: 20 hrs / 40 hrs capacity this week."


def test_generate_multiple_overdue_alarm_syncs_block_flag(
    session, make_context, mailer, add_user, add_project, add_task
) -> None:
    add_user("ana@example.com")
    add_user("ben@example.com", is_overdue_blocked=True)
    project = add_project("Website")
    oldest = add_task("Oldest", assigned_to=["ana@example.com"], due_date=_day(1), project_id=project.id)
    add_task("Older", assigned_to=["ana@example.com"], due_date=_day(3), project_id=project.id)
    add_task("Recent", assigned_to=["ana@example.com"], due_date=_day(7, 12), project_id=project.id)
    add_task("Future", assigned_to=["ana@example.com"], due_date=_day(20), project_id=project.id)
    add_task("Late", assigned_to=["ben@example.com"], due_date=_day(2), project_id=project.id)
    add_task("Later", assigned_to=["ben@example.com"], due_date=_day(4), project_id=project.id)

    assert generate_multiple_overdue_alarm(make_context(NOW)) == 1
    assert generate_multiple_overdue_alarm(make_context(NOW)) == 0

    session.expire_all()
    users = UserRepository(session)
    assert users.get_by_email("ana@example.com").is_overdue_blocked is True
    assert users.get_by_email("ben@example.com").is_overdue_blocked is False

    [alarm] = _notifications(session, MULTIPLE_OVERDUE_ALARM)
    assert alarm.recipient_email == "ana@example.com"
    assert alarm.title == "ALARM: 3 Tasks Overdue!"
    assert alarm.link == f"/ProjectDetail?id={project.id}&taskId={oldest.id}"

    [(subject, html_content, recipient)] = mailer.sent
    assert recipient == "ana@example.com"
    assert subject == "ALARM: 3 Tasks Overdue!"
    assert "https://app.groona.test/Dashboard" in html_content


def test_generate_task_overdue_alerts_viewers_and_escalates(
    session, make_context, add_user, add_project, add_task
) -> None:
    add_user("vic@example.com", custom_role="viewer")
    add_user("ben@example.com")
    add_user("pm@example.com", role="project_manager")
    project = add_project("Website", owner_email="pm@example.com")
    two_days = add_task(
        "Two days", assigned_to=["vic@example.com", "ben@example.com"], due_date=_day(6, 10),
        project_id=project.id,
    )
    week = add_task("A week", assigned_to=["vic@example.com"], due_date=_day(1), project_id=project.id)
    add_task("Yesterday", assigned_to=["vic@example.com"], due_date=_day(7), project_id=project.id)
    add_task(
        "Closed", status="completed", assigned_to=["vic@example.com"], due_date=_day(1),
        project_id=project.id,
    )

    assert generate_task_overdue(make_context(NOW)) == 3
    assert generate_task_overdue(make_context(NOW)) == 0

    alerts = _notifications(session, TASK_OVERDUE_ALERT)
    assert {(n.recipient_email, n.entity_id) for n in alerts} == {
        ("vic@example.com", str(two_days.id)),
        ("vic@example.com", str(week.id)),
    }

    [escalation] = _notifications(session, TASK_ESCALATION_ALERT)
    assert escalation.recipient_email == "pm@example.com"
    assert escalation.entity_id == str(week.id)
    assert "overdue by 7 days" in escalation.message


def test_rework_level_thresholds_are_exclusive() -> None:
    assert rework_level(25.1) == "critical"
    assert rework_level(25) == "high"
    assert rework_level(15) == "info"
    assert rework_level(0) is None


def test_generate_rework_alarm_grades_the_share_of_rework(
    session, make_context, mailer, add_user, add_timesheet
) -> None:
    for email in ("ana", "ben", "cam", "dee", "eve"):
        add_user(f"{email}@example.com")
    add_timesheet("ana@example.com", _day(6), total_minutes=500, rework_minutes=200)
    add_timesheet("ana@example.com", _day(7), total_minutes=500, rework_minutes=100)
    add_timesheet("ben@example.com", _day(7), total_minutes=1000, rework_minutes=200)
    add_timesheet("cam@example.com", _day(2), total_minutes=1000, rework_minutes=50)
    add_timesheet("dee@example.com", _day(7), total_minutes=480)
    # Rework logged before the lookback window is ignored.
    add_timesheet("eve@example.com", datetime(2024, 4, 30), total_minutes=480, rework_minutes=480)
    add_timesheet("eve@example.com", _day(7), total_minutes=480)

    assert generate_rework_alarm(make_context(NOW)) == 3
    assert generate_rework_alarm(make_context(NOW + timedelta(hours=8))) == 0

    [critical] = _notifications(session, HIGH_REWORK_ALARM)
    assert critical.recipient_email == "ana@example.com"
    assert critical.category == "alarm"
    assert "30.0%" in critical.message
    assert "Task assignments are frozen" in critical.message

    [high] = _notifications(session, REWORK_ALARM)
    assert high.recipient_email == "ben@example.com"
    assert "20.0%" in high.message

    [info] = _notifications(session, REWORK_ALERT)
    assert info.recipient_email == "cam@example.com"
    assert info.link == "/Timesheets?tab=rework-info"

    assert [subject for subject, _, _ in mailer.sent] == [
        "Critical Rework Detected",
        "High Rework Detected",
        "Rework Logged",
    ]
    assert mailer.recipients() == ["ana@example.com", "ben@example.com", "cam@example.com"]
    assert "https://app.groona.test/timesheets" in mailer.sent[0][1]


def test_generate_rework_alarm_respects_a_pending_critical_alarm(
    session, make_context, mailer, add_user, add_timesheet
) -> None:
    ben = add_user("ben@example.com")
    add_timesheet("ben@example.com", _day(7), total_minutes=1000, rework_minutes=200)
    NotificationRepository(session).create(
        Notification(
            id=None,
            type=HIGH_REWORK_ALARM,
            status=NOTIFICATION_STATUS_APPEALED,
            created_date=NOW - timedelta(days=1),
            recipient_email="ben@example.com",
            entity_type="user",
            entity_id=str(ben.id),
        )
    )

    assert generate_rework_alarm(make_context(NOW)) == 0
    assert _notifications(session, REWORK_ALARM) == []
    assert mailer.sent == []


def test_generate_low_velocity_alert_escalates_consecutive_drops(
    session, make_context, mailer, add_user, add_project, add_velocity
) -> None:
    add_user("pm@example.com", role="project_manager", tenant_id="t1")
    add_user("boss@example.com", role="admin", tenant_id="t1")
    website = add_project("Website", tenant_id="t1", owner_email="pm@example.com")
    mobile = add_project("Mobile", tenant_id="t1")
    healthy = add_project("Healthy", tenant_id="t1", owner_email="pm@example.com")

    add_velocity(website.id, "s1", 80, sprint_end_date=_day(1))
    # The sprint was measured twice; only the newest snapshot counts.
    add_velocity(website.id, "s2", 95, sprint_end_date=_day(8), created_date=_day(7))
    add_velocity(website.id, "s2", 70, sprint_end_date=_day(8), created_date=_day(8))
    add_velocity(mobile.id, "m1", 90, sprint_end_date=_day(1))
    add_velocity(mobile.id, "m2", 80, sprint_end_date=_day(8))
    add_velocity(healthy.id, "h1", 60, sprint_end_date=_day(1))
    add_velocity(healthy.id, "h2", 95, sprint_end_date=_day(8))

    assert generate_low_velocity_alert(make_context(NOW)) == 2
    assert generate_low_velocity_alert(make_context(NOW + timedelta(hours=8))) == 0

    [alarm] = _notifications(session, PM_CONSISTENT_VELOCITY_DROP)
    assert alarm.recipient_email == "pm@example.com"
    assert alarm.category == "alarm"
    assert alarm.entity_id == "s2"
    assert alarm.project_id == website.id
    assert "Latest: 70.0%, Previous: 80.0%" in alarm.message

    # Without a project manager the tenant admins are alerted.
    [alert] = _notifications(session, PM_VELOCITY_DROP)
    assert alert.recipient_email == "boss@example.com"
    assert alert.category == "alert"
    assert alert.entity_id == "m2"

    [(subject, html_content, recipient)] = mailer.sent
    assert recipient == "pm@example.com"
    assert subject == "Alarm: Consistent Low Velocity - Website"
    assert f"https://app.groona.test/project/{website.id}/sprint/s2" in html_content

    session.expire_all()
    projects = ProjectRepository(session)
    assert projects.get(website.id).commitments_frozen is True
    assert projects.get(mobile.id).commitments_frozen is False
    assert projects.get(healthy.id).commitments_frozen is False
