"""Timesheet compliance rules: the weekly lockout alarm and the daily missing alert."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta

from sqlalchemy.orm import Session

from groona.application.scheduler.tasks import TaskContext
from groona.application.use_cases.notifications import raise_alert
from groona.domain.entities import (
    NOTIFICATION_CATEGORY_ALARM,
    NOTIFICATION_CATEGORY_ALERT,
    NOTIFICATION_STATUS_APPEALED,
    NOTIFICATION_STATUS_OPEN,
    TEAM_MEMBER_LOCKOUT_NOTICE,
    TIMESHEET_LOCKOUT_ALARM,
    TIMESHEET_MISSING_ALERT,
    Member,
    Notification,
)
from groona.infrastructure.email import (
    render_team_member_lockout_email,
    render_timesheet_lockout_email,
)
from groona.infrastructure.repositories import TimesheetRepository, UserRepository
from groona.utils import ensure_app_timezone, start_of_day

from .recipients import managers_of_member, plain_members

logger = logging.getLogger(__name__)

LOCKOUT_WINDOW_DAYS = 7
LOCKOUT_MISSING_THRESHOLD = 3
REQUIRED_DAILY_MINUTES = 480
END_OF_WORKDAY_HOUR = 18
# An appealed lockout is still pending review and must not be raised again.
LOCKOUT_ACTIVE_STATUSES = (NOTIFICATION_STATUS_OPEN, NOTIFICATION_STATUS_APPEALED)


def _is_sunday(day: datetime | date) -> bool:
    return day.weekday() == 6


def missing_submission_days(
    timesheets: TimesheetRepository, email: str, now: datetime
) -> list[date]:
    """Return the working days of the last week without a valid submission.

    The window starts yesterday and walks back :data:`LOCKOUT_WINDOW_DAYS`
    days, skipping Sundays.
    """

    today = start_of_day(now)
    missing: list[date] = []
    for offset in range(1, LOCKOUT_WINDOW_DAYS + 1):
        day = today - timedelta(days=offset)
        if _is_sunday(day):
            continue
        if not timesheets.has_valid_submission(email, day):
            missing.append(day.date())
    return missing


def first_incomplete_day(
    timesheets: TimesheetRepository, email: str, now: datetime
) -> date | None:
    """Return the latest day this month with less than a full day logged.

    Today is only considered once the workday is over, otherwise the scan
    starts from yesterday. Sundays are skipped.
    """

    now = ensure_app_timezone(now)
    day = start_of_day(now)
    if now.hour < END_OF_WORKDAY_HOUR:
        day -= timedelta(days=1)
    first_of_month = start_of_day(now).replace(day=1)

    while day >= first_of_month:
        if not _is_sunday(day) and timesheets.minutes_submitted(email, day) < REQUIRED_DAILY_MINUTES:
            return day.date()
        day -= timedelta(days=1)
    return None


def generate_alarm(context: TaskContext) -> int:
    """Lock members who skipped too many timesheets and tell their managers."""

    now = context.clock()
    created = 0
    session = context.session_factory()
    try:
        users = UserRepository(session)
        timesheets = TimesheetRepository(session)
        for member in plain_members(users.list_active()):
            missing = missing_submission_days(timesheets, member.email, now)
            if len(missing) <= LOCKOUT_MISSING_THRESHOLD:
                continue

            logger.info("User %s is missing %s timesheets", member.email, len(missing))
            if not member.is_timesheet_locked and member.id is not None:
                users.set_flags(member.id, is_timesheet_locked=True)
                logger.info("Locked timesheet logging for %s", member.email)

            created += _raise_lockout_alarm(context, session, member, missing, now)
            for manager in managers_of_member(session, member):
                created += _raise_lockout_notice(context, session, manager, member, len(missing), now)
    finally:
        session.close()
    return created


def _raise_lockout_alarm(
    context: TaskContext, session: Session, member: Member, missing: list[date], now: datetime
) -> int:
    notification = raise_alert(
        session,
        Notification(
            id=None,
            type=TIMESHEET_LOCKOUT_ALARM,
            created_date=now,
            tenant_id=member.tenant_id,
            recipient_email=member.email,
            user_id=member.id,
            rule_id="TIMESHEET_LOCKOUT_REPEATED_MISSING",
            category=NOTIFICATION_CATEGORY_ALARM,
            title="Timesheets Locked: Repeated Non-Compliance",
            message=(
                f"You have missed {len(missing)} daily timesheets in the last week. "
                "Your ability to log new time is LOCKED until you fill in the missing days."
            ),
            attributes={"missing_dates": [day.isoformat() for day in missing]},
        ),
        active_statuses=LOCKOUT_ACTIVE_STATUSES,
    )
    if notification is None:
        return 0

    subject, html_content = render_timesheet_lockout_email(
        user_name=member.display_name,
        missing_count=len(missing),
        missing_dates=[day.isoformat() for day in missing],
    )
    if not context.send_email(subject, html_content, member.email):
        logger.warning("Lockout email to %s was not delivered", member.email)
    return 1


def _raise_lockout_notice(
    context: TaskContext,
    session: Session,
    manager: Member,
    member: Member,
    missing_count: int,
    now: datetime,
) -> int:
    notification = raise_alert(
        session,
        Notification(
            id=None,
            type=TEAM_MEMBER_LOCKOUT_NOTICE,
            created_date=now,
            tenant_id=manager.tenant_id,
            recipient_email=manager.email,
            user_id=manager.id,
            rule_id="TEAM_MEMBER_LOCKED",
            category=NOTIFICATION_CATEGORY_ALERT,
            title=f"User Locked: {member.display_name}",
            message=(
                f"{member.display_name} has been locked out of timesheets due to "
                f"{missing_count} missing entries in the last week."
            ),
            entity_type="user",
            entity_id=str(member.id),
        ),
    )
    if notification is None:
        return 0

    subject, html_content = render_team_member_lockout_email(
        recipient_name=manager.display_name,
        user_name=member.display_name,
        missing_count=missing_count,
    )
    if not context.send_email(subject, html_content, manager.email):
        logger.warning("Lockout notice email to %s was not delivered", manager.email)
    return 1


def generate_alerts(context: TaskContext) -> int:
    """Remind viewers and project managers about incomplete days this month."""

    now = context.clock()
    created = 0
    session = context.session_factory()
    try:
        timesheets = TimesheetRepository(session)
        members = [
            member
            for member in UserRepository(session).list_active()
            if member.is_viewer() or member.is_project_manager()
        ]
        for member in members:
            missing_day = first_incomplete_day(timesheets, member.email, now)
            if missing_day is None:
                continue

            logger.info("User %s has an incomplete timesheet for %s", member.email, missing_day)
            notification = raise_alert(
                session,
                Notification(
                    id=None,
                    type=TIMESHEET_MISSING_ALERT,
                    created_date=now,
                    tenant_id=member.tenant_id,
                    recipient_email=member.email,
                    user_id=member.id,
                    rule_id="TIMESHEET_MANDATORY_EIGHT_HOURS",
                    category=NOTIFICATION_CATEGORY_ALERT,
                    title="Missing Timesheet Entry Required",
                    message=(
                        f"Mandatory: 8 hours required for {missing_day.isoformat()}. "
                        "Please log your pending hours."
                    ),
                    attributes={"missing_date": missing_day.isoformat()},
                ),
            )
            if notification is not None:
                created += 1
    finally:
        session.close()
    return created


__all__ = [
    "first_incomplete_day",
    "generate_alarm",
    "generate_alerts",
    "missing_submission_days",
]
