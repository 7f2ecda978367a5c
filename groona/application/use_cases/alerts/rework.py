"""Rework rule: warn members whose logged time is dominated by rework."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from groona.application.scheduler.tasks import TaskContext
from groona.application.use_cases.notifications import raise_alert
from groona.domain.entities import (
    HIGH_REWORK_ALARM,
    NOTIFICATION_CATEGORY_ALARM,
    NOTIFICATION_CATEGORY_ALERT,
    NOTIFICATION_STATUS_APPEALED,
    NOTIFICATION_STATUS_OPEN,
    REWORK_ALARM,
    REWORK_ALERT,
    Member,
    Notification,
)
from groona.infrastructure.email import render_rework_email
from groona.infrastructure.repositories import (
    NotificationRepository,
    TimesheetRepository,
    UserRepository,
)
from groona.utils import start_of_day

from .recipients import plain_members

logger = logging.getLogger(__name__)

REWORK_LOOKBACK_DAYS = 7
REWORK_THRESHOLD_PERCENT = 15
CRITICAL_REWORK_THRESHOLD_PERCENT = 25
REWORK_ACTIVE_STATUSES = (NOTIFICATION_STATUS_OPEN, NOTIFICATION_STATUS_APPEALED)


def rework_level(rework_percent: float) -> str | None:
    """Map a rework share to ``critical``, ``high``, ``info`` or ``None`` for no rework."""

    if rework_percent > CRITICAL_REWORK_THRESHOLD_PERCENT:
        return "critical"
    if rework_percent > REWORK_THRESHOLD_PERCENT:
        return "high"
    if rework_percent > 0:
        return "info"
    return None


def generate_rework_alarm(context: TaskContext) -> int:
    """Raise a rework alarm or notice from the share of rework in the last week.

    Shares above 25% raise the critical alarm that freezes task assignments.
    Shares above 15% raise the peer review alarm. Any smaller share of rework
    gets an informational notice, at most once per lookback window.
    """

    now = context.clock()
    since = start_of_day(now - timedelta(days=REWORK_LOOKBACK_DAYS))
    created = 0
    session = context.session_factory()
    try:
        timesheets = TimesheetRepository(session)
        for member in plain_members(UserRepository(session).list_active()):
            total, rework = timesheets.minutes_since(member.email, since)
            if total <= 0:
                continue

            percent = rework / total * 100
            level = rework_level(percent)
            logger.debug(
                "User %s logged %s minutes, %s of rework (%.1f%%)",
                member.email,
                total,
                rework,
                percent,
            )
            if level is None:
                continue

            if _raise_rework_notification(session, member, level, percent, since, now):
                created += 1
                subject, html_content = render_rework_email(
                    user_name=member.display_name,
                    level=level,
                    rework_percent=percent,
                    threshold=_threshold(level),
                    dashboard_url=f"{context.frontend_url.rstrip('/')}/timesheets",
                )
                if not context.send_email(subject, html_content, member.email):
                    logger.warning("Rework email to %s was not delivered", member.email)
    finally:
        session.close()
    return created


def _threshold(level: str) -> int | None:
    return {
        "critical": CRITICAL_REWORK_THRESHOLD_PERCENT,
        "high": REWORK_THRESHOLD_PERCENT,
    }.get(level)


def _raise_rework_notification(
    session: Session,
    member: Member,
    level: str,
    percent: float,
    since: datetime,
    now: datetime,
) -> bool:
    repository = NotificationRepository(session)
    base = {
        "id": None,
        "created_date": now,
        "tenant_id": member.tenant_id,
        "recipient_email": member.email,
        "user_id": member.id,
        "attributes": {"rework_percent": round(percent, 1)},
    }

    if level == "info":
        if repository.find_since(recipient_email=member.email, type=REWORK_ALERT, since=since):
            return False
        notification = Notification(
            type=REWORK_ALERT,
            rule_id="MEMBER_REWORK_LOGGED",
            category=NOTIFICATION_CATEGORY_ALERT,
            title="Rework Logged",
            message=(
                f"You have logged rework time recently ({percent:.1f}% of total). "
                "Please ensure quality and clarity of requirements."
            ),
            link="/Timesheets?tab=rework-info",
            **base,
        )
        return repository.create(notification) is not None

    entity = {"entity_type": "user", "entity_id": str(member.id)}
    if level == "critical":
        notification = Notification(
            type=HIGH_REWORK_ALARM,
            rule_id="MEMBER_CRITICAL_REWORK",
            category=NOTIFICATION_CATEGORY_ALARM,
            title="Critical Rework Detected",
            message=(
                f"Your rework time is at {percent:.1f}%, exceeding the "
                f"{CRITICAL_REWORK_THRESHOLD_PERCENT}% threshold. Task assignments are "
                "frozen. Peer review required."
            ),
            **entity,
            **base,
        )
        created = raise_alert(session, notification, active_statuses=REWORK_ACTIVE_STATUSES)
        return created is not None

    # A pending critical alarm already covers the lower level.
    for existing_type in (HIGH_REWORK_ALARM, REWORK_ALARM):
        if repository.find_open(
            recipient_email=member.email,
            type=existing_type,
            entity_id=str(member.id),
            statuses=REWORK_ACTIVE_STATUSES,
        ):
            return False
    notification = Notification(
        type=REWORK_ALARM,
        rule_id="MEMBER_HIGH_REWORK",
        category=NOTIFICATION_CATEGORY_ALARM,
        title="High Rework Detected",
        message=(
            f"Your rework time is at {percent:.1f}%, exceeding the "
            f"{REWORK_THRESHOLD_PERCENT}% threshold. Peer review is recommended."
        ),
        **entity,
        **base,
    )
    return repository.create(notification) is not None


__all__ = [
    "CRITICAL_REWORK_THRESHOLD_PERCENT",
    "REWORK_LOOKBACK_DAYS",
    "REWORK_THRESHOLD_PERCENT",
    "generate_rework_alarm",
    "rework_level",
]
