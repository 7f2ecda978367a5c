"""One-shot maintenance operations over the notification store."""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from groona.domain.entities import (
    NOTIFICATION_STATUS_OPEN,
    TIMESHEET_LOCKOUT_ALARM,
    TIMESHEET_MISSING_ALERT,
)
from groona.infrastructure.repositories import NotificationRepository
from groona.utils import now_in_app_timezone, start_of_day

logger = logging.getLogger(__name__)

RESETTABLE_ALARM_TYPES: tuple[str, ...] = (TIMESHEET_LOCKOUT_ALARM, TIMESHEET_MISSING_ALERT)


def delete_open_notifications(session: Session) -> int:
    """Delete every ``OPEN`` notification and return how many were removed."""

    deleted = NotificationRepository(session).delete_by_status(NOTIFICATION_STATUS_OPEN)
    logger.info("Deleted %s open notifications", deleted)
    return deleted


def reset_todays_alarms(session: Session, *, now: datetime | None = None) -> dict[str, int]:
    """Delete today's timesheet alarms so the generators can raise them again.

    Only notifications of the resettable types created at or after local
    midnight of ``now`` are removed. Returns the deleted count per type.
    """

    cutoff = start_of_day(now or now_in_app_timezone())
    logger.info("Resetting alarms created after %s", cutoff.isoformat())

    repository = NotificationRepository(session)
    counts: dict[str, int] = {}
    for alarm_type in RESETTABLE_ALARM_TYPES:
        counts[alarm_type] = repository.delete_by_type_since(alarm_type, cutoff)
        logger.info("Deleted %s %s notifications", counts[alarm_type], alarm_type)
    return counts


__all__ = ["RESETTABLE_ALARM_TYPES", "delete_open_notifications", "reset_todays_alarms"]
