"""Weekly workload rule flagging members with too little planned work."""

from __future__ import annotations

import logging
from datetime import timedelta

from groona.application.scheduler.tasks import TaskContext
from groona.application.use_cases.notifications import raise_alert
from groona.domain.entities import LOW_WORKLOAD_ALERT, NOTIFICATION_CATEGORY_ALERT, Notification
from groona.infrastructure.repositories import TaskRepository, UserRepository
from groona.utils import start_of_week

logger = logging.getLogger(__name__)

WORKING_DAYS_PER_WEEK = 5
LOW_WORKLOAD_RATIO = 0.7


def generate_low_workload_alert(context: TaskContext) -> int:
    """Alert members whose tasks due this week cover less than 70% of their capacity."""

    now = context.clock()
    week_start = start_of_week(now)
    week_end = week_start + timedelta(days=7) - timedelta(microseconds=1)

    created = 0
    session = context.session_factory()
    try:
        tasks = TaskRepository(session).list_open_due_between(week_start, week_end)
        for member in UserRepository(session).list_active():
            capacity = member.working_hours_per_day * WORKING_DAYS_PER_WEEK
            assigned = sum(
                task.estimated_hours or 0 for task in tasks if task.is_assigned_to(member.email)
            )
            if assigned >= capacity * LOW_WORKLOAD_RATIO:
                continue

            logger.info(
                "User %s has %s of %s hours planned this week", member.email, assigned, capacity
            )
            notification = raise_alert(
                session,
                Notification(
                    id=None,
                    type=LOW_WORKLOAD_ALERT,
                    created_date=now,
                    tenant_id=member.tenant_id,
                    recipient_email=member.email,
                    user_id=member.id,
                    rule_id="LOW_WORKLOAD_WEEKLY",
                    category=NOTIFICATION_CATEGORY_ALERT,
                    title="Low Workload Alert",
                    message=(
                        f"Low Hours Detected: {assigned:g} hrs / {capacity:g} hrs capacity this week."
                    ),
                    entity_type="week",
                    entity_id=week_start.date().isoformat(),
                    attributes={"assigned_hours": assigned, "capacity_hours": capacity},
                ),
            )
            if notification is not None:
                created += 1
    finally:
        session.close()
    return created


__all__ = ["LOW_WORKLOAD_RATIO", "generate_low_workload_alert"]
