"""Overdue task rules: per-task alerts, escalations and the multiple-overdue alarm."""

from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime, timedelta

from groona.application.scheduler.tasks import TaskContext
from groona.application.use_cases.notifications import raise_alert
from groona.domain.entities import (
    MULTIPLE_OVERDUE_ALARM,
    NOTIFICATION_CATEGORY_ALARM,
    NOTIFICATION_CATEGORY_ALERT,
    TASK_ESCALATION_ALERT,
    TASK_OVERDUE_ALERT,
    Notification,
    Task,
)
from groona.infrastructure.email import render_multiple_overdue_email
from groona.infrastructure.repositories import TaskRepository, UserRepository
from groona.utils import ensure_app_timezone

from .recipients import plain_members, project_managers

logger = logging.getLogger(__name__)

MULTIPLE_OVERDUE_THRESHOLD = 3
OVERDUE_ALERT_DAYS = 2
ESCALATION_DAYS = 5


def task_link(task: Task) -> str:
    return f"/ProjectDetail?id={task.project_id}&taskId={task.id}"


def days_overdue(task: Task, now: datetime) -> int:
    if task.due_date is None:
        return 0
    return (ensure_app_timezone(now) - ensure_app_timezone(task.due_date)).days


def generate_multiple_overdue_alarm(context: TaskContext) -> int:
    """Block members with several overdue tasks and raise an alarm for them.

    ``is_overdue_blocked`` is kept in sync on every run so it clears once the
    member catches up. The alarm links to the most overdue task and the
    email goes out only when the alarm is first raised.
    """

    now = context.clock()
    created = 0
    session = context.session_factory()
    try:
        overdue_by_email: dict[str, list[Task]] = defaultdict(list)
        for task in TaskRepository(session).list_open_due_before(now):
            for email in task.assigned_to:
                overdue_by_email[email.lower()].append(task)

        users = UserRepository(session)
        for member in plain_members(users.list_active()):
            overdue = overdue_by_email.get(member.email.lower(), [])
            blocked = len(overdue) >= MULTIPLE_OVERDUE_THRESHOLD
            if member.is_overdue_blocked != blocked and member.id is not None:
                users.set_flags(member.id, is_overdue_blocked=blocked)
                logger.info("Set is_overdue_blocked=%s for %s", blocked, member.email)
            if not blocked:
                continue

            most_overdue = overdue[0]
            logger.info("User %s has %s overdue tasks", member.email, len(overdue))
            notification = raise_alert(
                session,
                Notification(
                    id=None,
                    type=MULTIPLE_OVERDUE_ALARM,
                    created_date=now,
                    tenant_id=member.tenant_id,
                    recipient_email=member.email,
                    user_id=member.id,
                    rule_id="VIEWER_ALARM_MULTIPLE_OVERDUE",
                    category=NOTIFICATION_CATEGORY_ALARM,
                    title=f"ALARM: {len(overdue)} Tasks Overdue!",
                    message=(
                        f"You have {len(overdue)} overdue tasks. "
                        "Immediate consultation with your Project Manager is required."
                    ),
                    entity_type="task",
                    project_id=most_overdue.project_id,
                    link=task_link(most_overdue),
                    attributes={"task_ids": [task.id for task in overdue]},
                ),
            )
            if notification is None:
                continue

            created += 1
            subject, html_content = render_multiple_overdue_email(
                user_name=member.display_name,
                overdue_count=len(overdue),
                task_titles=[task.title for task in overdue],
                dashboard_url=f"{context.frontend_url.rstrip('/')}/Dashboard",
            )
            if not context.send_email(subject, html_content, member.email):
                logger.warning("Overdue alarm email to %s was not delivered", member.email)
    finally:
        session.close()
    return created


def generate_task_overdue(context: TaskContext) -> int:
    """Alert viewer assignees of overdue tasks and escalate long overdue ones."""

    now = context.clock()
    created = 0
    session = context.session_factory()
    try:
        users = UserRepository(session)
        threshold = now - timedelta(days=OVERDUE_ALERT_DAYS)
        for task in TaskRepository(session).list_open_due_before(threshold):
            overdue_days = days_overdue(task, now)
            assignees = users.get_map_by_emails(task.assigned_to)
            for member in assignees.values():
                if member.custom_role != "viewer":
                    continue
                notification = raise_alert(
                    session,
                    Notification(
                        id=None,
                        type=TASK_OVERDUE_ALERT,
                        created_date=now,
                        tenant_id=member.tenant_id,
                        recipient_email=member.email,
                        user_id=member.id,
                        rule_id="VIEWER_ALERT_TASK_OVERDUE",
                        category=NOTIFICATION_CATEGORY_ALERT,
                        title=f"Task Overdue ({overdue_days} Days)",
                        message=(
                            f'Task "{task.title}" is overdue by {overdue_days} days. '
                            "Immediate action required."
                        ),
                        entity_type="task",
                        entity_id=str(task.id),
                        project_id=task.project_id,
                        link=task_link(task),
                    ),
                )
                if notification is not None:
                    created += 1

            if overdue_days < ESCALATION_DAYS:
                continue
            for manager in project_managers(session, task.project_id):
                notification = raise_alert(
                    session,
                    Notification(
                        id=None,
                        type=TASK_ESCALATION_ALERT,
                        created_date=now,
                        tenant_id=manager.tenant_id,
                        recipient_email=manager.email,
                        user_id=manager.id,
                        rule_id="MANAGER_ESCALATION_TASK_OVERDUE",
                        category=NOTIFICATION_CATEGORY_ALERT,
                        title=f"Escalation: Task Overdue ({overdue_days} Days)",
                        message=(
                            f'ESCALATION: Task "{task.title}" is overdue by {overdue_days} days. '
                            "Immediate intervention required."
                        ),
                        entity_type="task",
                        entity_id=str(task.id),
                        project_id=task.project_id,
                        link=task_link(task),
                    ),
                )
                if notification is not None:
                    created += 1
    finally:
        session.close()
    return created


__all__ = [
    "days_overdue",
    "generate_multiple_overdue_alarm",
    "generate_task_overdue",
    "task_link",
]
