"""Sprint velocity rule: warn project managers when delivery falls behind commitments."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from groona.application.scheduler.tasks import TaskContext
from groona.application.use_cases.notifications import raise_alert
from groona.domain.entities import (
    NOTIFICATION_CATEGORY_ALARM,
    NOTIFICATION_CATEGORY_ALERT,
    PM_CONSISTENT_VELOCITY_DROP,
    PM_VELOCITY_DROP,
    Member,
    Notification,
    Project,
    SprintVelocity,
)
from groona.infrastructure.email import render_velocity_alarm_email
from groona.infrastructure.repositories import (
    ProjectRepository,
    SprintVelocityRepository,
    UserRepository,
)

from .recipients import project_managers

logger = logging.getLogger(__name__)

VELOCITY_ACCURACY_THRESHOLD = 85.0


def velocity_recipients(session: Session, project: Project) -> Sequence[Member]:
    """Project managers of ``project``, or the tenant administrators when it has none."""

    managers = project_managers(session, project.id)
    if managers:
        return managers
    return UserRepository(session).list_tenant_managers(project.tenant_id)


def generate_low_velocity_alert(context: TaskContext) -> int:
    """Alert project managers about sprints delivering below 85% of their commitment.

    One low sprint raises a ``PM_VELOCITY_DROP`` alert. Two low sprints in a
    row raise the ``PM_CONSISTENT_VELOCITY_DROP`` alarm instead, which also
    freezes the project's commitments and is the only level sent by email.
    """

    now = context.clock()
    created = 0
    session = context.session_factory()
    try:
        velocities = SprintVelocityRepository(session)
        projects = ProjectRepository(session)
        for project_id in velocities.project_ids():
            sprints = velocities.latest_sprints(project_id, limit=2)
            if not sprints or sprints[0].accuracy >= VELOCITY_ACCURACY_THRESHOLD:
                continue

            project = projects.get(project_id)
            if project is None:
                logger.warning("Velocity recorded for unknown project %s", project_id)
                continue

            latest = sprints[0]
            previous = sprints[1] if len(sprints) > 1 else None
            consistent = previous is not None and previous.accuracy < VELOCITY_ACCURACY_THRESHOLD
            recipients = velocity_recipients(session, project)
            if not recipients:
                logger.warning("No project manager or admin to alert for project %s", project_id)
                continue

            if consistent and projects.freeze_commitments(project_id):
                logger.info("Froze commitments of project %s", project_id)

            alarm_previous = previous if consistent else None
            for recipient in recipients:
                notification = raise_alert(
                    session,
                    _velocity_notification(project, latest, alarm_previous, recipient, now),
                )
                if notification is None:
                    continue
                created += 1
                if not consistent:
                    continue

                subject, html_content = render_velocity_alarm_email(
                    project_name=project.name,
                    sprint_name=latest.sprint_name,
                    accuracy=latest.accuracy,
                    previous_sprint_name=previous.sprint_name,
                    previous_accuracy=previous.accuracy,
                    sprint_url=(
                        f"{context.frontend_url.rstrip('/')}"
                        f"/project/{project_id}/sprint/{latest.sprint_id}"
                    ),
                )
                if not context.send_email(subject, html_content, recipient.email):
                    logger.warning("Velocity alarm email to %s was not delivered", recipient.email)
    finally:
        session.close()
    return created


def _velocity_notification(
    project: Project,
    latest: SprintVelocity,
    previous: SprintVelocity | None,
    recipient: Member,
    now: datetime,
) -> Notification:
    if previous is None:
        type_, category = PM_VELOCITY_DROP, NOTIFICATION_CATEGORY_ALERT
        title = "Low Velocity Alert"
        message = (
            f"{project.name} velocity dropped below 85% for the latest sprint. "
            f"Latest: {latest.accuracy:.1f}%. Review required."
        )
    else:
        type_, category = PM_CONSISTENT_VELOCITY_DROP, NOTIFICATION_CATEGORY_ALARM
        title = "Consistent Low Velocity Alarm"
        message = (
            f"{project.name} velocity is critically low (<85%) for 2 consecutive sprints. "
            f"Latest: {latest.accuracy:.1f}%, Previous: {previous.accuracy:.1f}%. "
            "Immediate review required."
        )

    return Notification(
        id=None,
        type=type_,
        created_date=now,
        tenant_id=latest.tenant_id or project.tenant_id,
        recipient_email=recipient.email,
        user_id=recipient.id,
        rule_id=type_,
        category=category,
        title=title,
        message=message,
        entity_type="sprint",
        entity_id=latest.sprint_id,
        project_id=project.id,
        attributes={"sprint_name": latest.sprint_name, "accuracy": latest.accuracy},
    )


__all__ = [
    "VELOCITY_ACCURACY_THRESHOLD",
    "generate_low_velocity_alert",
    "velocity_recipients",
]
