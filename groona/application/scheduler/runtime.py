"""Wire the production collaborators into a scheduler."""

from __future__ import annotations

from groona.config import Settings
from groona.infrastructure.database import get_session_factory
from groona.infrastructure.email import send_email
from groona.utils import now_in_app_timezone

from .launcher import TaskLauncher
from .scheduler import AlertScheduler, SchedulerConfig
from .tasks import TaskContext


def build_task_context(settings: Settings) -> TaskContext:
    return TaskContext(
        session_factory=get_session_factory(),
        clock=now_in_app_timezone,
        send_email=send_email,
        frontend_url=settings.frontend_url,
    )


def build_scheduler(settings: Settings) -> AlertScheduler:
    """Assemble the scheduler from settings.

    Raises :class:`ValueError` when ``SCHEDULER_TASKS`` names an unknown task.
    """

    config = SchedulerConfig.from_settings(settings)
    launcher = TaskLauncher(build_task_context(settings))
    return AlertScheduler(config, launcher, clock=now_in_app_timezone)


__all__ = ["build_scheduler", "build_task_context"]
