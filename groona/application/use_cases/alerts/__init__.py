"""Alert generation rules run by the scheduler on every tick."""

from groona.application.scheduler.tasks import TaskDescriptor

from .overdue import generate_multiple_overdue_alarm, generate_task_overdue
from .rework import generate_rework_alarm
from .timesheets import generate_alarm, generate_alerts
from .velocity import generate_low_velocity_alert
from .workload import generate_low_workload_alert

ALERT_TASKS: tuple[TaskDescriptor, ...] = (
    TaskDescriptor(
        "generate_alarm",
        generate_alarm,
        "Lock members missing more than three timesheets in the last week",
    ),
    TaskDescriptor(
        "generate_alerts",
        generate_alerts,
        "Remind members about incomplete timesheet days this month",
    ),
    TaskDescriptor(
        "generate_low_workload_alert",
        generate_low_workload_alert,
        "Flag members planned below 70% of their weekly capacity",
    ),
    TaskDescriptor(
        "generate_multiple_overdue_alarm",
        generate_multiple_overdue_alarm,
        "Block members with three or more overdue tasks",
    ),
    TaskDescriptor(
        "generate_task_overdue",
        generate_task_overdue,
        "Alert assignees of overdue tasks and escalate to project managers",
    ),
    TaskDescriptor(
        "generate_rework_alarm",
        generate_rework_alarm,
        "Warn members whose rework exceeds 15% or 25% of their logged time",
    ),
    TaskDescriptor(
        "generate_low_velocity_alert",
        generate_low_velocity_alert,
        "Alert project managers about sprints delivering below 85%",
    ),
)

__all__ = [
    "ALERT_TASKS",
    "generate_alarm",
    "generate_alerts",
    "generate_low_velocity_alert",
    "generate_low_workload_alert",
    "generate_multiple_overdue_alarm",
    "generate_rework_alarm",
    "generate_task_overdue",
]
