"""Alert scheduler: cadence, task registry plumbing and the tick loop."""

from .cadence import ScheduleMode, describe_cadence, next_tick_after, tick_interval
from .launcher import TaskLauncher
from .scheduler import AlertScheduler, SchedulerConfig
from .tasks import RunGuard, TaskContext, TaskDescriptor, select_tasks

__all__ = [
    "AlertScheduler",
    "RunGuard",
    "ScheduleMode",
    "SchedulerConfig",
    "TaskContext",
    "TaskDescriptor",
    "TaskLauncher",
    "describe_cadence",
    "next_tick_after",
    "select_tasks",
    "tick_interval",
]
