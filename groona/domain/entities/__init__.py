"""Domain entities exposed by the application."""

from .member import MANAGER_ROLES, PROJECT_MANAGER_ROLES, Member
from .notification import (
    HIGH_REWORK_ALARM,
    LOW_WORKLOAD_ALERT,
    MULTIPLE_OVERDUE_ALARM,
    NOTIFICATION_CATEGORY_ALARM,
    NOTIFICATION_CATEGORY_ALERT,
    NOTIFICATION_STATUS_APPEALED,
    NOTIFICATION_STATUS_OPEN,
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
from .project import Project, ProjectTeamMember
from .sprint_velocity import SprintVelocity
from .task import FINISHED_TASK_STATUSES, Task
from .task_details import TASK_PRIORITIES, TaskDetails
from .timesheet import (
    TIMESHEET_STATUS_APPROVED,
    TIMESHEET_STATUS_DRAFT,
    TIMESHEET_STATUS_SUBMITTED,
    VALID_TIMESHEET_STATUSES,
    TimesheetEntry,
)

__all__ = [
    "FINISHED_TASK_STATUSES",
    "HIGH_REWORK_ALARM",
    "LOW_WORKLOAD_ALERT",
    "MANAGER_ROLES",
    "MULTIPLE_OVERDUE_ALARM",
    "Member",
    "NOTIFICATION_CATEGORY_ALARM",
    "NOTIFICATION_CATEGORY_ALERT",
    "NOTIFICATION_STATUS_APPEALED",
    "NOTIFICATION_STATUS_OPEN",
    "NOTIFICATION_STATUS_RESOLVED",
    "Notification",
    "PM_CONSISTENT_VELOCITY_DROP",
    "PM_VELOCITY_DROP",
    "PROJECT_MANAGER_ROLES",
    "Project",
    "ProjectTeamMember",
    "REWORK_ALARM",
    "REWORK_ALERT",
    "SprintVelocity",
    "TASK_ESCALATION_ALERT",
    "TASK_OVERDUE_ALERT",
    "TASK_PRIORITIES",
    "TEAM_MEMBER_LOCKOUT_NOTICE",
    "TIMESHEET_LOCKOUT_ALARM",
    "TIMESHEET_MISSING_ALERT",
    "TIMESHEET_STATUS_APPROVED",
    "TIMESHEET_STATUS_DRAFT",
    "TIMESHEET_STATUS_SUBMITTED",
    "Task",
    "TaskDetails",
    "TimesheetEntry",
    "VALID_TIMESHEET_STATUSES",
]
