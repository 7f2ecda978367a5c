"""ORM models used by the application infrastructure."""

from .user import UserModel
from .project import ProjectModel
from .task import TaskModel
from .timesheet import TimesheetModel
from .sprint_velocity import SprintVelocityModel
from .notification import NotificationModel

__all__ = [
    "NotificationModel",
    "ProjectModel",
    "SprintVelocityModel",
    "TaskModel",
    "TimesheetModel",
    "UserModel",
]
