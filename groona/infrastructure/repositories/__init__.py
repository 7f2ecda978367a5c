"""Repository implementations for infrastructure layer."""

from .notification_repository import NotificationRepository
from .project_repository import ProjectRepository
from .sprint_velocity_repository import SprintVelocityRepository
from .task_repository import TaskRepository
from .timesheet_repository import TimesheetRepository
from .user_repository import UserRepository

__all__ = [
    "NotificationRepository",
    "ProjectRepository",
    "SprintVelocityRepository",
    "TaskRepository",
    "TimesheetRepository",
    "UserRepository",
]
