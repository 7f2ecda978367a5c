from .notification import (
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)
from .task_details import TaskDetailsRequest, TaskDetailsResponse

__all__ = [
    "NotificationMarkReadRequest",
    "NotificationMarkReadResponse",
    "NotificationRead",
    "TaskDetailsRequest",
    "TaskDetailsResponse",
]
