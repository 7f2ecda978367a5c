"""Aggregate application use cases."""

from .notifications import (
    delete_open_notifications,
    list_notifications,
    mark_notifications_read,
    raise_alert,
    reset_todays_alarms,
)
from .tasks import generate_task_details

__all__ = [
    "delete_open_notifications",
    "generate_task_details",
    "list_notifications",
    "mark_notifications_read",
    "raise_alert",
    "reset_todays_alarms",
]
