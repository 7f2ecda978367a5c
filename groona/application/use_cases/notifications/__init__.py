"""Use cases operating on the notification store."""

from .listing import MAX_LIST_LIMIT, list_notifications, mark_notifications_read
from .maintenance import (
    RESETTABLE_ALARM_TYPES,
    delete_open_notifications,
    reset_todays_alarms,
)
from .raise_alert import raise_alert

__all__ = [
    "MAX_LIST_LIMIT",
    "RESETTABLE_ALARM_TYPES",
    "delete_open_notifications",
    "list_notifications",
    "mark_notifications_read",
    "raise_alert",
    "reset_todays_alarms",
]
