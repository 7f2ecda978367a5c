"""Domain entity representing a generated alert notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

NOTIFICATION_STATUS_OPEN = "OPEN"
NOTIFICATION_STATUS_RESOLVED = "RESOLVED"
NOTIFICATION_STATUS_APPEALED = "APPEALED"

NOTIFICATION_CATEGORY_ALERT = "alert"
NOTIFICATION_CATEGORY_ALARM = "alarm"

TIMESHEET_LOCKOUT_ALARM = "timesheet_lockout_alarm"
TIMESHEET_MISSING_ALERT = "timesheet_missing_alert"
TEAM_MEMBER_LOCKOUT_NOTICE = "team_member_lockout_notice"
TASK_OVERDUE_ALERT = "task_overdue_alert"
TASK_ESCALATION_ALERT = "task_escalation_alert"
MULTIPLE_OVERDUE_ALARM = "multiple_overdue_alarm"
LOW_WORKLOAD_ALERT = "low_workload_alert"
REWORK_ALERT = "rework_alert"
REWORK_ALARM = "rework_alarm"
HIGH_REWORK_ALARM = "high_rework_alarm"
PM_VELOCITY_DROP = "PM_VELOCITY_DROP"
PM_CONSISTENT_VELOCITY_DROP = "PM_CONSISTENT_VELOCITY_DROP"


@dataclass
class Notification:
    """Document recording a detected condition requiring user attention."""

    id: int | None
    type: str
    status: str = NOTIFICATION_STATUS_OPEN
    created_date: datetime | None = None
    tenant_id: str | None = None
    recipient_email: str | None = None
    user_id: int | None = None
    rule_id: str | None = None
    scope: str | None = "user"
    category: str | None = NOTIFICATION_CATEGORY_ALERT
    title: str | None = None
    message: str | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    project_id: int | None = None
    link: str | None = None
    read: bool = False
    attributes: dict[str, Any] = field(default_factory=dict)

    def is_open(self) -> bool:
        return self.status == NOTIFICATION_STATUS_OPEN


__all__ = [
    "HIGH_REWORK_ALARM",
    "LOW_WORKLOAD_ALERT",
    "MULTIPLE_OVERDUE_ALARM",
    "NOTIFICATION_CATEGORY_ALARM",
    "NOTIFICATION_CATEGORY_ALERT",
    "NOTIFICATION_STATUS_APPEALED",
    "NOTIFICATION_STATUS_OPEN",
    "NOTIFICATION_STATUS_RESOLVED",
    "Notification",
    "PM_CONSISTENT_VELOCITY_DROP",
    "PM_VELOCITY_DROP",
    "REWORK_ALARM",
    "REWORK_ALERT",
    "TASK_ESCALATION_ALERT",
    "TASK_OVERDUE_ALERT",
    "TEAM_MEMBER_LOCKOUT_NOTICE",
    "TIMESHEET_LOCKOUT_ALARM",
    "TIMESHEET_MISSING_ALERT",
]
