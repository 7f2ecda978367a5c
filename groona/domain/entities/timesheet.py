"""Domain entity representing a daily timesheet submission."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

TIMESHEET_STATUS_DRAFT = "draft"
TIMESHEET_STATUS_SUBMITTED = "submitted"
TIMESHEET_STATUS_APPROVED = "approved"
VALID_TIMESHEET_STATUSES = (TIMESHEET_STATUS_SUBMITTED, TIMESHEET_STATUS_APPROVED)


@dataclass
class TimesheetEntry:
    id: int | None
    user_email: str
    timesheet_date: datetime
    status: str = TIMESHEET_STATUS_SUBMITTED
    total_minutes: int = 0
    rework_minutes: int = 0
