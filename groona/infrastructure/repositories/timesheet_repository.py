"""Persistence helpers for timesheet submissions."""

from __future__ import annotations

from datetime import datetime, timedelta

from sqlalchemy import func
from sqlalchemy.orm import Session

from groona.domain.entities import VALID_TIMESHEET_STATUSES
from groona.infrastructure.models import TimesheetModel
from groona.utils import ensure_app_naive_datetime


class TimesheetRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def has_valid_submission(self, email: str, day: datetime) -> bool:
        """Return ``True`` when ``email`` submitted (or got approved) a timesheet on ``day``."""

        start, end = self._day_bounds(day)
        count = (
            self.session.query(func.count(TimesheetModel.id))
            .filter(func.lower(TimesheetModel.user_email) == email.lower())
            .filter(TimesheetModel.timesheet_date >= start)
            .filter(TimesheetModel.timesheet_date < end)
            .filter(TimesheetModel.status.in_(VALID_TIMESHEET_STATUSES))
            .scalar()
        )
        return bool(count)

    def minutes_submitted(self, email: str, day: datetime) -> int:
        start, end = self._day_bounds(day)
        total = (
            self.session.query(func.coalesce(func.sum(TimesheetModel.total_minutes), 0))
            .filter(func.lower(TimesheetModel.user_email) == email.lower())
            .filter(TimesheetModel.timesheet_date >= start)
            .filter(TimesheetModel.timesheet_date < end)
            .scalar()
        )
        return int(total or 0)

    def minutes_since(self, email: str, since: datetime) -> tuple[int, int]:
        """Return ``(total, rework)`` minutes logged by ``email`` from ``since`` on."""

        total, rework = (
            self.session.query(
                func.coalesce(func.sum(TimesheetModel.total_minutes), 0),
                func.coalesce(func.sum(TimesheetModel.rework_minutes), 0),
            )
            .filter(func.lower(TimesheetModel.user_email) == email.lower())
            .filter(TimesheetModel.timesheet_date >= ensure_app_naive_datetime(since))
            .one()
        )
        return int(total or 0), int(rework or 0)

    @staticmethod
    def _day_bounds(day: datetime) -> tuple[datetime, datetime]:
        start = ensure_app_naive_datetime(day).replace(hour=0, minute=0, second=0, microsecond=0)
        return start, start + timedelta(days=1)


__all__ = ["TimesheetRepository"]
