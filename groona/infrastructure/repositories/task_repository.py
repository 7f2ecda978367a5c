"""Persistence helpers for tasks."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.orm import Query, Session

from groona.domain.entities import FINISHED_TASK_STATUSES, Task
from groona.infrastructure.models import TaskModel
from groona.utils import ensure_app_naive_datetime, ensure_app_timezone


class TaskRepository:
    """Query open tasks by due date."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_open_due_before(self, moment: datetime) -> Sequence[Task]:
        """Return unfinished tasks due strictly before ``moment``, oldest first."""

        query = self._open_tasks().filter(
            TaskModel.due_date < ensure_app_naive_datetime(moment)
        )
        return [self._to_entity(model) for model in query.order_by(TaskModel.due_date).all()]

    def list_open_due_between(self, start: datetime, end: datetime) -> Sequence[Task]:
        query = self._open_tasks().filter(
            TaskModel.due_date >= ensure_app_naive_datetime(start),
            TaskModel.due_date <= ensure_app_naive_datetime(end),
        )
        return [self._to_entity(model) for model in query.order_by(TaskModel.due_date).all()]

    def _open_tasks(self) -> Query:
        return (
            self.session.query(TaskModel)
            .filter(TaskModel.due_date.is_not(None))
            .filter(func.lower(TaskModel.status).not_in(sorted(FINISHED_TASK_STATUSES)))
        )

    @staticmethod
    def _to_entity(model: TaskModel) -> Task:
        return Task(
            id=model.id,
            title=model.title,
            status=model.status,
            due_date=ensure_app_timezone(model.due_date),
            assigned_to=[email for email in (model.assigned_to or []) if isinstance(email, str)],
            project_id=model.project_id,
            estimated_hours=model.estimated_hours,
        )


__all__ = ["TaskRepository"]
