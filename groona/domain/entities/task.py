"""Domain entity representing a project task."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

FINISHED_TASK_STATUSES = frozenset({"completed", "done", "closed", "resolved", "verified"})


@dataclass
class Task:
    """Unit of work assigned to one or more members."""

    id: int | None
    title: str
    status: str = "todo"
    due_date: datetime | None = None
    assigned_to: list[str] = field(default_factory=list)
    project_id: int | None = None
    estimated_hours: float | None = None

    def is_finished(self) -> bool:
        return (self.status or "").lower() in FINISHED_TASK_STATUSES

    def is_assigned_to(self, email: str) -> bool:
        normalized = email.lower()
        return any(assignee.lower() == normalized for assignee in self.assigned_to)
