"""Value object holding AI generated task details."""

from __future__ import annotations

from dataclasses import dataclass, field

TASK_PRIORITIES = ("low", "medium", "high", "urgent")


@dataclass(frozen=True)
class TaskDetails:
    """Description and breakdown suggested for a task title."""

    description: str
    acceptance_criteria: list[str] = field(default_factory=list)
    subtasks: list[str] = field(default_factory=list)
    estimated_hours: float | None = None
    priority: str = "medium"
