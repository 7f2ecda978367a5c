"""Use case producing AI suggested details for a new task."""

from __future__ import annotations

from typing import Protocol

from groona.domain.entities import TaskDetails

MAX_TITLE_LENGTH = 255


class TaskDetailGenerator(Protocol):
    def generate(
        self, title: str, *, project_name: str | None = None, notes: str | None = None
    ) -> TaskDetails: ...


def generate_task_details(
    generator: TaskDetailGenerator,
    *,
    title: str,
    project_name: str | None = None,
    notes: str | None = None,
) -> TaskDetails:
    """Validate the request and delegate to ``generator``."""

    normalized_title = (title or "").strip()
    if not normalized_title:
        raise ValueError("Task title cannot be empty")
    if len(normalized_title) > MAX_TITLE_LENGTH:
        msg = f"Task title cannot exceed {MAX_TITLE_LENGTH} characters"
        raise ValueError(msg)

    return generator.generate(
        normalized_title,
        project_name=(project_name or "").strip() or None,
        notes=(notes or "").strip() or None,
    )


__all__ = ["TaskDetailGenerator", "generate_task_details"]
