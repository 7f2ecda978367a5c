"""Domain entity for the velocity measured at the end of a sprint."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class SprintVelocity:
    """Completed versus committed work for one sprint of a project.

    ``accuracy`` is a percentage; 100 means the sprint delivered everything
    it committed to.
    """

    id: int | None
    project_id: int
    sprint_id: str
    sprint_name: str
    accuracy: float
    sprint_end_date: datetime | None = None
    created_date: datetime | None = None
    tenant_id: str | None = None
