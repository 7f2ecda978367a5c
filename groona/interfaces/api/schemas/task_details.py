"""Pydantic models for the task details assistant."""

from __future__ import annotations

from pydantic import BaseModel, Field


class TaskDetailsRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    project_name: str | None = Field(default=None, max_length=255)
    notes: str | None = Field(default=None, max_length=2000)


class TaskDetailsResponse(BaseModel):
    """Suggested details returned to the task creation form."""

    description: str
    acceptance_criteria: list[str] = Field(default_factory=list)
    subtasks: list[str] = Field(default_factory=list)
    estimated_hours: float | None = None
    priority: str


__all__ = ["TaskDetailsRequest", "TaskDetailsResponse"]
