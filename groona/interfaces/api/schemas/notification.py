"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationMarkReadRequest(BaseModel):
    """Payload used to mark a batch of notifications as read."""

    ids: list[int] = Field(..., min_length=1, description="Notification identifiers")

    def unique_ids(self) -> list[int]:
        """Return the list of identifiers without duplicates preserving order."""

        unique: list[int] = []
        seen: set[int] = set()
        for notification_id in self.ids:
            if notification_id in seen:
                continue
            seen.add(notification_id)
            unique.append(notification_id)
        return unique


class NotificationMarkReadResponse(BaseModel):
    updated: int


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type: str
    status: str
    category: str | None = None
    recipient_email: str | None = None
    user_id: int | None = None
    tenant_id: str | None = None
    rule_id: str | None = None
    scope: str | None = None
    title: str | None = None
    message: str | None = None
    entity_type: str | None = None
    entity_id: str | None = None
    project_id: int | None = None
    link: str | None = None
    read: bool = False
    created_date: datetime | None = None
    attributes: dict[str, Any] = Field(default_factory=dict)


__all__ = ["NotificationMarkReadRequest", "NotificationMarkReadResponse", "NotificationRead"]
