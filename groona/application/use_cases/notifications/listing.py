"""Read side of the notification store used by the front-end."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from groona.domain.entities import Notification
from groona.infrastructure.repositories import NotificationRepository

MAX_LIST_LIMIT = 200


def list_notifications(
    session: Session,
    *,
    recipient_email: str | None = None,
    status: str | None = None,
    type: str | None = None,
    category: str | None = None,
    unread_only: bool = False,
    limit: int = 50,
) -> Sequence[Notification]:
    """Return notifications matching the filters, newest first."""

    if limit <= 0 or limit > MAX_LIST_LIMIT:
        msg = f"limit must be between 1 and {MAX_LIST_LIMIT}"
        raise ValueError(msg)

    return NotificationRepository(session).search(
        recipient_email=recipient_email,
        status=status,
        type=type,
        category=category,
        unread_only=unread_only,
        limit=limit,
    )


def mark_notifications_read(session: Session, ids: Iterable[int]) -> int:
    """Acknowledge the given notifications and return how many were updated."""

    unique: list[int] = []
    for notification_id in ids:
        if notification_id not in unique:
            unique.append(notification_id)
    if not unique:
        raise ValueError("At least one notification id is required")
    return NotificationRepository(session).mark_as_read(unique)


__all__ = ["MAX_LIST_LIMIT", "list_notifications", "mark_notifications_read"]
