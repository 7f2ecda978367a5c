"""Insert alerts without piling up duplicates across ticks."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from groona.domain.entities import NOTIFICATION_STATUS_OPEN, Notification
from groona.infrastructure.repositories import NotificationRepository


def raise_alert(
    session: Session,
    notification: Notification,
    *,
    active_statuses: Sequence[str] = (NOTIFICATION_STATUS_OPEN,),
) -> Notification | None:
    """Persist ``notification`` unless an equivalent active one already exists.

    Equivalence is the ``(recipient_email, type, entity_id)`` triple, looked up
    among notifications whose status is in ``active_statuses``. Existing
    notifications are never modified. Returns the created notification or
    ``None`` when it was skipped.
    """

    repository = NotificationRepository(session)
    existing = repository.find_open(
        recipient_email=notification.recipient_email,
        type=notification.type,
        entity_id=notification.entity_id,
        statuses=active_statuses,
    )
    if existing is not None:
        return None
    return repository.create(notification)


__all__ = ["raise_alert"]
