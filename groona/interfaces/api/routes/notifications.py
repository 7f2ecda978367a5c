"""Endpoints exposing generated alerts to the front-end."""

from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from groona.application.use_cases.notifications import (
    MAX_LIST_LIMIT,
    list_notifications,
    mark_notifications_read,
)
from groona.domain.entities import Notification
from groona.infrastructure.database import get_db
from groona.interfaces.api.schemas import (
    NotificationMarkReadRequest,
    NotificationMarkReadResponse,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead(**asdict(notification))


@router.get("", response_model=list[NotificationRead])
def list_notifications_endpoint(
    recipient_email: str | None = None,
    status_filter: str | None = Query(default=None, alias="status"),
    type_filter: str | None = Query(default=None, alias="type"),
    category: str | None = None,
    unread_only: bool = False,
    limit: int = Query(default=50, ge=1, le=MAX_LIST_LIMIT),
    db: Session = Depends(get_db),
) -> list[NotificationRead]:
    """Return notifications matching the filters, newest first."""

    notifications = list_notifications(
        db,
        recipient_email=recipient_email,
        status=status_filter,
        type=type_filter,
        category=category,
        unread_only=unread_only,
        limit=limit,
    )
    return [_notification_to_schema(notification) for notification in notifications]


@router.post("/read", response_model=NotificationMarkReadResponse)
def mark_notifications_read_endpoint(
    payload: NotificationMarkReadRequest,
    db: Session = Depends(get_db),
) -> NotificationMarkReadResponse:
    try:
        updated = mark_notifications_read(db, payload.unique_ids())
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return NotificationMarkReadResponse(updated=updated)
