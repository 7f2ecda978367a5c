"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import datetime

from sqlalchemy.orm import Session

from groona.domain.entities import NOTIFICATION_STATUS_OPEN, Notification
from groona.infrastructure.models import NotificationModel
from groona.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Provide insert, query and bulk delete operations for :class:`Notification`."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, notification_id: int) -> Notification | None:
        model = self.session.get(NotificationModel, notification_id)
        return self._to_entity(model) if model else None

    def search(
        self,
        *,
        recipient_email: str | None = None,
        status: str | None = None,
        type: str | None = None,
        category: str | None = None,
        unread_only: bool = False,
        limit: int | None = 50,
    ) -> Sequence[Notification]:
        query = self.session.query(NotificationModel)
        if recipient_email:
            query = query.filter(NotificationModel.recipient_email == recipient_email)
        if status:
            query = query.filter(NotificationModel.status == status)
        if type:
            query = query.filter(NotificationModel.type == type)
        if category:
            query = query.filter(NotificationModel.category == category)
        if unread_only:
            query = query.filter(NotificationModel.read.is_(False))
        query = query.order_by(
            NotificationModel.created_date.desc(), NotificationModel.id.desc()
        )
        if limit is not None:
            query = query.limit(limit)
        return [self._to_entity(model) for model in query.all()]

    def find_open(
        self,
        *,
        recipient_email: str | None,
        type: str,
        entity_id: str | None = None,
        statuses: Sequence[str] = (NOTIFICATION_STATUS_OPEN,),
    ) -> Notification | None:
        """Return the newest notification in ``statuses`` matching the dedup key."""

        query = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.type == type)
            .filter(NotificationModel.status.in_(tuple(statuses)))
            .filter(NotificationModel.recipient_email == recipient_email)
        )
        if entity_id is not None:
            query = query.filter(NotificationModel.entity_id == entity_id)
        model = query.order_by(NotificationModel.created_date.desc()).first()
        return self._to_entity(model) if model else None

    def find_since(
        self, *, recipient_email: str | None, type: str, since: datetime
    ) -> Notification | None:
        """Return the newest notification of ``type`` created at or after ``since``, any status."""

        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.type == type)
            .filter(NotificationModel.recipient_email == recipient_email)
            .filter(NotificationModel.created_date >= ensure_app_naive_datetime(since))
            .order_by(NotificationModel.created_date.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def mark_as_read(self, notification_ids: Iterable[int]) -> int:
        ids = [notification_id for notification_id in notification_ids if notification_id is not None]
        if not ids:
            return 0
        updated = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id.in_(ids))
            .update({NotificationModel.read: True}, synchronize_session=False)
        )
        self.session.commit()
        return updated

    def delete_by_status(self, status: str) -> int:
        """Delete every notification in ``status`` with a single bulk statement."""

        deleted = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.status == status)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    def delete_by_type_since(self, type: str, since: datetime) -> int:
        """Delete notifications of ``type`` created at or after ``since``."""

        cutoff = ensure_app_naive_datetime(since)
        deleted = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.type == type)
            .filter(NotificationModel.created_date >= cutoff)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return deleted

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.type = notification.type
        model.status = notification.status
        model.created_date = ensure_app_naive_datetime(
            notification.created_date or now_in_app_timezone()
        )
        model.tenant_id = notification.tenant_id
        model.recipient_email = notification.recipient_email
        model.user_id = notification.user_id
        model.rule_id = notification.rule_id
        model.scope = notification.scope
        model.category = notification.category
        model.title = notification.title
        model.message = notification.message
        model.entity_type = notification.entity_type
        model.entity_id = notification.entity_id
        model.project_id = notification.project_id
        model.link = notification.link
        model.read = notification.read
        model.attributes = notification.attributes or {}

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            type=model.type,
            status=model.status,
            created_date=ensure_app_timezone(model.created_date),
            tenant_id=model.tenant_id,
            recipient_email=model.recipient_email,
            user_id=model.user_id,
            rule_id=model.rule_id,
            scope=model.scope,
            category=model.category,
            title=model.title,
            message=model.message,
            entity_type=model.entity_type,
            entity_id=model.entity_id,
            project_id=model.project_id,
            link=model.link,
            read=bool(model.read),
            attributes=model.attributes or {},
        )


__all__ = ["NotificationRepository"]
