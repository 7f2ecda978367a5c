"""Persistence helpers for workspace members."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import func
from sqlalchemy.orm import Session

from groona.domain.entities import MANAGER_ROLES, Member
from groona.infrastructure.models import UserModel


class UserRepository:
    """Read members and update their alert driven flags."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> Member | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> Member | None:
        model = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email) == email.lower())
            .first()
        )
        return self._to_entity(model) if model else None

    def get_map_by_emails(self, emails: Iterable[str]) -> dict[str, Member]:
        """Return active members keyed by their lowercase email."""

        normalized = {email.lower() for email in emails if email}
        if not normalized:
            return {}
        models = (
            self.session.query(UserModel)
            .filter(func.lower(UserModel.email).in_(normalized))
            .filter(UserModel.status != "inactive")
            .all()
        )
        return {model.email.lower(): self._to_entity(model) for model in models}

    def list_active(self) -> Sequence[Member]:
        models = (
            self.session.query(UserModel)
            .filter(UserModel.status != "inactive")
            .order_by(UserModel.id)
            .all()
        )
        return [self._to_entity(model) for model in models]

    def list_tenant_managers(self, tenant_id: str | None) -> Sequence[Member]:
        query = (
            self.session.query(UserModel)
            .filter(UserModel.role.in_(sorted(MANAGER_ROLES)))
            .filter(UserModel.status == "active")
        )
        if tenant_id is None:
            query = query.filter(UserModel.tenant_id.is_(None))
        else:
            query = query.filter(UserModel.tenant_id == tenant_id)
        return [self._to_entity(model) for model in query.order_by(UserModel.id).all()]

    def set_flags(
        self,
        user_id: int,
        *,
        is_timesheet_locked: bool | None = None,
        is_overdue_blocked: bool | None = None,
    ) -> Member:
        model = self.session.get(UserModel, user_id)
        if model is None:
            msg = f"User with id {user_id} not found"
            raise ValueError(msg)
        if is_timesheet_locked is not None:
            model.is_timesheet_locked = is_timesheet_locked
        if is_overdue_blocked is not None:
            model.is_overdue_blocked = is_overdue_blocked
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: UserModel) -> Member:
        return Member(
            id=model.id,
            email=model.email,
            full_name=model.full_name,
            role=model.role,
            custom_role=model.custom_role,
            status=model.status,
            tenant_id=model.tenant_id,
            working_hours_per_day=model.working_hours_per_day or 8.0,
            is_timesheet_locked=bool(model.is_timesheet_locked),
            is_overdue_blocked=bool(model.is_overdue_blocked),
        )


__all__ = ["UserRepository"]
