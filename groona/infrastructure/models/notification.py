"""SQLAlchemy model for persisted notifications."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text

from groona.infrastructure.database import Base
from groona.utils import ensure_app_naive_datetime, now_in_app_timezone


def _now_naive():
    return ensure_app_naive_datetime(now_in_app_timezone())


class NotificationModel(Base):
    """Database representation for generated alerts."""

    __tablename__ = "notification"

    id = Column(Integer, primary_key=True, index=True)
    type = Column(String(80), nullable=False, index=True)
    status = Column(String(30), nullable=False, default="OPEN", index=True)
    created_date = Column(DateTime(), nullable=False, default=_now_naive, index=True)
    tenant_id = Column(String(64), nullable=True)
    recipient_email = Column(String(255), nullable=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="SET NULL"), nullable=True)
    rule_id = Column(String(80), nullable=True)
    scope = Column(String(30), nullable=True)
    category = Column(String(30), nullable=True)
    title = Column(String(255), nullable=True)
    message = Column(Text, nullable=True)
    entity_type = Column(String(50), nullable=True)
    entity_id = Column(String(64), nullable=True)
    project_id = Column(Integer, nullable=True)
    link = Column(String(500), nullable=True)
    read = Column(Boolean, nullable=False, default=False)
    attributes = Column(JSON, nullable=False, default=dict)


__all__ = ["NotificationModel"]
