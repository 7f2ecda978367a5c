"""SQLAlchemy model for workspace members."""

from sqlalchemy import Boolean, Column, Float, Integer, String

from groona.infrastructure.database import Base


class UserModel(Base):
    """Database representation for a Groona user."""

    __tablename__ = "user"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    full_name = Column(String(150), nullable=True)
    role = Column(String(50), nullable=False, default="member")
    custom_role = Column(String(50), nullable=True)
    status = Column(String(20), nullable=False, default="active")
    tenant_id = Column(String(64), nullable=True, index=True)
    working_hours_per_day = Column(Float, nullable=False, default=8.0)
    is_timesheet_locked = Column(Boolean, nullable=False, default=False)
    is_overdue_blocked = Column(Boolean, nullable=False, default=False)


__all__ = ["UserModel"]
