"""SQLAlchemy model for sprint velocity snapshots."""

from sqlalchemy import Column, DateTime, Float, Integer, String

from groona.infrastructure.database import Base
from groona.utils import ensure_app_naive_datetime, now_in_app_timezone


def _now_naive():
    return ensure_app_naive_datetime(now_in_app_timezone())


class SprintVelocityModel(Base):
    """Database representation of the velocity recorded for a sprint."""

    __tablename__ = "sprint_velocity"

    id = Column(Integer, primary_key=True, index=True)
    project_id = Column(Integer, nullable=False, index=True)
    sprint_id = Column(String(64), nullable=False, index=True)
    sprint_name = Column(String(200), nullable=False)
    accuracy = Column(Float, nullable=False)
    sprint_end_date = Column(DateTime(), nullable=True)
    created_date = Column(DateTime(), nullable=False, default=_now_naive)
    tenant_id = Column(String(64), nullable=True)


__all__ = ["SprintVelocityModel"]
