"""SQLAlchemy model for daily timesheet submissions."""

from sqlalchemy import Column, DateTime, Integer, String

from groona.infrastructure.database import Base


class TimesheetModel(Base):
    """Database representation for one member's timesheet day."""

    __tablename__ = "user_timesheet"

    id = Column(Integer, primary_key=True, index=True)
    user_email = Column(String(255), nullable=False, index=True)
    timesheet_date = Column(DateTime(), nullable=False, index=True)
    status = Column(String(20), nullable=False, default="submitted")
    total_minutes = Column(Integer, nullable=False, default=0)
    rework_minutes = Column(Integer, nullable=False, default=0)


__all__ = ["TimesheetModel"]
