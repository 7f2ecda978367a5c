"""SQLAlchemy model for project tasks."""

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, JSON, String

from groona.infrastructure.database import Base


class TaskModel(Base):
    """Database representation for a task."""

    __tablename__ = "task"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    status = Column(String(50), nullable=False, default="todo")
    due_date = Column(DateTime(), nullable=True, index=True)
    assigned_to = Column(JSON, nullable=False, default=list)
    project_id = Column(Integer, ForeignKey("project.id", ondelete="SET NULL"), nullable=True)
    estimated_hours = Column(Float, nullable=True)


__all__ = ["TaskModel"]
