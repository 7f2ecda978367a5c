"""SQLAlchemy model for projects."""

from sqlalchemy import Boolean, Column, Integer, JSON, String

from groona.infrastructure.database import Base


class ProjectModel(Base):
    """Database representation for a project and its team roster."""

    __tablename__ = "project"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    status = Column(String(30), nullable=False, default="active")
    tenant_id = Column(String(64), nullable=True, index=True)
    owner_email = Column(String(255), nullable=True)
    commitments_frozen = Column(Boolean, nullable=False, default=False)
    # List of {"email": ..., "role": ...} entries.
    team_members = Column(JSON, nullable=False, default=list)


__all__ = ["ProjectModel"]
