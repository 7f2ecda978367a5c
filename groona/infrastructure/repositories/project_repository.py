"""Persistence helpers for projects."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from groona.domain.entities import Project, ProjectTeamMember
from groona.infrastructure.models import ProjectModel


class ProjectRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, project_id: int) -> Project | None:
        model = self.session.get(ProjectModel, project_id)
        return self._to_entity(model) if model else None

    def list_for_member(self, email: str, *, active_only: bool = True) -> Sequence[Project]:
        """Return projects whose team roster contains ``email``."""

        query = self.session.query(ProjectModel)
        if active_only:
            query = query.filter(ProjectModel.status == "active")
        # Team rosters are JSON documents, membership is resolved in Python.
        projects = [self._to_entity(model) for model in query.order_by(ProjectModel.id).all()]
        return [project for project in projects if project.has_member(email)]

    def freeze_commitments(self, project_id: int) -> bool:
        """Freeze new sprint commitments; return ``False`` when already frozen."""

        model = self.session.get(ProjectModel, project_id)
        if model is None:
            msg = f"Project with id {project_id} not found"
            raise ValueError(msg)
        if model.commitments_frozen:
            return False
        model.commitments_frozen = True
        self.session.add(model)
        self.session.commit()
        return True

    @staticmethod
    def _to_entity(model: ProjectModel) -> Project:
        members: list[ProjectTeamMember] = []
        for entry in model.team_members or []:
            if isinstance(entry, dict) and entry.get("email"):
                members.append(ProjectTeamMember(email=entry["email"], role=entry.get("role")))
            elif isinstance(entry, str):
                members.append(ProjectTeamMember(email=entry))
        return Project(
            id=model.id,
            name=model.name,
            status=model.status,
            tenant_id=model.tenant_id,
            owner_email=model.owner_email,
            commitments_frozen=bool(model.commitments_frozen),
            team_members=members,
        )


__all__ = ["ProjectRepository"]
