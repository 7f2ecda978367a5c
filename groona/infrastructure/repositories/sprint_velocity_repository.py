"""Persistence helpers for sprint velocity snapshots."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from groona.domain.entities import SprintVelocity
from groona.infrastructure.models import SprintVelocityModel


class SprintVelocityRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def project_ids(self) -> list[int]:
        rows = (
            self.session.query(SprintVelocityModel.project_id)
            .distinct()
            .order_by(SprintVelocityModel.project_id)
            .all()
        )
        return [row[0] for row in rows]

    def latest_sprints(self, project_id: int, limit: int = 2) -> Sequence[SprintVelocity]:
        """Return the most recent snapshot of the last ``limit`` sprints, newest first.

        A sprint can be measured several times; only its newest snapshot counts.
        """

        models = (
            self.session.query(SprintVelocityModel)
            .filter(SprintVelocityModel.project_id == project_id)
            .order_by(
                SprintVelocityModel.sprint_end_date.desc(),
                SprintVelocityModel.created_date.desc(),
                SprintVelocityModel.id.desc(),
            )
            .all()
        )
        latest: dict[str, SprintVelocity] = {}
        for model in models:
            if model.sprint_id not in latest:
                latest[model.sprint_id] = self._to_entity(model)
            if len(latest) == limit:
                break
        return list(latest.values())

    @staticmethod
    def _to_entity(model: SprintVelocityModel) -> SprintVelocity:
        return SprintVelocity(
            id=model.id,
            project_id=model.project_id,
            sprint_id=model.sprint_id,
            sprint_name=model.sprint_name,
            accuracy=model.accuracy,
            sprint_end_date=model.sprint_end_date,
            created_date=model.created_date,
            tenant_id=model.tenant_id,
        )


__all__ = ["SprintVelocityRepository"]
