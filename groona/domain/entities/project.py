"""Domain entity representing a project and its team."""

from __future__ import annotations

from dataclasses import dataclass, field

from .member import PROJECT_MANAGER_ROLES


@dataclass
class ProjectTeamMember:
    email: str
    role: str | None = None


@dataclass
class Project:
    """A project with its owner and team roster."""

    id: int | None
    name: str
    status: str = "active"
    tenant_id: str | None = None
    owner_email: str | None = None
    commitments_frozen: bool = False
    team_members: list[ProjectTeamMember] = field(default_factory=list)

    def has_member(self, email: str) -> bool:
        normalized = email.lower()
        return any(member.email.lower() == normalized for member in self.team_members)

    def manager_emails(self) -> list[str]:
        """Return the owner followed by team members holding a manager role."""

        emails: list[str] = []
        if self.owner_email and "@" in self.owner_email:
            emails.append(self.owner_email)
        for member in self.team_members:
            if member.role in PROJECT_MANAGER_ROLES and member.email not in emails:
                emails.append(member.email)
        return emails
