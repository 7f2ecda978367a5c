"""Audience selection shared by the alert rules."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from groona.domain.entities import Member
from groona.infrastructure.repositories import ProjectRepository, UserRepository

PLAIN_MEMBER_ROLES = frozenset({"member", "employee", "user"})
EXCLUDED_CUSTOM_ROLES = frozenset({"project_manager", "owner", "client", "admin"})


def is_plain_member(member: Member) -> bool:
    """Return ``True`` for active contributors without any management role."""

    return (
        member.status == "active"
        and member.role in PLAIN_MEMBER_ROLES
        and member.custom_role not in EXCLUDED_CUSTOM_ROLES
    )


def plain_members(members: Iterable[Member]) -> list[Member]:
    return [member for member in members if is_plain_member(member)]


def managers_of_member(session: Session, member: Member) -> list[Member]:
    """Resolve who supervises ``member``.

    Owners and project managers of the member's active projects come first,
    followed by the tenant administrators. The member is never included.
    """

    emails: list[str] = []
    for project in ProjectRepository(session).list_for_member(member.email):
        for email in project.manager_emails():
            if email.lower() not in emails:
                emails.append(email.lower())

    users = UserRepository(session)
    resolved = users.get_map_by_emails(emails)
    managers = [resolved[email] for email in emails if email in resolved]
    for admin in users.list_tenant_managers(member.tenant_id):
        if all(admin.id != manager.id for manager in managers):
            managers.append(admin)
    return [manager for manager in managers if manager.email.lower() != member.email.lower()]


def project_managers(session: Session, project_id: int | None) -> Sequence[Member]:
    """Return the active owner and project managers of ``project_id``."""

    if project_id is None:
        return []
    project = ProjectRepository(session).get(project_id)
    if project is None:
        return []
    emails = [email.lower() for email in project.manager_emails()]
    resolved = UserRepository(session).get_map_by_emails(emails)
    return [resolved[email] for email in dict.fromkeys(emails) if email in resolved]


__all__ = [
    "is_plain_member",
    "managers_of_member",
    "plain_members",
    "project_managers",
]
