"""Domain entity representing a workspace member."""

from dataclasses import dataclass

MANAGER_ROLES = frozenset({"admin", "owner", "manager"})
PROJECT_MANAGER_ROLES = frozenset({"project_manager", "owner"})


@dataclass
class Member:
    """Core attributes describing a Groona user for alerting purposes."""

    id: int | None
    email: str
    full_name: str | None = None
    role: str = "member"
    custom_role: str | None = None
    status: str = "active"
    tenant_id: str | None = None
    working_hours_per_day: float = 8.0
    is_timesheet_locked: bool = False
    is_overdue_blocked: bool = False

    @property
    def display_name(self) -> str:
        return self.full_name or self.email

    def is_active(self) -> bool:
        return self.status != "inactive"

    def is_viewer(self) -> bool:
        """Return ``True`` for plain members restricted to the viewer role."""

        return self.role == "member" and self.custom_role == "viewer"

    def is_project_manager(self) -> bool:
        return self.role == "project_manager" or self.custom_role == "project_manager"

    def is_tenant_manager(self) -> bool:
        return self.role in MANAGER_ROLES
