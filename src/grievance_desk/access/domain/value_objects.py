"""
Access Value Objects
=====================

The role to permission table.

The table is an explicitly constructed, immutable value object that is
passed into the policy engine; a reload builds a new table.
"""

from typing import Dict, FrozenSet, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from grievance_desk.config import Permission, PERMISSION_VOCABULARY


DEFAULT_ROLE_PERMISSIONS: Dict[str, List[str]] = {
    "Super Admin": sorted(PERMISSION_VOCABULARY),
    "HR Admin": [
        Permission.ACCESS_ALL_CITIES,
        Permission.MANAGE_DASHBOARD_USERS,
        Permission.MANAGE_TICKETS_ALL,
        Permission.MANAGE_TICKETS_ASSIGNED,
        Permission.MANAGE_USERS,
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_FEEDBACK_ANALYTICS,
        Permission.VIEW_ISSUE_ANALYTICS,
        Permission.VIEW_TICKETS_ALL,
        Permission.VIEW_TICKETS_ASSIGNED,
        Permission.VIEW_INTERNAL_COMMENTS,
    ],
    "City Head": [
        Permission.ACCESS_CITY_RESTRICTED,
        Permission.MANAGE_TICKETS_ALL,
        Permission.MANAGE_TICKETS_ASSIGNED,
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_FEEDBACK_ANALYTICS,
        Permission.VIEW_ISSUE_ANALYTICS,
        Permission.VIEW_TICKETS_ALL,
        Permission.VIEW_TICKETS_ASSIGNED,
        Permission.VIEW_INTERNAL_COMMENTS,
    ],
    "CRM": [
        Permission.ACCESS_CITY_RESTRICTED,
        Permission.MANAGE_TICKETS_ASSIGNED,
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_ISSUE_ANALYTICS,
        Permission.VIEW_TICKETS_ASSIGNED,
    ],
    "Cluster Head": [
        Permission.ACCESS_CITY_RESTRICTED,
        Permission.MANAGE_TICKETS_ASSIGNED,
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_ISSUE_ANALYTICS,
        Permission.VIEW_TICKETS_ASSIGNED,
    ],
    "Ops Head": [
        Permission.ACCESS_ALL_CITIES,
        Permission.MANAGE_TICKETS_ASSIGNED,
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_ISSUE_ANALYTICS,
        Permission.VIEW_FEEDBACK_ANALYTICS,
        Permission.VIEW_TICKETS_ASSIGNED,
    ],
    "Payroll Ops": [
        Permission.ACCESS_ALL_CITIES,
        Permission.MANAGE_TICKETS_ASSIGNED,
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_ISSUE_ANALYTICS,
        Permission.VIEW_TICKETS_ASSIGNED,
    ],
    "TA Associate": [
        Permission.ACCESS_CITY_RESTRICTED,
        Permission.MANAGE_TICKETS_ASSIGNED,
        Permission.VIEW_DASHBOARD,
        Permission.VIEW_ISSUE_ANALYTICS,
        Permission.VIEW_TICKETS_ASSIGNED,
    ],
    "Employee": [
        Permission.VIEW_TICKETS_ASSIGNED,
    ],
}


class RolePermissionTable(BaseModel):
    """
    Mapping of role name to its ordered, de-duplicated permissions.

    Every permission must belong to the closed vocabulary.
    """
    model_config = ConfigDict(frozen=True)

    roles: Dict[str, Tuple[str, ...]] = Field(
        default_factory=lambda: {
            role: tuple(perms) for role, perms in DEFAULT_ROLE_PERMISSIONS.items()
        },
        description="Role name to granted permissions"
    )

    @field_validator("roles")
    @classmethod
    def validate_permissions(cls, v: Dict[str, Tuple[str, ...]]) -> Dict[str, Tuple[str, ...]]:
        """Reject unknown permission tags and drop duplicates, keeping order."""
        cleaned = {}
        for role, permissions in v.items():
            unknown = [p for p in permissions if p not in PERMISSION_VOCABULARY]
            if unknown:
                raise ValueError(f"role '{role}' has unknown permissions: {unknown}")
            cleaned[role] = tuple(dict.fromkeys(permissions))
        return cleaned

    @property
    def role_names(self) -> List[str]:
        return sorted(self.roles)

    def permissions_for(self, role: str) -> FrozenSet[str]:
        """Permission set of ``role``; empty for unknown roles."""
        return frozenset(self.roles.get(role, ()))
