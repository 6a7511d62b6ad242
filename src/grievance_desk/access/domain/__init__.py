"""
Access Domain Layer
===================

Domain layer for role-based access control with city scoping.

Contains:
- Entities: Actor, Performer, CityScope, Employee, DashboardUser
- Value Objects: RolePermissionTable

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from grievance_desk.access.domain.entities import (
    Actor,
    Performer,
    CityScope,
    Employee,
    DashboardUser,
)
from grievance_desk.access.domain.value_objects import (
    RolePermissionTable,
    DEFAULT_ROLE_PERMISSIONS,
)

__all__ = [
    # Entities
    "Actor",
    "Performer",
    "CityScope",
    "Employee",
    "DashboardUser",
    # Value Objects
    "RolePermissionTable",
    "DEFAULT_ROLE_PERMISSIONS",
]
