"""
Access Application Layer
=========================

Policy engine and city filters. Depends on the domain layer only.
"""

from grievance_desk.access.application.services import (
    AccessPolicyEngine,
    CityFilter,
    filter_by_city,
    filter_employees,
    filter_dashboard_users,
    filter_issues,
)

__all__ = [
    "AccessPolicyEngine",
    "CityFilter",
    "filter_by_city",
    "filter_employees",
    "filter_dashboard_users",
    "filter_issues",
]
