"""
Access Infrastructure Layer
============================

- External: role table loading with hot-reload
"""

from grievance_desk.access.infrastructure.external import RoleTableManager

__all__ = ["RoleTableManager"]
