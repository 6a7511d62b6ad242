"""
Role Table Loading
===================

Loads the ``roles`` section of the policy YAML file into a
``RolePermissionTable`` and keeps it hot-reloaded.
"""

from pydantic import ValidationError

from grievance_desk.access.application import AccessPolicyEngine
from grievance_desk.access.domain import RolePermissionTable
from grievance_desk.core import ConfigurationException
from grievance_desk.shared.infrastructure.config_watch import WatchedYAMLConfig
from grievance_desk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class RoleTableManager(WatchedYAMLConfig[RolePermissionTable]):
    """
    Thread-safe role table manager.

    A file without a ``roles`` section keeps the built-in table. Each
    reload swaps in a whole new table, so an engine built from
    ``engine()`` always evaluates against one consistent table.
    """

    def build_snapshot(self, data: dict) -> RolePermissionTable:
        roles = data.get("roles")
        if roles is None:
            return RolePermissionTable()

        try:
            table = RolePermissionTable(roles=roles)
        except ValidationError as e:
            raise ConfigurationException(
                "Invalid role table",
                {"errors": [err["msg"] for err in e.errors()]}
            ) from e

        logger.info("Role table loaded", extra={"roles": table.role_names})
        return table

    def default_snapshot(self) -> RolePermissionTable:
        return RolePermissionTable()

    @property
    def table(self) -> RolePermissionTable:
        return self.snapshot

    def engine(self) -> AccessPolicyEngine:
        """Policy engine bound to the current table."""
        return AccessPolicyEngine(self.snapshot)
