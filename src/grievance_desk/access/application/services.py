"""
Access Application Services
============================

Permission checks, city-scope resolution and city filtering.

Everything here is a pure function of the injected role table and the
values passed in; data is fetched by the caller.
"""

from typing import Any, Iterable, List, Mapping, Optional, Sequence, TypeVar

from grievance_desk.access.domain import Actor, CityScope, RolePermissionTable
from grievance_desk.config import Permission
from grievance_desk.core import PermissionDenied, Unauthenticated
from grievance_desk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class AccessPolicyEngine:
    """
    Role-based access control over an injected ``RolePermissionTable``.

    Unknown roles have no permissions. Scope permissions decide which
    cities an actor sees; capability permissions gate actions.
    """

    def __init__(self, table: Optional[RolePermissionTable] = None):
        self._table = table or RolePermissionTable()

    @property
    def table(self) -> RolePermissionTable:
        return self._table

    def resolve_permissions(self, role: str):
        """Permissions granted to ``role`` (empty set for unknown roles)."""
        return self._table.permissions_for(role)

    def has_permission(self, role: str, permission: str) -> bool:
        return permission in self.resolve_permissions(role)

    def has_any_permission(self, role: str, permissions: Iterable[str]) -> bool:
        """True when ``role`` holds at least one of ``permissions``."""
        granted = self.resolve_permissions(role)
        return any(permission in granted for permission in permissions)

    def resolve_city_scope(self, actor: Actor) -> CityScope:
        """
        Resolve the cities ``actor`` may see.

        ``access:all_cities`` wins over ``access:city_restricted``; a
        restricted role without a city on the actor stays unrestricted.
        """
        granted = self.resolve_permissions(actor.role)

        if Permission.ACCESS_ALL_CITIES in granted:
            return CityScope.unrestricted()

        if Permission.ACCESS_CITY_RESTRICTED in granted and actor.city:
            logger.debug(
                "City restriction applied",
                extra={"actor_id": str(actor.id), "role": actor.role, "city": actor.city}
            )
            return CityScope.single_city(actor.city)

        return CityScope.unrestricted()

    def require_permission(self, actor: Optional[Actor], permission: str) -> Actor:
        """
        Guard for the request layer.

        Raises:
            Unauthenticated: no actor
            PermissionDenied: actor's role lacks ``permission``
        """
        if actor is None:
            raise Unauthenticated()
        if not self.has_permission(actor.role, permission):
            logger.info(
                "Permission denied",
                extra={"actor_id": str(actor.id), "role": actor.role, "permission": permission}
            )
            raise PermissionDenied(permission, actor_id=actor.id, role=actor.role)
        return actor

    def require_any_permission(self, actor: Optional[Actor], permissions: Sequence[str]) -> Actor:
        """Guard passing when the actor holds at least one of ``permissions``."""
        if actor is None:
            raise Unauthenticated()
        if not self.has_any_permission(actor.role, permissions):
            wanted = " or ".join(permissions)
            logger.info(
                "Permission denied",
                extra={"actor_id": str(actor.id), "role": actor.role, "permission": wanted}
            )
            raise PermissionDenied(wanted, actor_id=actor.id, role=actor.role)
        return actor

    @staticmethod
    def can_access_city(scope: CityScope, city: Optional[str]) -> bool:
        return scope.allows(city)


# ========== City filtering ==========

def _field(item: Any, *names: str) -> Any:
    """First present value of ``names`` on a record object or mapping row."""
    for name in names:
        if isinstance(item, Mapping):
            if item.get(name) is not None:
                return item[name]
        elif getattr(item, name, None) is not None:
            return getattr(item, name)
    return None


def filter_by_city(items: Iterable[T], scope: CityScope) -> List[T]:
    """
    Keep items whose city is in scope (all items when unrestricted).

    Items may be record objects with a ``city`` attribute or mapping rows
    with a ``city`` key.
    """
    items = list(items)
    if not scope.restricted:
        return items
    return [item for item in items if scope.allows(_field(item, "city"))]


def filter_employees(employees: Iterable[T], scope: CityScope) -> List[T]:
    return filter_by_city(employees, scope)


def filter_dashboard_users(users: Iterable[T], scope: CityScope) -> List[T]:
    return filter_by_city(users, scope)


def filter_issues(
    issues: Iterable[T],
    employees_by_id: Mapping[Any, Any],
    scope: CityScope
) -> List[T]:
    """
    Keep issues raised by employees of an allowed city.

    Issues and employees may be objects or mapping rows; the issue's
    employee is read from ``employee_id`` or ``employeeId``. Issues whose
    employee is missing from ``employees_by_id`` are dropped when the scope
    is restricted.
    """
    issues = list(issues)
    if not scope.restricted:
        return issues

    visible = []
    for issue in issues:
        employee = employees_by_id.get(_field(issue, "employee_id", "employeeId"))
        if employee is None:
            continue
        if scope.allows(_field(employee, "city")):
            visible.append(issue)
    return visible


class CityFilter:
    """A resolved scope bundled with the three collection filters."""

    def __init__(self, scope: CityScope):
        self.scope = scope

    @classmethod
    def for_actor(cls, engine: AccessPolicyEngine, actor: Actor) -> "CityFilter":
        return cls(engine.resolve_city_scope(actor))

    def employees(self, employees: Iterable[T]) -> List[T]:
        return filter_employees(employees, self.scope)

    def dashboard_users(self, users: Iterable[T]) -> List[T]:
        return filter_dashboard_users(users, self.scope)

    def issues(self, issues: Iterable[T], employees_by_id: Mapping[Any, Any]) -> List[T]:
        return filter_issues(issues, employees_by_id, self.scope)
