"""Tests for role permissions, city scope resolution and request guards."""

import pytest
from pydantic import ValidationError

from grievance_desk.access.application import AccessPolicyEngine
from grievance_desk.access.domain import Actor, CityScope, Performer, RolePermissionTable
from grievance_desk.config import Permission, PERMISSION_VOCABULARY, UserType
from grievance_desk.core import PermissionDenied, Unauthenticated


class TestPermissions:

    def test_super_admin_holds_the_whole_vocabulary(self, engine):
        assert engine.resolve_permissions("Super Admin") == PERMISSION_VOCABULARY
        for permission in PERMISSION_VOCABULARY:
            assert engine.has_permission("Super Admin", permission)

    def test_unknown_role_has_nothing(self, engine):
        assert engine.resolve_permissions("Intern") == frozenset()
        assert not engine.has_permission("Intern", Permission.VIEW_DASHBOARD)

    @pytest.mark.parametrize("role, permission, expected", [
        ("HR Admin", Permission.MANAGE_USERS, True),
        ("HR Admin", Permission.MANAGE_RBAC, False),
        ("City Head", Permission.VIEW_TICKETS_ALL, True),
        ("CRM", Permission.VIEW_TICKETS_ALL, False),
        ("Employee", Permission.VIEW_TICKETS_ASSIGNED, True),
        ("Employee", Permission.VIEW_DASHBOARD, False),
    ])
    def test_default_roles(self, engine, role, permission, expected):
        assert engine.has_permission(role, permission) is expected

    def test_has_any_permission(self, engine):
        assert engine.has_any_permission("CRM", [Permission.VIEW_TICKETS_ALL, Permission.VIEW_TICKETS_ASSIGNED])
        assert not engine.has_any_permission("CRM", [Permission.MANAGE_USERS, Permission.MANAGE_RBAC])
        assert not engine.has_any_permission("CRM", [])


class TestRolePermissionTable:

    def test_unknown_permission_is_rejected(self):
        with pytest.raises(ValidationError):
            RolePermissionTable(roles={"Auditor": ["view:everything"]})

    def test_duplicates_are_dropped_in_order(self):
        table = RolePermissionTable(roles={
            "Auditor": [Permission.VIEW_DASHBOARD, Permission.VIEW_SECURITY, Permission.VIEW_DASHBOARD],
        })
        assert table.roles["Auditor"] == (Permission.VIEW_DASHBOARD, Permission.VIEW_SECURITY)

    def test_table_is_immutable(self):
        table = RolePermissionTable()
        with pytest.raises(ValidationError):
            table.roles = {}

    def test_injected_table_replaces_defaults(self):
        engine = AccessPolicyEngine(RolePermissionTable(roles={"Auditor": [Permission.VIEW_DASHBOARD]}))
        assert engine.has_permission("Auditor", Permission.VIEW_DASHBOARD)
        assert not engine.has_permission("Super Admin", Permission.VIEW_DASHBOARD)


class TestCityScope:

    def test_city_restricted_role_sees_only_its_city(self, engine):
        scope = engine.resolve_city_scope(Actor(id=5, role="City Head", city="Bangalore"))
        assert scope.restricted
        assert scope.allowed_cities == {"Bangalore"}
        assert scope.restriction_message == "Access restricted to: Bangalore"

    def test_restricted_role_without_city_is_unrestricted(self, engine):
        scope = engine.resolve_city_scope(Actor(id=5, role="CRM"))
        assert scope == CityScope.unrestricted()

    def test_all_cities_role_ignores_actor_city(self, engine):
        scope = engine.resolve_city_scope(Actor(id=1, role="HR Admin", city="Delhi"))
        assert not scope.restricted
        assert scope.allowed_cities is None
        assert scope.restriction_message == ""

    def test_role_without_scope_permissions_is_unrestricted(self, engine):
        assert not engine.resolve_city_scope(Actor(id=9, role="Employee", city="Pune")).restricted

    @pytest.mark.parametrize("permissions", [
        [Permission.ACCESS_ALL_CITIES, Permission.ACCESS_CITY_RESTRICTED],
        [Permission.ACCESS_CITY_RESTRICTED, Permission.ACCESS_ALL_CITIES],
    ])
    def test_all_cities_wins_regardless_of_order(self, permissions):
        engine = AccessPolicyEngine(RolePermissionTable(roles={"Hybrid": permissions}))
        scope = engine.resolve_city_scope(Actor(id=1, role="Hybrid", city="Delhi"))
        assert not scope.restricted

    def test_super_admin_is_unrestricted(self, engine):
        assert not engine.resolve_city_scope(Actor(id=1, role="Super Admin", city="Delhi")).restricted

    def test_can_access_city(self):
        scope = CityScope.single_city("Delhi")
        assert AccessPolicyEngine.can_access_city(scope, "Delhi")
        assert not AccessPolicyEngine.can_access_city(scope, "Mumbai")
        assert not AccessPolicyEngine.can_access_city(scope, None)
        assert AccessPolicyEngine.can_access_city(CityScope.unrestricted(), None)


class TestGuards:

    def test_missing_actor_is_unauthenticated(self, engine):
        with pytest.raises(Unauthenticated):
            engine.require_permission(None, Permission.VIEW_DASHBOARD)

    def test_lacking_permission_is_denied(self, engine):
        actor = Actor(id=9, role="Employee")
        with pytest.raises(PermissionDenied) as exc_info:
            engine.require_permission(actor, Permission.MANAGE_USERS)

        assert exc_info.value.permission == Permission.MANAGE_USERS
        assert exc_info.value.role == "Employee"
        assert exc_info.value.message == "Permission denied: manage:users required"

    def test_granted_permission_returns_actor(self, engine):
        actor = Actor(id=1, role="HR Admin")
        assert engine.require_permission(actor, Permission.MANAGE_USERS) is actor

    def test_require_any_permission(self, engine):
        actor = Actor(id=2, role="CRM", city="Delhi")
        assert engine.require_any_permission(
            actor, [Permission.VIEW_TICKETS_ALL, Permission.VIEW_TICKETS_ASSIGNED]
        ) is actor
        with pytest.raises(PermissionDenied):
            engine.require_any_permission(actor, [Permission.MANAGE_USERS, Permission.MANAGE_RBAC])
        with pytest.raises(Unauthenticated):
            engine.require_any_permission(None, [Permission.VIEW_DASHBOARD])


class TestActor:

    def test_performer_descriptor(self):
        performer = Actor(id=4, role="CRM", name="Kavya").as_performer()
        assert performer == Performer(id=4, name="Kavya", role="CRM")
        assert performer.kind == "performer"

    def test_performer_name_defaults_to_id(self):
        assert Actor(id=4, role="CRM").as_performer().name == "4"

    def test_performer_kind_is_fixed(self):
        with pytest.raises(ValidationError):
            Performer(kind="system", id=1, name="cron")

    def test_employee_actor(self):
        assert Actor(id=1, role="Employee", user_type=UserType.EMPLOYEE).is_employee
        assert not Actor(id=1, role="CRM").is_employee
