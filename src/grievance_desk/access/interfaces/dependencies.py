"""
Access Dependencies
====================

FastAPI dependencies through which the request layer calls the policy
engine. Routes are defined by the embedding application.

The auth layer is expected to put the request's ``Actor`` on
``request.state.actor``; tests and alternative auth schemes can replace
``get_current_actor`` with ``app.dependency_overrides``.

Usage:
    @router.get("/issues")
    def list_issues(
        actor: Actor = Depends(require_permission(Permission.VIEW_TICKETS_ALL)),
        scope: CityScope = Depends(get_city_scope),
    ):
        ...
"""

from typing import Callable, Optional, Union

from fastapi import Depends, FastAPI, Request

from grievance_desk.access.application import AccessPolicyEngine
from grievance_desk.access.domain import Actor, CityScope
from grievance_desk.access.infrastructure import RoleTableManager
from grievance_desk.core import ConfigurationException, Unauthenticated


def install_policy(app: FastAPI, policy: Union[AccessPolicyEngine, RoleTableManager]) -> None:
    """Attach a fixed engine or a hot-reloading role table manager to ``app``."""
    if isinstance(policy, RoleTableManager):
        app.state.role_table_manager = policy
    else:
        app.state.policy_engine = policy


def get_policy_engine(request: Request) -> AccessPolicyEngine:
    """Engine for this request, bound to the current role table."""
    manager = getattr(request.app.state, "role_table_manager", None)
    if manager is not None:
        return manager.engine()

    engine = getattr(request.app.state, "policy_engine", None)
    if engine is None:
        raise ConfigurationException("No access policy installed on the application")
    return engine


def get_current_actor(request: Request) -> Optional[Actor]:
    """Actor set by the authentication layer, if any."""
    return getattr(request.state, "actor", None)


def require_permission(permission: str) -> Callable[..., Actor]:
    """Dependency factory: the request's actor, provided it holds ``permission``."""

    def dependency(
        actor: Optional[Actor] = Depends(get_current_actor),
        engine: AccessPolicyEngine = Depends(get_policy_engine),
    ) -> Actor:
        return engine.require_permission(actor, permission)

    return dependency


def require_any_permission(*permissions: str) -> Callable[..., Actor]:
    """Dependency factory: the request's actor, provided it holds any of ``permissions``."""

    def dependency(
        actor: Optional[Actor] = Depends(get_current_actor),
        engine: AccessPolicyEngine = Depends(get_policy_engine),
    ) -> Actor:
        return engine.require_any_permission(actor, permissions)

    return dependency


def get_city_scope(
    actor: Optional[Actor] = Depends(get_current_actor),
    engine: AccessPolicyEngine = Depends(get_policy_engine),
) -> CityScope:
    """City scope of the request's actor."""
    if actor is None:
        raise Unauthenticated()
    return engine.resolve_city_scope(actor)
