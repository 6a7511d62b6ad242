"""
Access Interfaces Layer
=======================

FastAPI dependencies exposing the policy engine to the request layer.
"""

from grievance_desk.access.interfaces.dependencies import (
    install_policy,
    get_policy_engine,
    get_current_actor,
    require_permission,
    require_any_permission,
    get_city_scope,
)

__all__ = [
    "install_policy",
    "get_policy_engine",
    "get_current_actor",
    "require_permission",
    "require_any_permission",
    "get_city_scope",
]
