"""Tests for the FastAPI dependency seam and error mapping."""

import logging

import pytest
from fastapi import Depends, FastAPI
from fastapi.testclient import TestClient

from grievance_desk.access.application import AccessPolicyEngine
from grievance_desk.access.domain import Actor, CityScope
from grievance_desk.access.interfaces import (
    get_city_scope,
    get_current_actor,
    install_policy,
    require_any_permission,
    require_permission,
)
from grievance_desk.config import Permission, Settings
from grievance_desk.main import create_app
from grievance_desk.shared.api import register_exception_handlers
from grievance_desk.sla.application import IssueRecord


def add_routes(app: FastAPI) -> None:

    @app.get("/analytics")
    def analytics(actor: Actor = Depends(require_permission(Permission.VIEW_ISSUE_ANALYTICS))):
        return {"actor_id": actor.id}

    @app.get("/tickets")
    def tickets(actor: Actor = Depends(require_any_permission(
        Permission.VIEW_TICKETS_ALL, Permission.VIEW_TICKETS_ASSIGNED
    ))):
        return {"actor_id": actor.id}

    @app.get("/scope")
    def scope(scope: CityScope = Depends(get_city_scope)):
        return {"restricted": scope.restricted, "cities": sorted(scope.allowed_cities or [])}

    @app.get("/issue")
    def issue():
        IssueRecord.parse({"id": 1, "employeeId": 1, "createdAt": "yesterday-ish"})
        return {}


@pytest.fixture
def app():
    app = FastAPI()
    register_exception_handlers(app)
    install_policy(app, AccessPolicyEngine())
    add_routes(app)
    return app


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def restore_root_logging():
    """The app lifespan reconfigures the root logger."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def act_as(app: FastAPI, actor: Actor) -> None:
    app.dependency_overrides[get_current_actor] = lambda: actor


def test_no_actor_is_401(client):
    response = client.get("/analytics")

    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert response.json()["error_type"] == "Unauthenticated"


def test_missing_permission_is_403(app, client):
    act_as(app, Actor(id=9, role="Employee"))
    response = client.get("/analytics")

    assert response.status_code == 403
    body = response.json()
    assert body["error_type"] == "PermissionDenied"
    assert body["details"]["permission"] == Permission.VIEW_ISSUE_ANALYTICS


def test_granted_permission_passes(app, client):
    act_as(app, Actor(id=3, role="CRM", city="Delhi"))
    response = client.get("/analytics")

    assert response.status_code == 200
    assert response.json() == {"actor_id": 3}


def test_any_of_several_permissions(app, client):
    act_as(app, Actor(id=9, role="Employee"))
    assert client.get("/tickets").status_code == 200

    act_as(app, Actor(id=9, role="Unknown"))
    assert client.get("/tickets").status_code == 403


def test_city_scope_dependency(app, client):
    assert client.get("/scope").status_code == 401

    act_as(app, Actor(id=3, role="City Head", city="Pune"))
    assert client.get("/scope").json() == {"restricted": True, "cities": ["Pune"]}


def test_malformed_timestamp_is_422(client):
    response = client.get("/issue")

    assert response.status_code == 422
    assert response.json()["error_type"] == "MalformedTimestamp"


def test_correlation_id_is_echoed(client):
    response = client.get("/analytics", headers={"X-Correlation-ID": "req-123"})

    assert response.headers["X-Correlation-ID"] == "req-123"
    assert response.json()["correlation_id"] == "req-123"


def test_missing_policy_is_500():
    app = FastAPI()
    register_exception_handlers(app)
    add_routes(app)
    app.dependency_overrides[get_current_actor] = lambda: Actor(id=1, role="Super Admin")

    response = TestClient(app).get("/analytics")
    assert response.status_code == 500
    assert response.json()["error_type"] == "ConfigurationException"


def test_create_app_installs_policy_from_file(tmp_path, restore_root_logging):
    path = tmp_path / "policy_config.yaml"
    path.write_text("roles:\n  Auditor: [view:issue_analytics]\n")
    app = create_app(Settings(policy_config_path=path, watch_policy_config=False))
    add_routes(app)
    act_as(app, Actor(id=1, role="Auditor"))

    with TestClient(app) as client:
        assert client.get("/analytics").status_code == 200
        context = app.state.policy_context
        assert context.policy_engine().has_permission("Auditor", Permission.VIEW_ISSUE_ANALYTICS)

    act_as(app, Actor(id=1, role="Super Admin"))
    with TestClient(app) as client:
        assert client.get("/analytics").status_code == 403
