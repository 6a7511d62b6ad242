"""
Grievance Desk - Policy Bootstrap
==================================

Wires settings, logging and the policy file into ready-to-use services.

Layers per bounded context:
- Interfaces: FastAPI dependencies
- Application: services and DTOs
- Domain: entities and value objects
- Infrastructure: policy file loading

Embedding in a FastAPI application:
    app = FastAPI(lifespan=policy_lifespan)
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import AsyncGenerator, Iterable, List, Optional

from fastapi import FastAPI

from grievance_desk.config import Settings, get_settings
from grievance_desk.access.application import AccessPolicyEngine
from grievance_desk.access.infrastructure import RoleTableManager
from grievance_desk.access.interfaces import install_policy
from grievance_desk.sla.application import SLAService, TATReportingService
from grievance_desk.sla.domain import Issue
from grievance_desk.sla.infrastructure import SLAConfigManager
from grievance_desk.shared.api import register_exception_handlers
from grievance_desk.shared.infrastructure.logging import setup_logging, get_logger

logger = get_logger(__name__)


@dataclass
class PolicyContext:
    """Loaded policy managers; services are built from their current snapshots."""
    sla_config: SLAConfigManager
    role_table: RoleTableManager
    near_breach_hours: float = 1.0

    def sla_service(self) -> SLAService:
        return SLAService.from_policy(self.sla_config.policy)

    def reporting_service(self) -> TATReportingService:
        return TATReportingService.from_policy(self.sla_config.policy)

    def policy_engine(self) -> AccessPolicyEngine:
        return self.role_table.engine()

    def issues_near_breach(self, issues: Iterable[Issue], now: Optional[datetime] = None) -> List[Issue]:
        """Open issues within the configured warning window of a resolution breach."""
        return self.sla_service().issues_near_breach(issues, self.near_breach_hours, now)

    def start_watching(self) -> None:
        self.sla_config.start_watching()
        self.role_table.start_watching()

    def stop(self) -> None:
        self.sla_config.stop_watching()
        self.role_table.stop_watching()


def build_policy_context(settings: Optional[Settings] = None, watch: Optional[bool] = None) -> PolicyContext:
    """
    Load the policy file into SLA and role-table managers.

    Args:
        settings: Settings to use (defaults to the cached environment settings)
        watch: Override ``settings.watch_policy_config``
    """
    settings = settings or get_settings()

    sla_config = SLAConfigManager(years_ahead=settings.holiday_years_ahead)
    sla_config.load(settings.policy_config_path)

    role_table = RoleTableManager()
    role_table.load(settings.policy_config_path)

    context = PolicyContext(
        sla_config=sla_config,
        role_table=role_table,
        near_breach_hours=settings.near_breach_hours,
    )
    if settings.watch_policy_config if watch is None else watch:
        context.start_watching()

    logger.info("Policy context ready", extra={
        "policy_config_path": str(settings.policy_config_path),
        "roles": role_table.table.role_names,
    })
    return context


@asynccontextmanager
async def policy_lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Application lifespan manager.

    STARTUP:
    1. Setup structured logging
    2. Load policy file and start watching it
    3. Install policy engine and error handlers

    SHUTDOWN:
    1. Stop watching the policy file
    """
    settings = getattr(app.state, "settings", None) or get_settings()
    setup_logging(level=settings.log_level, environment=settings.environment)
    logger.info("Starting Grievance Desk policy core", extra={
        "version": settings.app_version,
        "environment": settings.environment
    })

    context = build_policy_context(settings)
    app.state.policy_context = context
    install_policy(app, context.role_table)

    try:
        yield
    finally:
        context.stop()
        logger.info("Grievance Desk policy core stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Bare FastAPI application with the policy lifespan and error handlers installed."""
    settings = settings or get_settings()
    app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=policy_lifespan)
    app.state.settings = settings
    register_exception_handlers(app)
    return app
