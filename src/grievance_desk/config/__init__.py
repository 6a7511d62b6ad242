"""
Configuration Module
====================

Application settings and configuration management using Pydantic.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field, field_validator
from functools import lru_cache
from pathlib import Path


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety.
    """

    # ========== Application ==========
    app_name: str = Field(default="grievance-desk", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Root log level")

    # ========== Policy Configuration ==========
    policy_config_path: Path = Field(
        default=Path("policy_config.yaml"),
        description="YAML file with business hours, holidays, SLA targets and roles"
    )
    watch_policy_config: bool = Field(
        default=True,
        description="Hot-reload the policy file when it changes"
    )

    # ========== SLA ==========
    near_breach_hours: float = Field(
        default=1.0,
        description="Warning window (business hours) before a resolution breach",
        gt=0
    )
    holiday_years_ahead: int = Field(
        default=1,
        description="Years after the current one to expand recurring holidays into",
        ge=0,
        le=10
    )

    model_config = SettingsConfigDict(
        env_prefix="GRIEVANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Ensure environment is one of allowed values."""
        allowed = {"development", "staging", "production"}
        if v not in allowed:
            raise ValueError(f"environment must be one of {allowed}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()


@lru_cache()
def get_settings() -> Settings:
    """Returns cached Settings instance."""
    return Settings()


# ========== Constants ==========

class Priority(str):
    """Issue priority levels."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class IssueStatus(str):
    """Issue lifecycle statuses."""
    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class SLAStatus(str):
    """Overall SLA state of an issue, in precedence order."""
    BREACHED = "breached"
    RESPONSE_BREACHED = "response_breached"
    ESCALATION_DUE = "escalation_due"
    ON_TRACK = "on_track"


class UserType(str):
    """Kinds of authenticated principals."""
    DASHBOARD_USER = "dashboard_user"
    EMPLOYEE = "employee"


class HolidayType(str):
    """Holiday categories."""
    GOVERNMENT = "government"
    RESTRICTED = "restricted"


class Permission(str):
    """Closed permission vocabulary."""
    # Scope-granting
    ACCESS_ALL_CITIES = "access:all_cities"
    ACCESS_CITY_RESTRICTED = "access:city_restricted"
    ACCESS_SECURITY = "access:security"

    # Capability-granting
    VIEW_DASHBOARD = "view:dashboard"
    VIEW_TICKETS_ALL = "view:tickets_all"
    VIEW_TICKETS_ASSIGNED = "view:tickets_assigned"
    MANAGE_TICKETS_ALL = "manage:tickets_all"
    MANAGE_TICKETS_ASSIGNED = "manage:tickets_assigned"
    VIEW_ISSUE_ANALYTICS = "view:issue_analytics"
    VIEW_FEEDBACK_ANALYTICS = "view:feedback_analytics"
    MANAGE_USERS = "manage:users"
    MANAGE_DASHBOARD_USERS = "manage:dashboard_users"
    VIEW_INTERNAL_COMMENTS = "view:internal_comments"
    VIEW_SECURITY = "view:security"
    MANAGE_RBAC = "manage:rbac"


# ========== Lists for validation ==========

VALID_PRIORITIES = [
    Priority.CRITICAL, Priority.HIGH,
    Priority.MEDIUM, Priority.LOW
]
VALID_STATUSES = [
    IssueStatus.OPEN, IssueStatus.IN_PROGRESS,
    IssueStatus.RESOLVED, IssueStatus.CLOSED
]
CLOSED_STATUSES = (IssueStatus.RESOLVED, IssueStatus.CLOSED)
VALID_SLA_STATUSES = [
    SLAStatus.BREACHED, SLAStatus.RESPONSE_BREACHED,
    SLAStatus.ESCALATION_DUE, SLAStatus.ON_TRACK
]
SCOPE_PERMISSIONS = [
    Permission.ACCESS_ALL_CITIES,
    Permission.ACCESS_CITY_RESTRICTED,
    Permission.ACCESS_SECURITY,
]
CAPABILITY_PERMISSIONS = [
    Permission.VIEW_DASHBOARD,
    Permission.VIEW_TICKETS_ALL,
    Permission.VIEW_TICKETS_ASSIGNED,
    Permission.MANAGE_TICKETS_ALL,
    Permission.MANAGE_TICKETS_ASSIGNED,
    Permission.VIEW_ISSUE_ANALYTICS,
    Permission.VIEW_FEEDBACK_ANALYTICS,
    Permission.MANAGE_USERS,
    Permission.MANAGE_DASHBOARD_USERS,
    Permission.VIEW_INTERNAL_COMMENTS,
    Permission.VIEW_SECURITY,
    Permission.MANAGE_RBAC,
]
PERMISSION_VOCABULARY = frozenset(SCOPE_PERMISSIONS + CAPABILITY_PERMISSIONS)
