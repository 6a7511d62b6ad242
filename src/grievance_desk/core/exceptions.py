"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

These exceptions define domain-specific errors that can be caught and handled
appropriately at the application boundaries.
"""

from typing import Optional, Any


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class DomainException(ApplicationException):
    """Base exception for domain logic violations."""


class ValidationException(ApplicationException):
    """Exception for validation errors."""


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class AuthorizationException(ApplicationException):
    """Base exception for access-control failures."""


class Unauthenticated(AuthorizationException):
    """Raised when a guarded operation runs without an actor."""

    def __init__(self, message: str = "Authentication required", details: Optional[dict] = None):
        super().__init__(message, details)


class PermissionDenied(AuthorizationException):
    """Raised when an actor lacks a required permission."""

    def __init__(
        self,
        permission: str,
        actor_id: Optional[Any] = None,
        role: Optional[str] = None,
        details: Optional[dict] = None
    ):
        self.permission = permission
        self.actor_id = actor_id
        self.role = role
        super().__init__(
            f"Permission denied: {permission} required",
            details or {"permission": permission, "actor_id": actor_id, "role": role}
        )


class InvalidPriority(DomainException):
    """Raised by strict SLA target lookups for an unrecognised priority."""

    def __init__(self, priority: Any, details: Optional[dict] = None):
        self.priority = priority
        super().__init__(
            f"Unknown priority '{priority}'",
            details or {"priority": priority}
        )


class MalformedTimestamp(ValidationException):
    """Raised at the record boundary when a timestamp cannot be parsed."""

    def __init__(self, field: str, value: Any, details: Optional[dict] = None):
        self.field = field
        self.value = value
        super().__init__(
            f"Malformed timestamp for '{field}': {value!r}",
            details or {"field": field, "value": str(value)}
        )
