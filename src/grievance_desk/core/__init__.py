"""
Core Module
============

Shared core utilities and abstractions used across the application.

This module contains framework-agnostic code that defines the fundamental
building blocks of the system.
"""

from grievance_desk.core.exceptions import (
    ApplicationException,
    DomainException,
    ValidationException,
    ConfigurationException,
    AuthorizationException,
    Unauthenticated,
    PermissionDenied,
    InvalidPriority,
    MalformedTimestamp,
)

__all__ = [
    "ApplicationException",
    "DomainException",
    "ValidationException",
    "ConfigurationException",
    "AuthorizationException",
    "Unauthenticated",
    "PermissionDenied",
    "InvalidPriority",
    "MalformedTimestamp",
]
