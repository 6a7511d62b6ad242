"""
Shared API Layer
================

FastAPI glue shared by applications that embed the policy engine.
"""

from grievance_desk.shared.api.middleware import (
    CorrelationIDMiddleware,
    application_exception_handler,
    register_exception_handlers,
)

__all__ = [
    "CorrelationIDMiddleware",
    "application_exception_handler",
    "register_exception_handlers",
]
