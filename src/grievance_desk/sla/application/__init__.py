"""
SLA Application Layer
======================

Application layer for SLA tracking.

Contains:
- Services: per-issue SLA evaluation and TAT reporting
- DTOs: boundary validation of issue rows and the policy file

This layer depends on the domain layer only.
"""

from grievance_desk.sla.application.dto import (
    IssueRecord,
    BusinessHoursRecord,
    SLAPolicyRecord,
    parse_issues,
)
from grievance_desk.sla.application.services import (
    SLAService,
    TATReportingService,
)

__all__ = [
    # DTOs
    "IssueRecord",
    "BusinessHoursRecord",
    "SLAPolicyRecord",
    "parse_issues",
    # Services
    "SLAService",
    "TATReportingService",
]
