"""
SLA Domain Layer
================

Domain layer for SLA tracking.

Contains:
- Entities: Issue, SLAMetrics, TATStats and report rows
- Value Objects: SLATarget, SLAConfig, Holiday
- Business Calendar: working-time arithmetic in IST

This layer has no dependencies on infrastructure - pure Python business logic.
"""

from grievance_desk.sla.domain.business_calendar import (
    BusinessCalendar,
    Holiday,
    GOVERNMENT_HOLIDAYS_2025,
    IST,
    expand_holidays,
    format_hours,
    to_ist,
    to_utc,
)
from grievance_desk.sla.domain.entities import (
    Issue,
    SLAMetrics,
    TATStats,
    PriorityBreakdown,
    ResponseStats,
    DailyTrendPoint,
)
from grievance_desk.sla.domain.value_objects import (
    SLATarget,
    SLAConfig,
    SLAPolicy,
    DEFAULT_SLA_TARGETS,
)

__all__ = [
    # Calendar
    "BusinessCalendar",
    "Holiday",
    "GOVERNMENT_HOLIDAYS_2025",
    "IST",
    "expand_holidays",
    "format_hours",
    "to_ist",
    "to_utc",
    # Entities
    "Issue",
    "SLAMetrics",
    "TATStats",
    "PriorityBreakdown",
    "ResponseStats",
    "DailyTrendPoint",
    # Value Objects
    "SLATarget",
    "SLAConfig",
    "SLAPolicy",
    "DEFAULT_SLA_TARGETS",
]
