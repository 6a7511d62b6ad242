"""
SLA Domain Entities
====================

Pure Python domain entities for SLA tracking.

Following Domain-Driven Design principles, these entities contain
business logic and are free of infrastructure concerns.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional

from grievance_desk.config import CLOSED_STATUSES
from grievance_desk.sla.domain.business_calendar import format_hours


@dataclass
class Issue:
    """
    Issue entity as supplied by storage.

    Read-only for the SLA module: nothing here mutates an issue.
    Timestamps are UTC instants (naive values are treated as UTC).
    """

    id: Any
    status: str
    priority: str
    employee_id: Any
    created_at: datetime

    assignee_id: Optional[Any] = None
    updated_at: Optional[datetime] = None
    first_response_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        """Check if issue is still open."""
        return self.status not in CLOSED_STATUSES

    @property
    def is_resolved(self) -> bool:
        """Check if issue has been resolved or closed."""
        return self.status in CLOSED_STATUSES

    @property
    def completed_at(self) -> Optional[datetime]:
        """Resolution instant, falling back to the last update for legacy records."""
        return self.resolved_at or self.updated_at


@dataclass
class SLAMetrics:
    """
    SLA snapshot for one issue at a given instant.

    All durations are business hours. ``response_time`` and
    ``resolution_time`` are None until the milestone has happened.
    """

    issue_id: Any
    priority: str
    evaluated_at: datetime

    # Targets applied
    response_target_hours: float
    resolution_target_hours: float
    escalation_target_hours: float

    # Measured
    elapsed_hours: float
    response_time: Optional[float]
    resolution_time: Optional[float]

    # Breach state
    is_response_sla_breached: bool
    is_resolution_sla_breached: bool
    is_escalation_due: bool

    # Remaining budgets
    response_time_remaining: float
    resolution_time_remaining: float
    escalation_time_remaining: float

    sla_status: str

    # Business-hour deadlines
    response_deadline: Optional[datetime] = None
    resolution_deadline: Optional[datetime] = None
    escalation_deadline: Optional[datetime] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        def iso(value: Optional[datetime]) -> Optional[str]:
            return value.isoformat() if value else None

        return {
            "issue_id": self.issue_id,
            "priority": self.priority,
            "evaluated_at": self.evaluated_at.isoformat(),
            "sla_status": self.sla_status,
            "elapsed_hours": self.elapsed_hours,
            "elapsed_display": format_hours(self.elapsed_hours),
            "response": {
                "target_hours": self.response_target_hours,
                "time": self.response_time,
                "remaining": self.response_time_remaining,
                "is_breached": self.is_response_sla_breached,
                "deadline": iso(self.response_deadline),
            },
            "resolution": {
                "target_hours": self.resolution_target_hours,
                "time": self.resolution_time,
                "remaining": self.resolution_time_remaining,
                "is_breached": self.is_resolution_sla_breached,
                "deadline": iso(self.resolution_deadline),
            },
            "escalation": {
                "target_hours": self.escalation_target_hours,
                "remaining": self.escalation_time_remaining,
                "is_due": self.is_escalation_due,
                "deadline": iso(self.escalation_deadline),
            },
        }


@dataclass
class TATStats:
    """Turnaround-time statistics over resolved issues, in business hours."""

    average_tat: float = 0.0
    median_tat: float = 0.0
    min_tat: float = 0.0
    max_tat: float = 0.0
    total_resolved: int = 0
    compliant_count: int = 0
    sla_compliance_rate: float = 0.0

    @property
    def breached_count(self) -> int:
        return self.total_resolved - self.compliant_count

    def to_dict(self) -> dict:
        return {
            "average_tat": self.average_tat,
            "median_tat": self.median_tat,
            "min_tat": self.min_tat,
            "max_tat": self.max_tat,
            "total_resolved": self.total_resolved,
            "compliant_count": self.compliant_count,
            "breached_count": self.breached_count,
            "sla_compliance_rate": self.sla_compliance_rate,
        }


@dataclass
class PriorityBreakdown:
    """TAT statistics for the issues of a single priority."""

    priority: str
    resolution_target_hours: float
    total_issues: int
    stats: TATStats = field(default_factory=TATStats)

    def to_dict(self) -> dict:
        return {
            "priority": self.priority,
            "resolution_target_hours": self.resolution_target_hours,
            "total_issues": self.total_issues,
            **self.stats.to_dict(),
        }


@dataclass
class ResponseStats:
    """First-response statistics, in business hours."""

    average_response_time: float = 0.0
    responded_count: int = 0
    within_target_count: int = 0

    @property
    def within_target_rate(self) -> float:
        if self.responded_count == 0:
            return 0.0
        return self.within_target_count / self.responded_count * 100


@dataclass
class DailyTrendPoint:
    """Per-day issue volume and average handling times (IST dates)."""

    date: date
    ticket_count: int
    resolved_count: int
    avg_response_time: float
    avg_resolution_time: float

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "ticket_count": self.ticket_count,
            "resolved_count": self.resolved_count,
            "avg_response_time": self.avg_response_time,
            "avg_resolution_time": self.avg_resolution_time,
        }
