"""
SLA Value Objects
==================

Immutable value objects for SLA domain.

Value objects are defined by their attributes rather than an identity.
They are immutable and can be freely shared.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator

from grievance_desk.config import Priority, VALID_PRIORITIES
from grievance_desk.core import InvalidPriority
from grievance_desk.sla.domain.business_calendar import BusinessCalendar
from grievance_desk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class SLATarget(BaseModel):
    """Response, resolution and escalation thresholds for one priority, in business hours."""
    model_config = ConfigDict(frozen=True)

    response_time_hours: float = Field(ge=0, description="Hours until first response is due")
    resolution_time_hours: float = Field(ge=0, description="Hours until resolution is due")
    escalation_time_hours: float = Field(ge=0, description="Hours until escalation is due")


DEFAULT_SLA_TARGETS: Dict[str, SLATarget] = {
    Priority.LOW: SLATarget(
        response_time_hours=1, resolution_time_hours=4, escalation_time_hours=2
    ),
    Priority.MEDIUM: SLATarget(
        response_time_hours=2, resolution_time_hours=8, escalation_time_hours=4
    ),
    Priority.HIGH: SLATarget(
        response_time_hours=4, resolution_time_hours=24, escalation_time_hours=12
    ),
    Priority.CRITICAL: SLATarget(
        response_time_hours=8, resolution_time_hours=48, escalation_time_hours=24
    ),
}


class SLAConfig(BaseModel):
    """
    SLA targets keyed by priority.

    Priorities missing from the input are filled from ``DEFAULT_SLA_TARGETS``,
    so every valid priority always has a target.
    """
    model_config = ConfigDict(frozen=True)

    targets: Dict[str, SLATarget] = Field(
        default_factory=lambda: dict(DEFAULT_SLA_TARGETS),
        description="SLA targets in business hours by priority"
    )

    @field_validator("targets", mode="before")
    @classmethod
    def fill_missing_priorities(cls, v: Any) -> Dict[str, Any]:
        """Ensure every valid priority has a target."""
        targets = dict(v or {})
        for priority in VALID_PRIORITIES:
            if priority not in targets:
                targets[priority] = DEFAULT_SLA_TARGETS[priority]
        return targets

    def get_target(self, priority: Any, strict: bool = False) -> SLATarget:
        """
        SLA target for ``priority``.

        Unknown priorities fall back to the medium target unless ``strict``
        is set, in which case ``InvalidPriority`` is raised.
        """
        target = self.targets.get(priority) if isinstance(priority, str) else None
        if target is not None:
            return target
        if strict:
            raise InvalidPriority(priority)

        logger.warning(
            "Unknown priority, using medium SLA target",
            extra={"priority": str(priority)}
        )
        return self.targets[Priority.MEDIUM]


@dataclass(frozen=True)
class SLAPolicy:
    """Calendar and targets that are loaded, and reloaded, together."""
    calendar: BusinessCalendar = field(default_factory=BusinessCalendar)
    config: SLAConfig = field(default_factory=SLAConfig)
