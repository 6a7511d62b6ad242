"""
SLA Application DTOs
=====================

Data Transfer Objects validated at the boundary.

Storage rows and YAML documents are parsed here with Pydantic; the
domain layer only ever sees well-formed datetimes and value objects.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Literal, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from grievance_desk.core import MalformedTimestamp, ValidationException
from grievance_desk.sla.domain import (
    GOVERNMENT_HOLIDAYS_2025,
    Holiday,
    Issue,
    SLATarget,
)


# ========== Type Aliases for Literals ==========
IssueStatusStr = Literal["open", "in_progress", "resolved", "closed"]
RecordId = Union[int, str]

TIMESTAMP_FIELDS = ("created_at", "updated_at", "first_response_at", "resolved_at", "closed_at")


class IssueRecord(BaseModel):
    """
    Issue row as delivered by storage.

    Accepts both snake_case and camelCase keys. Priority is kept as a free
    string so that unknown priorities reach the SLA fallback instead of
    failing validation.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: RecordId
    status: IssueStatusStr = "open"
    priority: str = "medium"
    employee_id: RecordId
    assignee_id: Optional[RecordId] = Field(
        default=None,
        validation_alias=AliasChoices("assignedTo", "assigneeId", "assignee_id"),
    )
    created_at: datetime
    updated_at: Optional[datetime] = None
    first_response_at: Optional[datetime] = None
    resolved_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    @classmethod
    def parse(cls, payload: Dict[str, Any]) -> "IssueRecord":
        """
        Validate a raw record.

        Raises:
            MalformedTimestamp: a timestamp field could not be parsed
            ValidationException: any other invalid field
        """
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            for error in e.errors():
                loc = str(error["loc"][0]) if error["loc"] else ""
                field = _field_name(loc)
                if field in TIMESTAMP_FIELDS and error["type"].startswith("datetime"):
                    raise MalformedTimestamp(field, error.get("input")) from e
            raise ValidationException(
                "Invalid issue record",
                {"errors": [
                    {"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()
                ]}
            ) from e

    def to_domain(self) -> Issue:
        """Convert to domain entity."""
        return Issue(
            id=self.id,
            status=self.status,
            priority=self.priority,
            employee_id=self.employee_id,
            assignee_id=self.assignee_id,
            created_at=self.created_at,
            updated_at=self.updated_at,
            first_response_at=self.first_response_at,
            resolved_at=self.resolved_at,
            closed_at=self.closed_at,
        )


def _field_name(loc: str) -> str:
    for name in TIMESTAMP_FIELDS:
        if loc in (name, to_camel(name)):
            return name
    return loc


def parse_issues(payloads: Iterable[Dict[str, Any]]) -> List[Issue]:
    """Validate raw issue rows and convert them to domain entities."""
    return [IssueRecord.parse(payload).to_domain() for payload in payloads]


# ========== Policy file ==========

class BusinessHoursRecord(BaseModel):
    """Working window section of the policy file."""
    start_hour: int = Field(default=9, ge=0, le=23)
    end_hour: int = Field(default=17, ge=1, le=24)
    working_weekdays: List[int] = Field(
        default_factory=lambda: [0, 1, 2, 3, 4, 5],
        description="date.weekday() numbers, Monday=0"
    )

    @field_validator("working_weekdays")
    @classmethod
    def validate_weekdays(cls, v: List[int]) -> List[int]:
        if not v or any(day not in range(7) for day in v):
            raise ValueError("working_weekdays must be a non-empty list of 0..6")
        return v


class SLAPolicyRecord(BaseModel):
    """
    SLA-related sections of the policy YAML file.

    Example:
        business_hours: {start_hour: 9, end_hour: 17}
        holidays:
          - {name: Republic Day, date: 2025-01-26, recurring: true}
        sla_targets:
          high: {response_time_hours: 4, resolution_time_hours: 24, escalation_time_hours: 12}
    """
    model_config = ConfigDict(extra="ignore")

    business_hours: BusinessHoursRecord = Field(default_factory=BusinessHoursRecord)
    holidays: List[Holiday] = Field(default_factory=lambda: list(GOVERNMENT_HOLIDAYS_2025))
    sla_targets: Dict[str, SLATarget] = Field(default_factory=dict)
