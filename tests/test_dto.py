"""Tests for boundary validation of issue records."""

from datetime import datetime, timezone

import pytest

from grievance_desk.core import MalformedTimestamp, ValidationException
from grievance_desk.sla.application import IssueRecord, parse_issues


def test_parses_camel_case_rows():
    record = IssueRecord.parse({
        "id": 12,
        "status": "in_progress",
        "priority": "high",
        "employeeId": 7,
        "assignedTo": 3,
        "createdAt": "2025-01-06T08:00:00+05:30",
        "firstResponseAt": "2025-01-06T04:30:00Z",
    })
    issue = record.to_domain()

    assert issue.employee_id == 7
    assert issue.assignee_id == 3
    assert issue.created_at == datetime(2025, 1, 6, 2, 30, tzinfo=timezone.utc)
    assert issue.first_response_at == datetime(2025, 1, 6, 4, 30, tzinfo=timezone.utc)
    assert issue.is_open


def test_parses_snake_case_rows_with_defaults():
    issue = IssueRecord.parse({"id": "GR-1", "employee_id": 1, "created_at": "2025-01-06T09:00:00"}).to_domain()
    assert issue.status == "open"
    assert issue.priority == "medium"
    assert issue.resolved_at is None


@pytest.mark.parametrize("key", ["assignedTo", "assigneeId", "assignee_id"])
def test_assignee_accepts_each_key_style(key):
    record = IssueRecord.parse({"id": 1, "employeeId": 1, "createdAt": "2025-01-06T09:00:00", key: 9})
    assert record.to_domain().assignee_id == 9


def test_unknown_priority_is_kept():
    record = IssueRecord.parse({"id": 1, "employeeId": 1, "priority": "urgent", "createdAt": "2025-01-06T09:00:00"})
    assert record.priority == "urgent"


@pytest.mark.parametrize("key, field", [
    ("createdAt", "created_at"),
    ("resolvedAt", "resolved_at"),
    ("updated_at", "updated_at"),
])
def test_malformed_timestamp_names_the_field(key, field):
    payload = {"id": 1, "employeeId": 1, "createdAt": "2025-01-06T09:00:00"}
    payload[key] = "not-a-date"

    with pytest.raises(MalformedTimestamp) as exc_info:
        IssueRecord.parse(payload)

    assert exc_info.value.field == field
    assert exc_info.value.details["value"] == "not-a-date"


def test_invalid_status_is_a_validation_error():
    with pytest.raises(ValidationException) as exc_info:
        IssueRecord.parse({"id": 1, "employeeId": 1, "status": "pending", "createdAt": "2025-01-06T09:00:00"})
    assert not isinstance(exc_info.value, MalformedTimestamp)


def test_missing_creation_time_is_a_validation_error():
    with pytest.raises(ValidationException):
        IssueRecord.parse({"id": 1, "employeeId": 1})


def test_parse_issues_converts_every_row():
    issues = parse_issues([
        {"id": 1, "employeeId": 1, "createdAt": "2025-01-06T09:00:00"},
        {"id": 2, "employeeId": 2, "status": "resolved", "createdAt": "2025-01-06T09:00:00",
         "resolvedAt": "2025-01-06T10:00:00"},
    ])
    assert [issue.id for issue in issues] == [1, 2]
    assert issues[1].is_resolved
