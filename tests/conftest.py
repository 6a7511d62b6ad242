"""Shared fixtures for the grievance desk test suite."""

import itertools
from datetime import datetime

import pytest

from grievance_desk.access.application import AccessPolicyEngine
from grievance_desk.access.domain import Employee
from grievance_desk.sla.application import SLAService, TATReportingService
from grievance_desk.sla.domain import IST, BusinessCalendar, Issue

# Monday 2025-01-06, a regular working day
MONDAY = datetime(2025, 1, 6, tzinfo=IST)


@pytest.fixture
def calendar():
    """Mon-Sat 09:00-17:00 IST calendar without holidays."""
    return BusinessCalendar()


@pytest.fixture
def sla_service(calendar):
    return SLAService(calendar)


@pytest.fixture
def reporting_service(calendar):
    return TATReportingService(calendar)


@pytest.fixture
def engine():
    return AccessPolicyEngine()


@pytest.fixture
def make_issue():
    """Factory for issues with sequential ids."""
    counter = itertools.count(1)

    def _make(priority="medium", status="open", created_at=MONDAY, employee_id=1, **kwargs):
        return Issue(
            id=next(counter),
            status=status,
            priority=priority,
            employee_id=employee_id,
            created_at=created_at,
            **kwargs,
        )

    return _make


@pytest.fixture
def employees_by_id():
    return {
        1: Employee(id=1, city="Bangalore", name="Asha"),
        2: Employee(id=2, city="Delhi", name="Ravi"),
        3: Employee(id=3, city="Bangalore", name="Meera"),
        4: Employee(id=4, city=None, name="Unassigned"),
    }
