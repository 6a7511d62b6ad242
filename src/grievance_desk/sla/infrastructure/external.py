"""
SLA Configuration Loading
==========================

Loads the business calendar, holidays and SLA targets from the policy
YAML file and keeps them hot-reloaded.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import ValidationError

from grievance_desk.core import ConfigurationException
from grievance_desk.sla.application.dto import SLAPolicyRecord
from grievance_desk.sla.domain import BusinessCalendar, SLAConfig, SLAPolicy
from grievance_desk.shared.infrastructure.config_watch import WatchedYAMLConfig
from grievance_desk.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)


class SLAConfigManager(WatchedYAMLConfig[SLAPolicy]):
    """
    Thread-safe SLA policy manager.

    Recurring holidays are expanded into concrete dates for the previous
    year, the reference year and ``years_ahead`` following years each time
    the file is (re)loaded.
    """

    def __init__(self, years_ahead: int = 1, reference_year: Optional[int] = None):
        super().__init__()
        self._years_ahead = years_ahead
        self._reference_year = reference_year

    def _years(self) -> range:
        year = self._reference_year or datetime.now(timezone.utc).year
        return range(year - 1, year + self._years_ahead + 1)

    def build_snapshot(self, data: dict) -> SLAPolicy:
        try:
            record = SLAPolicyRecord.model_validate(data)
        except ValidationError as e:
            raise ConfigurationException(
                "Invalid SLA policy configuration",
                {"errors": [err["msg"] for err in e.errors()]}
            ) from e

        hours = record.business_hours
        calendar = BusinessCalendar.from_holidays(
            record.holidays,
            self._years(),
            start_hour=hours.start_hour,
            end_hour=hours.end_hour,
            working_weekdays=hours.working_weekdays,
        )
        logger.info(
            "SLA policy loaded",
            extra={
                "holiday_dates": len(calendar.holidays),
                "start_hour": calendar.start_hour,
                "end_hour": calendar.end_hour,
            }
        )
        return SLAPolicy(calendar=calendar, config=SLAConfig(targets=record.sla_targets))

    def default_snapshot(self) -> SLAPolicy:
        return self.build_snapshot({})

    @property
    def policy(self) -> SLAPolicy:
        """Get current SLA policy."""
        return self.snapshot
