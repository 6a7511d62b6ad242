"""
Business Calendar
=================

Working-time arithmetic for a fixed IST calendar.

All instants are interpreted as UTC (naive values are assumed to be UTC)
and classified in Indian Standard Time. Every user-facing duration in the
SLA module is computed with ``business_hours_between``.
"""

import datetime as dt
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from grievance_desk.config import HolidayType
from grievance_desk.core import ConfigurationException

UTC = dt.timezone.utc
IST = dt.timezone(dt.timedelta(hours=5, minutes=30), "IST")
ONE_DAY = dt.timedelta(days=1)
MONDAY_TO_SATURDAY = frozenset(range(6))


def to_utc(value: dt.datetime) -> dt.datetime:
    """Return an aware UTC datetime; naive input is taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def to_ist(value: dt.datetime) -> dt.datetime:
    """Return the same instant expressed in IST."""
    return to_utc(value).astimezone(IST)


class Holiday(BaseModel):
    """
    A holiday entry as stored by the holiday table.

    ``recurring`` marks holidays that fall on the same calendar date every
    year; see ``expand_holidays`` for how they become concrete dates.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    date: dt.date
    type: Literal["government", "restricted"] = HolidayType.GOVERNMENT
    recurring: bool = False
    description: Optional[str] = None

    def occurrences(self, years: Iterable[int]) -> List[dt.date]:
        """Concrete dates of this holiday within ``years``."""
        if not self.recurring:
            return [self.date]

        dates = [self.date]
        for year in years:
            if year == self.date.year:
                continue
            try:
                dates.append(self.date.replace(year=year))
            except ValueError:
                # Feb 29 outside a leap year
                continue
        return dates


GOVERNMENT_HOLIDAYS_2025 = [
    Holiday(name="New Year's Day", date=dt.date(2025, 1, 1), recurring=True),
    Holiday(name="Republic Day", date=dt.date(2025, 1, 26), recurring=True),
    Holiday(name="Independence Day", date=dt.date(2025, 8, 15), recurring=True),
    Holiday(name="Gandhi Jayanti", date=dt.date(2025, 10, 2), recurring=True),
    Holiday(name="Dussehra", date=dt.date(2025, 10, 2)),
    Holiday(name="Diwali", date=dt.date(2025, 10, 20)),
    Holiday(name="Holi", date=dt.date(2025, 3, 14)),
    Holiday(name="Good Friday", date=dt.date(2025, 4, 18)),
    Holiday(name="Eid ul-Fitr", date=dt.date(2025, 4, 10)),
    Holiday(name="Eid ul-Adha", date=dt.date(2025, 6, 16)),
]


def expand_holidays(holidays: Iterable[Holiday], years: Iterable[int]) -> FrozenSet[dt.date]:
    """
    Expand holiday entries into a set of concrete dates.

    Recurring holidays are repeated in every year of ``years`` (and always
    keep their stored date); one-off holidays contribute their exact date.
    """
    years = list(years)
    dates = set()
    for holiday in holidays:
        dates.update(holiday.occurrences(years))
    return frozenset(dates)


@dataclass(frozen=True)
class BusinessCalendar:
    """
    Immutable working calendar.

    Working window is ``[start_hour, end_hour)`` IST on ``working_weekdays``
    (``date.weekday()`` numbering, Monday=0), excluding ``holidays`` and the
    yearly ``recurring_holidays`` given as ``(month, day)``.
    """
    start_hour: int = 9
    end_hour: int = 17
    working_weekdays: FrozenSet[int] = MONDAY_TO_SATURDAY
    holidays: FrozenSet[dt.date] = field(default_factory=frozenset)
    recurring_holidays: FrozenSet[Tuple[int, int]] = field(default_factory=frozenset)

    def __post_init__(self):
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise ConfigurationException(
                "Business hours must satisfy 0 <= start_hour < end_hour <= 24",
                {"start_hour": self.start_hour, "end_hour": self.end_hour}
            )
        weekdays = frozenset(self.working_weekdays)
        if not weekdays or not weekdays <= frozenset(range(7)):
            raise ConfigurationException(
                "working_weekdays must be a non-empty subset of 0..6",
                {"working_weekdays": sorted(weekdays)}
            )
        holidays = frozenset(
            dt.date.fromisoformat(d) if isinstance(d, str) else d
            for d in self.holidays
        )
        object.__setattr__(self, "working_weekdays", weekdays)
        object.__setattr__(self, "holidays", holidays)
        object.__setattr__(self, "recurring_holidays", frozenset(self.recurring_holidays))

    @classmethod
    def from_holidays(
        cls,
        holidays: Iterable[Holiday],
        years: Iterable[int],
        start_hour: int = 9,
        end_hour: int = 17,
        working_weekdays: Iterable[int] = MONDAY_TO_SATURDAY,
    ) -> "BusinessCalendar":
        """
        Build a calendar, expanding recurring holidays into ``years``.

        Recurring holidays also match their month and day in any other year.
        """
        holidays = list(holidays)
        return cls(
            start_hour=start_hour,
            end_hour=end_hour,
            working_weekdays=frozenset(working_weekdays),
            holidays=expand_holidays(holidays, years),
            recurring_holidays=frozenset(
                (h.date.month, h.date.day) for h in holidays if h.recurring
            ),
        )

    @property
    def hours_per_day(self) -> int:
        return self.end_hour - self.start_hour

    def _window(self, day: dt.date) -> tuple[dt.datetime, dt.datetime]:
        midnight = dt.datetime.combine(day, dt.time(), tzinfo=IST)
        return (
            midnight + dt.timedelta(hours=self.start_hour),
            midnight + dt.timedelta(hours=self.end_hour),
        )

    def is_working_date(self, day: dt.date) -> bool:
        """Check an IST calendar date against weekdays and holidays."""
        return day.weekday() in self.working_weekdays and not self._is_holiday_date(day)

    def _is_holiday_date(self, day: dt.date) -> bool:
        return day in self.holidays or (day.month, day.day) in self.recurring_holidays

    def is_holiday(self, instant: dt.datetime) -> bool:
        return self._is_holiday_date(to_ist(instant).date())

    def is_business_day(self, instant: dt.datetime) -> bool:
        """Check whether the IST date of ``instant`` is a working day."""
        return self.is_working_date(to_ist(instant).date())

    def is_business_hour(self, instant: dt.datetime) -> bool:
        """Check whether ``instant`` falls inside the working window."""
        local = to_ist(instant)
        return (
            self.is_working_date(local.date())
            and self.start_hour <= local.hour < self.end_hour
        )

    def business_hours_between(self, start: dt.datetime, end: dt.datetime) -> float:
        """
        Working hours elapsed between two instants.

        Walks IST dates from ``start`` to ``end`` and sums the overlap of
        ``[start, end]`` with each working day's window. Returns 0.0 for an
        empty or reversed range; fractional hours are kept.
        """
        start_ist = to_ist(start)
        end_ist = to_ist(end)
        if start_ist >= end_ist:
            return 0.0

        total = dt.timedelta()
        day = start_ist.date()
        last_day = end_ist.date()
        while day <= last_day:
            if self.is_working_date(day):
                open_at, close_at = self._window(day)
                lo = max(start_ist, open_at)
                hi = min(end_ist, close_at)
                if lo < hi:
                    total += hi - lo
            day += ONE_DAY

        return total.total_seconds() / 3600

    def add_business_hours(self, start: dt.datetime, hours: float) -> dt.datetime:
        """
        Instant (UTC) at which ``hours`` working hours have elapsed from ``start``.

        Non-positive ``hours`` return ``start`` unchanged.
        """
        remaining = dt.timedelta(hours=hours)
        if remaining <= dt.timedelta():
            return to_utc(start)

        current = to_ist(start)
        while True:
            day = current.date()
            if self.is_working_date(day):
                open_at, close_at = self._window(day)
                if current < open_at:
                    current = open_at
                if current < close_at:
                    available = close_at - current
                    if remaining <= available:
                        return (current + remaining).astimezone(UTC)
                    remaining -= available
            current = dt.datetime.combine(day + ONE_DAY, dt.time(), tzinfo=IST)

    def next_business_day(self, instant: dt.datetime) -> dt.date:
        """First working IST date strictly after the date of ``instant``."""
        day = to_ist(instant).date() + ONE_DAY
        while not self.is_working_date(day):
            day += ONE_DAY
        return day


def format_hours(hours: Optional[float]) -> str:
    """Human readable duration, e.g. '45 minutes', '3.5 hours', '2 days 4 hours'."""
    if hours is None:
        return "N/A"
    if hours < 1:
        return f"{round(hours * 60)} minutes"
    if hours < 24:
        return f"{round(hours, 1):g} hours"

    days, remaining = divmod(round(hours), 24)
    text = f"{days} day{'s' if days > 1 else ''}"
    if remaining > 0:
        text += f" {remaining} hour{'s' if remaining > 1 else ''}"
    return text
