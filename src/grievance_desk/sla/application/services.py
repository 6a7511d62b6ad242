"""
SLA Application Services
=========================

Application services that turn issue lifecycles into SLA metrics and
turnaround-time reports.

Both services are stateless: they hold an immutable calendar and SLA
configuration and never touch storage. Callers fetch (and city-filter)
issues beforehand and pass them in.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Tuple

from grievance_desk.config import SLAStatus, VALID_PRIORITIES
from grievance_desk.sla.domain import (
    BusinessCalendar,
    DailyTrendPoint,
    Issue,
    PriorityBreakdown,
    ResponseStats,
    SLAConfig,
    SLAMetrics,
    SLAPolicy,
    TATStats,
    to_ist,
    to_utc,
)
from grievance_desk.shared.infrastructure.logging import get_logger, log_latency

logger = get_logger(__name__)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class SLAService:
    """
    Per-issue SLA evaluation.

    Breach checks use the measured milestone when it exists and live
    elapsed business time otherwise, so an in-flight issue is breached as
    soon as elapsed time passes the threshold.
    """

    def __init__(self, calendar: BusinessCalendar, config: Optional[SLAConfig] = None):
        self._calendar = calendar
        self._config = config or SLAConfig()

    @classmethod
    def from_policy(cls, policy: SLAPolicy) -> "SLAService":
        return cls(policy.calendar, policy.config)

    @property
    def calendar(self) -> BusinessCalendar:
        return self._calendar

    @property
    def config(self) -> SLAConfig:
        return self._config

    def business_hours_between(self, start: datetime, end: datetime) -> float:
        return self._calendar.business_hours_between(start, end)

    def _hours(self, start: Optional[datetime], end: Optional[datetime]) -> Optional[float]:
        if start is None or end is None:
            return None
        return self._calendar.business_hours_between(start, end)

    def _deadline(self, start: Optional[datetime], hours: float) -> Optional[datetime]:
        if start is None:
            return None
        return self._calendar.add_business_hours(start, hours)

    def compute_metrics(self, issue: Issue, now: Optional[datetime] = None) -> SLAMetrics:
        """
        Calculate SLA metrics for an issue.

        Args:
            issue: Issue to evaluate
            now: Evaluation instant (defaults to the current time)

        Returns:
            SLAMetrics snapshot; never raises for a missing timestamp
        """
        now = to_utc(now) if now is not None else _utc_now()
        target = self._config.get_target(issue.priority)

        elapsed = self._hours(issue.created_at, now) or 0.0
        response_time = self._hours(issue.created_at, issue.first_response_at)
        resolution_time = (
            self._hours(issue.created_at, issue.resolved_at)
            if issue.is_resolved else None
        )

        measured_response = response_time if response_time is not None else elapsed
        measured_resolution = resolution_time if resolution_time is not None else elapsed

        response_breached = measured_response > target.response_time_hours
        resolution_breached = measured_resolution > target.resolution_time_hours
        escalation_due = elapsed > target.escalation_time_hours

        if resolution_breached:
            sla_status = SLAStatus.BREACHED
        elif response_breached:
            sla_status = SLAStatus.RESPONSE_BREACHED
        elif escalation_due:
            sla_status = SLAStatus.ESCALATION_DUE
        else:
            sla_status = SLAStatus.ON_TRACK

        return SLAMetrics(
            issue_id=issue.id,
            priority=issue.priority,
            evaluated_at=now,
            response_target_hours=target.response_time_hours,
            resolution_target_hours=target.resolution_time_hours,
            escalation_target_hours=target.escalation_time_hours,
            elapsed_hours=elapsed,
            response_time=response_time,
            resolution_time=resolution_time,
            is_response_sla_breached=response_breached,
            is_resolution_sla_breached=resolution_breached,
            is_escalation_due=escalation_due,
            response_time_remaining=max(0.0, target.response_time_hours - elapsed),
            resolution_time_remaining=max(0.0, target.resolution_time_hours - elapsed),
            escalation_time_remaining=max(0.0, target.escalation_time_hours - elapsed),
            sla_status=sla_status,
            response_deadline=self._deadline(issue.created_at, target.response_time_hours),
            resolution_deadline=self._deadline(issue.created_at, target.resolution_time_hours),
            escalation_deadline=self._deadline(issue.created_at, target.escalation_time_hours),
        )

    compute_sla_metrics = compute_metrics

    def metrics_for_many(
        self,
        issues: Iterable[Issue],
        now: Optional[datetime] = None
    ) -> Dict[object, SLAMetrics]:
        """Calculate SLA metrics for several issues at one instant, keyed by issue id."""
        now = to_utc(now) if now is not None else _utc_now()
        return {issue.id: self.compute_metrics(issue, now) for issue in issues}

    def issues_near_breach(
        self,
        issues: Iterable[Issue],
        hours_before_breach: float = 1.0,
        now: Optional[datetime] = None
    ) -> List[Issue]:
        """
        Open issues whose resolution budget is in ``(0, hours_before_breach]``.

        Already-breached issues (no budget left) are not included.
        """
        now = to_utc(now) if now is not None else _utc_now()
        near = []
        for issue in issues:
            if not issue.is_open:
                continue
            remaining = self.compute_metrics(issue, now).resolution_time_remaining
            if 0 < remaining <= hours_before_breach:
                near.append(issue)
        return near


class TATReportingService:
    """
    Aggregate turnaround-time and compliance reporting.

    TAT is measured from creation to resolution (or last update for legacy
    records without a resolution timestamp) in business hours. A resolved
    issue with no usable timestamps still counts, with a TAT of zero.
    """

    def __init__(self, calendar: BusinessCalendar, config: Optional[SLAConfig] = None):
        self._calendar = calendar
        self._config = config or SLAConfig()

    @classmethod
    def from_policy(cls, policy: SLAPolicy) -> "TATReportingService":
        return cls(policy.calendar, policy.config)

    def _tat_samples(self, issues: Iterable[Issue]) -> List[Tuple[Issue, float]]:
        samples = []
        for issue in issues:
            if not issue.is_resolved:
                continue
            end = issue.completed_at
            if issue.created_at is None or end is None:
                logger.debug(
                    "Resolved issue without timestamps, counting zero TAT",
                    extra={"issue_id": str(issue.id)}
                )
                samples.append((issue, 0.0))
                continue
            samples.append((issue, self._calendar.business_hours_between(issue.created_at, end)))
        return samples

    def _summarise(self, samples: List[Tuple[Issue, float]]) -> TATStats:
        if not samples:
            return TATStats()

        values = sorted(tat for _, tat in samples)
        count = len(values)
        compliant = sum(
            1 for issue, tat in samples
            if tat <= self._config.get_target(issue.priority).resolution_time_hours
        )
        return TATStats(
            average_tat=sum(values) / count,
            median_tat=values[(count - 1) // 2],
            min_tat=values[0],
            max_tat=values[-1],
            total_resolved=count,
            compliant_count=compliant,
            sla_compliance_rate=compliant / count * 100,
        )

    def compute_tat_stats(self, issues: Iterable[Issue]) -> TATStats:
        """
        Calculate TAT statistics for resolved and closed issues.

        Returns zeroed stats when there is nothing to measure.
        """
        issues = list(issues)
        with log_latency(logger, "compute_tat_stats", issues=len(issues)):
            return self._summarise(self._tat_samples(issues))

    def compute_priority_breakdown(self, issues: Iterable[Issue]) -> List[PriorityBreakdown]:
        """TAT statistics per priority, most urgent first."""
        issues = list(issues)
        breakdown = []
        for priority in VALID_PRIORITIES:
            subset = [issue for issue in issues if issue.priority == priority]
            breakdown.append(PriorityBreakdown(
                priority=priority,
                resolution_target_hours=self._config.get_target(priority).resolution_time_hours,
                total_issues=len(subset),
                stats=self._summarise(self._tat_samples(subset)),
            ))
        return breakdown

    def compute_response_stats(self, issues: Iterable[Issue]) -> ResponseStats:
        """Average first-response time and share answered within the response target."""
        times = []
        within = 0
        for issue in issues:
            if issue.created_at is None or issue.first_response_at is None:
                continue
            hours = self._calendar.business_hours_between(issue.created_at, issue.first_response_at)
            times.append(hours)
            if hours <= self._config.get_target(issue.priority).response_time_hours:
                within += 1

        if not times:
            return ResponseStats()
        return ResponseStats(
            average_response_time=sum(times) / len(times),
            responded_count=len(times),
            within_target_count=within,
        )

    def compute_daily_trend(
        self,
        issues: Iterable[Issue],
        start_date: date,
        end_date: date
    ) -> List[DailyTrendPoint]:
        """
        Daily volume and handling times between two IST dates, inclusive.

        An issue counts as resolved on a day only when it was both created
        and resolved on that day.
        """
        by_day: Dict[date, List[Issue]] = {}
        for issue in issues:
            if issue.created_at is None:
                continue
            by_day.setdefault(to_ist(issue.created_at).date(), []).append(issue)

        trend = []
        day = start_date
        while day <= end_date:
            day_issues = by_day.get(day, [])
            resolved_today = [
                issue for issue in day_issues
                if issue.resolved_at is not None and to_ist(issue.resolved_at).date() == day
            ]
            trend.append(DailyTrendPoint(
                date=day,
                ticket_count=len(day_issues),
                resolved_count=len(resolved_today),
                avg_response_time=self._average(
                    (issue.created_at, issue.first_response_at) for issue in day_issues
                ),
                avg_resolution_time=self._average(
                    (issue.created_at, issue.resolved_at) for issue in resolved_today
                ),
            ))
            day += timedelta(days=1)
        return trend

    def _average(self, spans: Iterable[Tuple[Optional[datetime], Optional[datetime]]]) -> float:
        hours = [
            self._calendar.business_hours_between(start, end)
            for start, end in spans
            if start is not None and end is not None
        ]
        return sum(hours) / len(hours) if hours else 0.0
