"""Period summaries: reduce a run of daily snapshots to window statistics.

A summary covers ``window_days`` before ``now`` (both ends inclusive) and
holds per-metric averages, extrema, trend tags and nested sub-periods:

* up to 7 days   -- no sub-periods
* up to 30 days  -- ``ceil(window_days / 7)`` weekly sub-summaries,
  bucketed by ``day_offset // 7``
* longer         -- split at day offset 30 into two sub-summaries

Sub-periods are built by feeding each subset back into :func:`aggregate`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from enum import Enum
from typing import Any, Iterable, Sequence

from zenscore.analytics.snapshot import DailySnapshot, Metric
from zenscore.analytics.trends import (
    MetricTrends,
    TrendBasis,
    mean_metric,
    split_trends,
    trends_between,
)
from zenscore.errors import SnapshotOrderError

logger = logging.getLogger(__name__)

WEEK_DAYS = 7
MONTH_DAYS = 30


class Period(Enum):
    """Standard summary windows, valued in days."""

    DAY = 1
    WEEK = 7
    MONTH = 30
    TWO_MONTHS = 60

    @property
    def days(self) -> int:
        return self.value


AVERAGE_FIELDS = {
    Metric.SLEEP: "average_sleep",
    Metric.RESTING_HR: "average_resting_hr",
    Metric.HRV: "average_hrv",
    Metric.ACTIVITY: "average_activity_load",
    Metric.RECOVERY: "average_recovery_score",
}


@dataclass(frozen=True)
class PeriodSummary:
    """Statistics for one window of daily snapshots."""

    window_days: int
    start_date: date
    end_date: date
    snapshots: tuple[DailySnapshot, ...]

    average_sleep: float
    average_resting_hr: float
    average_hrv: float
    average_activity_load: float
    average_recovery_score: float

    trends: MetricTrends
    trend_basis: TrendBasis

    sub_periods: tuple[PeriodSummary, ...] = ()

    # Extrema (None for an empty window)
    best_recovery_day: DailySnapshot | None = None
    worst_recovery_day: DailySnapshot | None = None
    longest_sleep: float | None = None
    shortest_sleep: float | None = None

    @property
    def period(self) -> Period | None:
        try:
            return Period(self.window_days)
        except ValueError:
            return None

    @property
    def day_count(self) -> int:
        return len(self.snapshots)

    @property
    def is_empty(self) -> bool:
        return not self.snapshots

    def average(self, metric: Metric) -> float:
        return getattr(self, AVERAGE_FIELDS[metric])

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict (JSON-friendly)."""
        return {
            "window_days": self.window_days,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "averages": {m.value: round(self.average(m), 2) for m in Metric},
            "trends": self.trends.to_dict(),
            "trend_basis": self.trend_basis.value,
            "best_recovery_day": (
                self.best_recovery_day.to_dict() if self.best_recovery_day else None
            ),
            "worst_recovery_day": (
                self.worst_recovery_day.to_dict() if self.worst_recovery_day else None
            ),
            "longest_sleep": self.longest_sleep,
            "shortest_sleep": self.shortest_sleep,
            "days": [s.to_dict() for s in self.snapshots],
            "sub_periods": [p.to_dict() for p in self.sub_periods],
        }

    def __repr__(self) -> str:
        return (
            f"PeriodSummary({self.start_date.isoformat()}..{self.end_date.isoformat()}: "
            f"days={self.day_count}, "
            f"score={self.average_recovery_score:.1f}, "
            f"sleep={self.average_sleep:.1f}h, "
            f"subs={len(self.sub_periods)})"
        )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_day(value: date | datetime | None) -> date:
    if value is None:
        return date.today()
    if isinstance(value, datetime):
        return value.date()
    return value


def _check_order(snapshots: Sequence[DailySnapshot]) -> None:
    for prev, cur in zip(snapshots, snapshots[1:]):
        if cur.date <= prev.date:
            raise SnapshotOrderError(
                f"snapshots must be strictly ascending by date: "
                f"{cur.date.isoformat()} follows {prev.date.isoformat()}"
            )


def _offset(snapshot: DailySnapshot, start: date) -> int:
    return (snapshot.date - start).days


def _window_trends(
    snapshots: Sequence[DailySnapshot],
    averages: dict[Metric, float],
    window_days: int,
    start: date,
    previous: PeriodSummary | None,
) -> tuple[MetricTrends, TrendBasis]:
    """Compare against ``previous`` if given, else first vs second half."""
    if previous is not None:
        prev_averages = {m: previous.average(m) for m in Metric}
        return trends_between(prev_averages, averages), TrendBasis.PREVIOUS

    mid = window_days // 2
    first = [s for s in snapshots if _offset(s, start) < mid]
    second = [s for s in snapshots if _offset(s, start) >= mid]
    if not first or not second:
        return MetricTrends(), TrendBasis.NONE
    return split_trends(first, second), TrendBasis.SPLIT


def _sub_periods(
    snapshots: Sequence[DailySnapshot],
    window_days: int,
    start: date,
) -> tuple[PeriodSummary, ...]:
    if window_days <= WEEK_DAYS:
        return ()

    if window_days > MONTH_DAYS:
        first = [s for s in snapshots if _offset(s, start) < MONTH_DAYS]
        second = [s for s in snapshots if _offset(s, start) >= MONTH_DAYS]
        head = aggregate(first, MONTH_DAYS, now=start + timedelta(days=MONTH_DAYS))
        tail = aggregate(
            second,
            window_days - MONTH_DAYS,
            now=start + timedelta(days=window_days),
            previous=head,
        )
        return (head, tail)

    n_weeks = math.ceil(window_days / WEEK_DAYS)
    buckets: list[list[DailySnapshot]] = [[] for _ in range(n_weeks)]
    for s in snapshots:
        # The window's last day lands past the final bucket when
        # window_days is a multiple of 7.
        buckets[min(_offset(s, start) // WEEK_DAYS, n_weeks - 1)].append(s)

    weeks: list[PeriodSummary] = []
    previous = None
    for i, bucket in enumerate(buckets):
        week_end = start + timedelta(days=(i + 1) * WEEK_DAYS)
        week = aggregate(bucket, WEEK_DAYS, now=week_end, previous=previous)
        weeks.append(week)
        previous = week
    return tuple(weeks)


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


def aggregate(
    snapshots: Iterable[DailySnapshot],
    window_days: int,
    now: date | datetime | None = None,
    previous: PeriodSummary | None = None,
) -> PeriodSummary:
    """Summarise the snapshots falling in ``[now - window_days, now]``.

    Args:
        snapshots: Daily snapshots in strictly ascending date order.
        window_days: Window length in days.
        now: Window end (default: today).
        previous: Summary of the preceding period. When given, trends are
            period-over-period; otherwise the window is split in half.

    Returns:
        A populated PeriodSummary. Empty input yields zero averages and
        no extrema. Input that misses the window entirely is logged at
        WARNING, since the result is indistinguishable from no data.

    Raises:
        SnapshotOrderError: If the snapshots are unsorted or repeat a day.
    """
    if window_days < 1:
        raise ValueError(f"window_days must be >= 1, got {window_days}")

    snapshots = list(snapshots)
    _check_order(snapshots)

    end = _to_day(now)
    start = end - timedelta(days=window_days)

    days = tuple(s for s in snapshots if start <= s.date <= end)
    if snapshots and not days:
        logger.warning(
            "None of %d snapshot(s) (%s..%s) fall in %s..%s; summary is empty",
            len(snapshots), snapshots[0].date, snapshots[-1].date, start, end,
        )
    elif len(days) < len(snapshots):
        logger.debug(
            "Dropped %d snapshot(s) outside %s..%s",
            len(snapshots) - len(days), start, end,
        )

    averages = {m: mean_metric(days, m) for m in Metric}
    trends, basis = _window_trends(days, averages, window_days, start, previous)

    best = worst = None
    longest = shortest = None
    if days:
        best = max(days, key=lambda s: s.recovery_score)
        worst = min(days, key=lambda s: s.recovery_score)
        longest = max(s.sleep_hours for s in days)
        shortest = min(s.sleep_hours for s in days)

    return PeriodSummary(
        window_days=window_days,
        start_date=start,
        end_date=end,
        snapshots=days,
        average_sleep=averages[Metric.SLEEP],
        average_resting_hr=averages[Metric.RESTING_HR],
        average_hrv=averages[Metric.HRV],
        average_activity_load=averages[Metric.ACTIVITY],
        average_recovery_score=averages[Metric.RECOVERY],
        trends=trends,
        trend_basis=basis,
        sub_periods=_sub_periods(days, window_days, start),
        best_recovery_day=best,
        worst_recovery_day=worst,
        longest_sleep=longest,
        shortest_sleep=shortest,
    )


def weekly_summary(
    snapshots: Iterable[DailySnapshot],
    now: date | datetime | None = None,
    previous: PeriodSummary | None = None,
) -> PeriodSummary:
    return aggregate(snapshots, Period.WEEK.days, now=now, previous=previous)


def monthly_summary(
    snapshots: Iterable[DailySnapshot],
    now: date | datetime | None = None,
    previous: PeriodSummary | None = None,
) -> PeriodSummary:
    return aggregate(snapshots, Period.MONTH.days, now=now, previous=previous)


def two_month_summary(
    snapshots: Iterable[DailySnapshot],
    now: date | datetime | None = None,
    previous: PeriodSummary | None = None,
) -> PeriodSummary:
    return aggregate(snapshots, Period.TWO_MONTHS.days, now=now, previous=previous)


def previous_period_end(summary: PeriodSummary) -> date:
    """End date for the period immediately before ``summary``.

    Windows include both end points, so the preceding window ends the
    day before this one starts.
    """
    return summary.start_date - timedelta(days=1)
