"""Assemble daily snapshots from a per-metric data source.

Readings are fetched concurrently, one task per (day, metric) pair,
through a bounded semaphore. Everything is joined with a single
``asyncio.gather`` before any snapshot is built, so the analytics layer
only ever sees a finished, date-sorted list.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, timedelta
from enum import Enum

from zenscore.analytics.aggregate import Period
from zenscore.analytics.score import activity_load
from zenscore.analytics.snapshot import DailySnapshot

logger = logging.getLogger(__name__)

DEFAULT_CONCURRENCY = 8


class RawMetric(str, Enum):
    """Readings a source provides for one calendar day."""

    SLEEP_HOURS = "sleep_hours"
    RESTING_HR = "resting_hr"
    HRV = "hrv_ms"
    ACTIVE_ENERGY = "active_energy_kcal"
    STEPS = "steps"


class MetricSource:
    """Where daily readings come from.

    Subclasses implement :meth:`fetch`. Return ``None`` when the day has
    no reading for the metric; it is recorded as 0. Exceptions are not
    caught and abort the whole collection.
    """

    async def fetch(self, metric: RawMetric, day: date) -> float | None:
        raise NotImplementedError


def days_in_range(period: Period, now: date | datetime | None = None) -> list[date]:
    """Every calendar day from ``now - period.days`` through ``now``."""
    if now is None:
        end = date.today()
    elif isinstance(now, datetime):
        end = now.date()
    else:
        end = now
    start = end - timedelta(days=period.days)
    return [start + timedelta(days=i) for i in range(period.days + 1)]


def _build_snapshot(day: date, readings: dict[RawMetric, float | None]) -> DailySnapshot:
    values = {}
    for metric in RawMetric:
        value = readings.get(metric)
        if value is None:
            logger.debug("No %s reading for %s", metric.value, day)
            value = 0.0
        values[metric] = value

    return DailySnapshot(
        date=day,
        sleep_hours=values[RawMetric.SLEEP_HOURS],
        resting_hr=values[RawMetric.RESTING_HR],
        hrv_ms=values[RawMetric.HRV],
        activity_load=activity_load(values[RawMetric.ACTIVE_ENERGY], values[RawMetric.STEPS]),
    )


async def _gather_readings(
    source: MetricSource,
    days: list[date],
    max_concurrency: int,
) -> dict[date, dict[RawMetric, float | None]]:
    semaphore = asyncio.Semaphore(max_concurrency)

    async def _fetch_one(metric: RawMetric, day: date) -> float | None:
        async with semaphore:
            return await source.fetch(metric, day)

    pairs = [(day, metric) for day in days for metric in RawMetric]
    results = await asyncio.gather(*[_fetch_one(metric, day) for day, metric in pairs])

    readings: dict[date, dict[RawMetric, float | None]] = {day: {} for day in days}
    for (day, metric), value in zip(pairs, results):
        readings[day][metric] = value
    return readings


async def collect_snapshot(source: MetricSource, day: date) -> DailySnapshot:
    """Fetch all readings for one day and build its snapshot."""
    readings = await _gather_readings(source, [day], len(RawMetric))
    return _build_snapshot(day, readings[day])


async def collect_snapshots(
    source: MetricSource,
    period: Period = Period.WEEK,
    now: date | datetime | None = None,
    max_concurrency: int = DEFAULT_CONCURRENCY,
) -> list[DailySnapshot]:
    """Fetch every day of ``period`` ending at ``now``.

    Args:
        source: Provider of per-day readings.
        period: Window to cover (``period.days + 1`` calendar days).
        now: Last day of the window (default: today).
        max_concurrency: Upper bound on in-flight fetches.

    Returns:
        One snapshot per day, oldest first.
    """
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be >= 1, got {max_concurrency}")

    days = days_in_range(period, now)
    logger.debug(
        "Collecting %d day(s) x %d metric(s), concurrency=%d",
        len(days), len(RawMetric), max_concurrency,
    )
    readings = await _gather_readings(source, days, max_concurrency)
    return [_build_snapshot(day, readings[day]) for day in sorted(readings)]
