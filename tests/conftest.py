"""Shared fixtures and helpers for the zenscore test suite."""

from __future__ import annotations

import json
from datetime import date, timedelta
from pathlib import Path
from typing import Sequence

import pytest

from zenscore.analytics.snapshot import DailySnapshot


# Fixed "today" so window arithmetic is reproducible
BASE_DAY = date(2026, 10, 17)


# ---------------------------------------------------------------------------
# Snapshot builders
# ---------------------------------------------------------------------------


def make_snapshot(
    day: date = BASE_DAY,
    sleep: float = 7.5,
    rhr: float = 55.0,
    hrv: float = 60.0,
    activity: float = 450.0,
) -> DailySnapshot:
    """Build a single snapshot with healthy defaults."""
    return DailySnapshot(
        date=day,
        sleep_hours=sleep,
        resting_hr=rhr,
        hrv_ms=hrv,
        activity_load=activity,
    )


def _at(value: float | Sequence[float], i: int) -> float:
    if isinstance(value, (int, float)):
        return float(value)
    return float(value[i])


def make_days(
    n: int,
    end: date = BASE_DAY,
    sleep: float | Sequence[float] = 7.5,
    rhr: float | Sequence[float] = 55.0,
    hrv: float | Sequence[float] = 60.0,
    activity: float | Sequence[float] = 450.0,
) -> list[DailySnapshot]:
    """Build ``n`` consecutive days ending at ``end``, oldest first.

    Each metric is either a constant or a per-day sequence of length ``n``.
    """
    start = end - timedelta(days=n - 1)
    return [
        make_snapshot(
            start + timedelta(days=i),
            sleep=_at(sleep, i),
            rhr=_at(rhr, i),
            hrv=_at(hrv, i),
            activity=_at(activity, i),
        )
        for i in range(n)
    ]


def make_record(day: date, **metrics: float) -> dict:
    """Create a single day record as the loader expects it."""
    record = {"date": day.isoformat()}
    record.update(metrics)
    return record


# ---------------------------------------------------------------------------
# File helpers
# ---------------------------------------------------------------------------


def write_jsonl(path: Path, entries: list[dict]) -> Path:
    """Write a list of dicts as JSONL to the given path."""
    with open(path, "w") as f:
        for entry in entries:
            f.write(json.dumps(entry) + "\n")
    return path


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def strained_week() -> list[DailySnapshot]:
    """Seven short-sleep, high-RHR, low-HRV, low-activity days."""
    return make_days(7, sleep=6.0, rhr=70.0, hrv=35.0, activity=200.0)


@pytest.fixture
def optimal_week() -> list[DailySnapshot]:
    """Seven days with every score component maxed out."""
    return make_days(7, sleep=8.0, rhr=55.0, hrv=100.0, activity=450.0)
