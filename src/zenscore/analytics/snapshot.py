"""Daily health snapshot: one calendar day of metrics plus its score."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from datetime import date, datetime
from enum import Enum
from typing import Any

from zenscore.analytics.score import (
    RecoveryStatus,
    compute_recovery_score,
    recovery_status,
    activity_load as combine_activity_load,
)
from zenscore.errors import SnapshotValidationError


class Metric(str, Enum):
    """The daily metrics the engine summarises."""

    SLEEP = "sleep"
    RESTING_HR = "resting_hr"
    HRV = "hrv"
    ACTIVITY = "activity"
    RECOVERY = "recovery"

    @property
    def lower_is_better(self) -> bool:
        return self is Metric.RESTING_HR

    @property
    def attribute(self) -> str:
        """Name of the matching :class:`DailySnapshot` field."""
        return SNAPSHOT_FIELDS[self]

    @property
    def display_name(self) -> str:
        return DISPLAY_NAMES[self]


SNAPSHOT_FIELDS = {
    Metric.SLEEP: "sleep_hours",
    Metric.RESTING_HR: "resting_hr",
    Metric.HRV: "hrv_ms",
    Metric.ACTIVITY: "activity_load",
    Metric.RECOVERY: "recovery_score",
}

DISPLAY_NAMES = {
    Metric.SLEEP: "sleep duration",
    Metric.RESTING_HR: "resting heart rate",
    Metric.HRV: "HRV",
    Metric.ACTIVITY: "activity load",
    Metric.RECOVERY: "recovery score",
}


def _to_day(value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def _check_metric(name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise SnapshotValidationError(f"{name} must be a number, got {value!r}") from None
    if not math.isfinite(number):
        raise SnapshotValidationError(f"{name} must be finite, got {value!r}")
    if number < 0:
        raise SnapshotValidationError(f"{name} must be >= 0, got {value!r}")
    return number


def _reading(record: dict[str, Any], key: str) -> Any:
    value = record.get(key)
    return 0.0 if value is None else value


@dataclass(frozen=True)
class DailySnapshot:
    """One day's metrics. The recovery score is derived on construction."""

    date: date
    sleep_hours: float = 0.0
    resting_hr: float = 0.0  # 0 = no reading
    hrv_ms: float = 0.0  # SDNN; 0 = no reading
    activity_load: float = 0.0
    recovery_score: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "date", _to_day(self.date))
        for name in ("sleep_hours", "resting_hr", "hrv_ms", "activity_load"):
            object.__setattr__(self, name, _check_metric(name, getattr(self, name)))
        object.__setattr__(
            self,
            "recovery_score",
            compute_recovery_score(
                self.sleep_hours, self.resting_hr, self.hrv_ms, self.activity_load
            ),
        )

    @property
    def status(self) -> RecoveryStatus:
        return recovery_status(self.recovery_score)

    @property
    def color(self) -> str:
        return self.status.color

    def value(self, metric: Metric) -> float:
        return getattr(self, metric.attribute)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a plain dict (JSON-friendly)."""
        d = asdict(self)
        d["date"] = self.date.isoformat()
        d["status"] = self.status.value
        return d

    @classmethod
    def from_dict(cls, record: dict[str, Any]) -> DailySnapshot:
        """Build a snapshot from a day record.

        Missing or null metrics default to 0. ``activity_load`` may be given
        directly or as ``active_energy_kcal`` + ``steps``.
        """
        if "date" not in record:
            raise SnapshotValidationError("record has no 'date'")
        try:
            day = _to_day(record["date"])
        except (TypeError, ValueError):
            raise SnapshotValidationError(f"invalid date {record['date']!r}") from None

        if record.get("activity_load") is not None:
            load = record["activity_load"]
        else:
            energy = _check_metric("active_energy_kcal", _reading(record, "active_energy_kcal"))
            steps = _check_metric("steps", _reading(record, "steps"))
            load = combine_activity_load(energy, steps)

        return cls(
            date=day,
            sleep_hours=_reading(record, "sleep_hours"),
            resting_hr=_reading(record, "resting_hr"),
            hrv_ms=_reading(record, "hrv_ms"),
            activity_load=load,
        )

    def __repr__(self) -> str:
        return (
            f"DailySnapshot({self.date.isoformat()}: "
            f"score={self.recovery_score:.0f}, "
            f"sleep={self.sleep_hours:.1f}h, "
            f"rhr={self.resting_hr:.0f}bpm, "
            f"hrv={self.hrv_ms:.0f}ms, "
            f"load={self.activity_load:.0f})"
        )
