"""Per-day value series and date labels for charting."""

from __future__ import annotations

from enum import Enum
from typing import Sequence

from zenscore.analytics.snapshot import DailySnapshot, Metric


class LabelFormat(str, Enum):
    DAY_OF_WEEK = "day_of_week"  # Mon, Tue, ...
    DAY_OF_MONTH = "day_of_month"  # 1, 2, ...
    MONTH_DAY = "month_day"  # Jan 1, Jan 2, ...


_WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
_MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def recovery_series(snapshots: Sequence[DailySnapshot]) -> list[float]:
    return [s.recovery_score for s in snapshots]


def metric_series(snapshots: Sequence[DailySnapshot], metric: Metric) -> list[float]:
    return [s.value(metric) for s in snapshots]


def date_labels(
    snapshots: Sequence[DailySnapshot],
    fmt: LabelFormat = LabelFormat.DAY_OF_WEEK,
) -> list[str]:
    """Axis labels for each snapshot's date.

    English abbreviations are spelled out here rather than taken from
    ``strftime`` so the output does not depend on the process locale.
    """
    labels = []
    for s in snapshots:
        d = s.date
        if fmt is LabelFormat.DAY_OF_WEEK:
            labels.append(_WEEKDAYS[d.weekday()])
        elif fmt is LabelFormat.DAY_OF_MONTH:
            labels.append(str(d.day))
        else:
            labels.append(f"{_MONTHS[d.month - 1]} {d.day}")
    return labels
