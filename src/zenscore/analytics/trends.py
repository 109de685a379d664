"""Directional trend classification.

A trend compares a previous value with a current one. Changes smaller
than 5% of the previous value are ``stable``. For lower-is-better
metrics (resting HR) the tag reads as improvement/decline rather than
raw direction: a falling resting HR is ``increasing``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence

import numpy as np

from zenscore.analytics.snapshot import DailySnapshot, Metric


TREND_THRESHOLD = 0.05  # 5% relative change
PREVIOUS_FLOOR = 0.01  # guards the divisor when the previous value is ~0


class Trend(str, Enum):
    """Trend tag."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"

    @property
    def symbol(self) -> str:
        return TREND_SYMBOLS[self]

    @property
    def color(self) -> str:
        return TREND_COLORS[self]


TREND_SYMBOLS = {
    Trend.INCREASING: "↑",
    Trend.DECREASING: "↓",
    Trend.STABLE: "→",
}

TREND_COLORS = {
    Trend.INCREASING: "22c55e",  # green
    Trend.DECREASING: "ef4444",  # red
    Trend.STABLE: "eab308",  # yellow
}


class TrendBasis(str, Enum):
    """What a summary's trends were computed against."""

    PREVIOUS = "previous"  # the preceding period's summary
    SPLIT = "split"  # first half vs second half of the same window
    NONE = "none"  # nothing to compare; every tag is stable


def relative_change(previous: float, current: float) -> float:
    """Signed change as a fraction of ``previous`` (floored at 0.01).

    With a previous value of 0 the result can be very large; that is
    expected rather than an error.
    """
    return (current - previous) / max(previous, PREVIOUS_FLOOR)


def classify_trend(
    previous: float,
    current: float,
    lower_is_better: bool = False,
    threshold: float = TREND_THRESHOLD,
) -> Trend:
    """Classify the change from ``previous`` to ``current``.

    Args:
        previous: Reference value (earlier period).
        current: Value being judged.
        lower_is_better: Flip polarity so that a drop counts as increasing.
        threshold: Relative change below which the trend is stable.

    Returns:
        The trend tag.
    """
    if abs(current - previous) / max(previous, PREVIOUS_FLOOR) < threshold:
        return Trend.STABLE

    if lower_is_better:
        return Trend.INCREASING if current < previous else Trend.DECREASING
    return Trend.INCREASING if current > previous else Trend.DECREASING


@dataclass(frozen=True)
class MetricTrends:
    """One trend tag per summarised metric."""

    sleep: Trend = Trend.STABLE
    resting_hr: Trend = Trend.STABLE
    hrv: Trend = Trend.STABLE
    activity: Trend = Trend.STABLE
    recovery: Trend = Trend.STABLE

    def get(self, metric: Metric) -> Trend:
        return getattr(self, metric.value)

    def to_dict(self) -> dict[str, str]:
        return {m.value: self.get(m).value for m in Metric}


def trends_between(previous: dict[Metric, float], current: dict[Metric, float]) -> MetricTrends:
    return MetricTrends(**{
        m.value: classify_trend(previous[m], current[m], lower_is_better=m.lower_is_better)
        for m in Metric
    })


def mean_metric(snapshots: Sequence[DailySnapshot], metric: Metric) -> float:
    """Average of one metric; 0 for an empty sequence."""
    values = np.asarray([s.value(metric) for s in snapshots], dtype=np.float64)
    return float(np.sum(values)) / max(len(values), 1)


def compare_summaries(current, previous) -> MetricTrends:
    """Period-over-period trends between two summaries' averages."""
    return trends_between(
        {m: previous.average(m) for m in Metric},
        {m: current.average(m) for m in Metric},
    )


def split_trends(
    first: Sequence[DailySnapshot],
    second: Sequence[DailySnapshot],
) -> MetricTrends:
    """Trends from the first half of a window to the second half."""
    return trends_between(
        {m: mean_metric(first, m) for m in Metric},
        {m: mean_metric(second, m) for m in Metric},
    )
