"""Recovery score computation.

The daily recovery score is the sum of four independently clamped
components (sleep, resting HR, HRV, activity load), clamped again to
0-100. Missing readings arrive as 0 and simply lower the score.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


# ---------------------------------------------------------------------------
# Component ceilings and reference ranges
# ---------------------------------------------------------------------------

SLEEP_MAX = 25.0
RHR_MAX = 25.0
HRV_MAX = 30.0
ACTIVITY_MAX = 20.0

SLEEP_TARGET_HOURS = 8.0

RHR_OPTIMAL_LOW = 50.0  # bpm
RHR_OPTIMAL_HIGH = 60.0  # bpm
RHR_PENALTY_PER_BPM = 0.5

HRV_REFERENCE_MS = 100.0

ACTIVITY_LOW = 300.0
ACTIVITY_HIGH = 600.0
ACTIVITY_PENALTY_PER_100 = 2.0

# Activity load = active kcal + steps * STEP_WEIGHT
STEP_WEIGHT = 0.02


class RecoveryStatus(str, Enum):
    """Coarse recovery bucket."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    MODERATE = "Moderate"
    POOR = "Poor"
    VERY_POOR = "Very Poor"

    @property
    def label(self) -> str:
        return f"{self.value} Recovery"

    @property
    def color(self) -> str:
        return STATUS_COLORS[self]


STATUS_COLORS = {
    RecoveryStatus.EXCELLENT: "10b981",  # green
    RecoveryStatus.GOOD: "22c55e",  # light green
    RecoveryStatus.MODERATE: "eab308",  # yellow
    RecoveryStatus.POOR: "f97316",  # orange
    RecoveryStatus.VERY_POOR: "ef4444",  # red
}

# Inclusive lower bound of each bucket, highest first
STATUS_THRESHOLDS = [
    (80.0, RecoveryStatus.EXCELLENT),
    (60.0, RecoveryStatus.GOOD),
    (40.0, RecoveryStatus.MODERATE),
    (20.0, RecoveryStatus.POOR),
]


@dataclass(frozen=True)
class ScoreBreakdown:
    """Recovery score and its four components."""

    sleep: float  # 0-25
    resting_hr: float  # 0-25
    hrv: float  # 0-30
    activity: float  # 0-20
    total: float  # 0-100

    @property
    def status(self) -> RecoveryStatus:
        return recovery_status(self.total)

    def __repr__(self) -> str:
        return (
            f"ScoreBreakdown(total={self.total:.1f}, "
            f"sleep={self.sleep:.1f}, rhr={self.resting_hr:.1f}, "
            f"hrv={self.hrv:.1f}, activity={self.activity:.1f})"
        )


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


def _sleep_component(sleep_hours: float) -> float:
    return min(sleep_hours / SLEEP_TARGET_HOURS * SLEEP_MAX, SLEEP_MAX)


def _rhr_component(resting_hr: float) -> float:
    """Lower-is-better band: full marks inside [50, 60] bpm, 0 if no data."""
    if resting_hr == 0:
        return 0.0
    if RHR_OPTIMAL_LOW <= resting_hr <= RHR_OPTIMAL_HIGH:
        return RHR_MAX
    if resting_hr < RHR_OPTIMAL_LOW:
        return max(RHR_MAX - (RHR_OPTIMAL_LOW - resting_hr) * RHR_PENALTY_PER_BPM, 0.0)
    return max(RHR_MAX - (resting_hr - RHR_OPTIMAL_HIGH) * RHR_PENALTY_PER_BPM, 0.0)


def _hrv_component(hrv_ms: float) -> float:
    return min(hrv_ms / HRV_REFERENCE_MS * HRV_MAX, HRV_MAX)


def _activity_component(activity_load: float) -> float:
    """Target band [300, 600]; under-activity scales linearly, overload decays."""
    if ACTIVITY_LOW <= activity_load <= ACTIVITY_HIGH:
        return ACTIVITY_MAX
    if activity_load < ACTIVITY_LOW:
        return activity_load / ACTIVITY_LOW * ACTIVITY_MAX
    return max(
        ACTIVITY_MAX - (activity_load - ACTIVITY_HIGH) / 100.0 * ACTIVITY_PENALTY_PER_100,
        0.0,
    )


# ---------------------------------------------------------------------------
# Composite scoring
# ---------------------------------------------------------------------------


def score_breakdown(
    sleep_hours: float,
    resting_hr: float,
    hrv_ms: float,
    activity_load: float,
) -> ScoreBreakdown:
    """Compute every component of the recovery score.

    Args:
        sleep_hours: Total sleep for the day, in hours.
        resting_hr: Resting heart rate in bpm (0 = no reading).
        hrv_ms: HRV (SDNN) in milliseconds (0 = no reading).
        activity_load: Composite activity load (see :func:`activity_load`).

    Returns:
        ScoreBreakdown whose ``total`` is clamped to 0-100.
    """
    sleep = _sleep_component(sleep_hours)
    rhr = _rhr_component(resting_hr)
    hrv = _hrv_component(hrv_ms)
    activity = _activity_component(activity_load)

    total = max(0.0, min(100.0, sleep + rhr + hrv + activity))

    return ScoreBreakdown(
        sleep=sleep,
        resting_hr=rhr,
        hrv=hrv,
        activity=activity,
        total=total,
    )


def compute_recovery_score(
    sleep_hours: float,
    resting_hr: float,
    hrv_ms: float,
    activity_load: float,
) -> float:
    """Return the 0-100 recovery score for one day's metrics."""
    return score_breakdown(sleep_hours, resting_hr, hrv_ms, activity_load).total


def recovery_status(score: float) -> RecoveryStatus:
    """Bucket a score: [80,100] Excellent ... [0,20) Very Poor."""
    for lower, status in STATUS_THRESHOLDS:
        if score >= lower:
            return status
    return RecoveryStatus.VERY_POOR


def recovery_color(score: float) -> str:
    """Hex colour (no leading #) for the score's status bucket."""
    return STATUS_COLORS[recovery_status(score)]


def activity_load(active_energy_kcal: float, steps: float) -> float:
    """Combine active energy and step count into a single load value."""
    return active_energy_kcal + steps * STEP_WEIGHT
