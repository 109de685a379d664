"""Short natural-language insights built from period summaries."""

from __future__ import annotations

from datetime import timedelta

from zenscore.analytics.aggregate import PeriodSummary
from zenscore.analytics.snapshot import Metric
from zenscore.analytics.trends import mean_metric, relative_change


WEEKLY_CHANGE_PCT = 3.0
MONTHLY_CHANGE_PCT = 5.0
METRIC_CHANGE_PCT = 5.0

# Day offset (from the month's start) where the second half begins
MONTH_MIDPOINT_DAY = 15

# Minimum half-over-half gains that count as contributing factors
SLEEP_GAIN_HOURS = 0.3
HRV_GAIN_MS = 5.0
RHR_DROP_BPM = 2.0

INSUFFICIENT_MONTHLY_DATA = "Insufficient data for monthly analysis."


# ---------------------------------------------------------------------------
# Metric normalisation
# ---------------------------------------------------------------------------


def normalized_metric_scores(summary: PeriodSummary) -> dict[Metric, float]:
    """Map the four averaged metrics onto a comparable 0-100 scale."""
    rhr = summary.average_resting_hr
    return {
        Metric.SLEEP: min(summary.average_sleep / 8.0 * 100.0, 100.0),
        Metric.HRV: min(summary.average_hrv / 100.0 * 100.0, 100.0),
        Metric.RESTING_HR: max(100.0 - abs(rhr - 55.0) * 2.0, 0.0) if rhr > 0 else 0.0,
        Metric.ACTIVITY: min(max(summary.average_activity_load / 500.0 * 100.0, 0.0), 100.0),
    }


def _best_metric_sentence(summary: PeriodSummary) -> str:
    scores = normalized_metric_scores(summary)
    best = max(scores, key=scores.get)
    return f"Your best metric this week was {best.display_name}."


def _weakest_metric_sentence(summary: PeriodSummary) -> str:
    # First match wins; this is a priority order, not a ranking.
    if summary.average_sleep < 6.5:
        return "Focus on improving sleep duration for better recovery."
    if summary.average_hrv < 40:
        return "Your HRV could be improved with stress management techniques."
    if summary.average_resting_hr > 70:
        return "Consider cardiovascular exercise to lower your resting heart rate."
    if summary.average_activity_load < 250:
        return "Increasing daily activity could boost your overall wellness."
    return ""


def _wellness_bucket(current: PeriodSummary, previous: PeriodSummary | None) -> str:
    score = current.average_recovery_score
    if previous is None:
        if score >= 75:
            return "excellent"
        if score >= 60:
            return "good"
        return "progressing"

    delta = score - previous.average_recovery_score
    if delta > 3:
        return "improving"
    if delta < -3:
        return "declining"
    return "stable"


# ---------------------------------------------------------------------------
# Insights
# ---------------------------------------------------------------------------


def weekly_insight(current: PeriodSummary, previous: PeriodSummary | None = None) -> str:
    """Compose the weekly paragraph.

    Sentences, in order: score change (or the plain average when there is
    no previous week), best metric, weakest metric (omitted when nothing
    stands out), overall wellness direction.
    """
    avg = current.average_recovery_score
    sentences: list[str] = []

    if previous is not None:
        change = relative_change(previous.average_recovery_score, avg) * 100.0
        if change > WEEKLY_CHANGE_PCT:
            sentences.append(f"Your recovery score improved by {change:.1f}% this week.")
        elif change < -WEEKLY_CHANGE_PCT:
            sentences.append(f"Your recovery score decreased by {abs(change):.1f}% this week.")
        else:
            sentences.append("Your recovery score remained stable this week.")
    else:
        sentences.append(f"Your average recovery score this week is {avg:.1f}.")

    sentences.append(_best_metric_sentence(current))

    weakest = _weakest_metric_sentence(current)
    if weakest:
        sentences.append(weakest)

    sentences.append(f"Overall, your wellness is {_wellness_bucket(current, previous)}.")
    return " ".join(sentences)


def monthly_insight(month: PeriodSummary) -> str:
    """Compare the two halves of a month and name what drove the change."""
    midpoint = month.start_date + timedelta(days=MONTH_MIDPOINT_DAY)
    first = [s for s in month.snapshots if s.date < midpoint]
    second = [s for s in month.snapshots if s.date >= midpoint]

    if not first or not second:
        return INSUFFICIENT_MONTHLY_DATA

    first_score = mean_metric(first, Metric.RECOVERY)
    second_score = mean_metric(second, Metric.RECOVERY)
    change = relative_change(first_score, second_score) * 100.0

    sentences: list[str] = []
    if change > MONTHLY_CHANGE_PCT:
        sentences.append(f"Your recovery score improved by {change:.1f}% this month.")
    elif change < -MONTHLY_CHANGE_PCT:
        sentences.append(f"Your recovery score decreased by {abs(change):.1f}% this month.")
    else:
        sentences.append("Your recovery score remained consistent this month.")

    factors: list[str] = []
    if mean_metric(second, Metric.SLEEP) > mean_metric(first, Metric.SLEEP) + SLEEP_GAIN_HOURS:
        factors.append("consistent sleep patterns")
    if mean_metric(second, Metric.HRV) > mean_metric(first, Metric.HRV) + HRV_GAIN_MS:
        factors.append("increased HRV")
    if mean_metric(second, Metric.RESTING_HR) < mean_metric(first, Metric.RESTING_HR) - RHR_DROP_BPM:
        factors.append("lower resting heart rate")

    if factors:
        clause = " and ".join(factors)
        sentences.append(f"{clause[0].upper()}{clause[1:]} contributed to better overall recovery.")

    return " ".join(sentences)


def metric_insight(metric: Metric, current: float, previous: float) -> str:
    """One-line commentary on a single metric's latest value.

    Sleep is judged on its change from ``previous``; the other metrics on
    where ``current`` sits against fixed bands.
    """
    if metric is Metric.SLEEP:
        change = relative_change(previous, current) * 100.0
        if change > METRIC_CHANGE_PCT:
            return (
                f"Your sleep improved by {change:.1f}%. Continue maintaining your "
                "bedtime routine for optimal recovery."
            )
        if change < -METRIC_CHANGE_PCT:
            return (
                f"Your sleep decreased by {abs(change):.1f}%. "
                "Try going to bed 30 minutes earlier."
            )
        return "Your sleep duration is stable. Keep up your current routine."

    if metric is Metric.RESTING_HR:
        if 0 < current < 60:
            return (
                "Your RHR is trending lower, indicating improved cardiovascular "
                "fitness and recovery capacity."
            )
        if current > 70:
            return "Your RHR is elevated. Consider stress management techniques and adequate rest."
        return "Your resting heart rate is in a healthy range."

    if metric is Metric.HRV:
        if current >= 60:
            return (
                "Strong HRV score suggests your nervous system is well-balanced. "
                "Great time for training."
            )
        if current < 40:
            return "Lower HRV indicates stress or fatigue. Prioritize recovery and stress management."
        return "Your HRV is moderate. Balance training with adequate recovery."

    if metric is Metric.ACTIVITY:
        if 300 <= current <= 600:
            return "Your training load is balanced. This is an optimal activity level for recovery."
        if current < 300:
            return "Your activity is low. Consider adding light movement or a moderate workout."
        return "High activity load detected. Ensure you're getting adequate recovery."

    change = relative_change(previous, current) * 100.0
    if change > METRIC_CHANGE_PCT:
        return f"Your recovery score improved by {change:.1f}%."
    if change < -METRIC_CHANGE_PCT:
        return f"Your recovery score decreased by {abs(change):.1f}%."
    return "Your recovery score is stable."
