"""Rule-based recommendations from a period summary.

Every rule in the table is checked against the summary's averages (no
short-circuit). Matches are ranked by priority, highest first; ties keep
table order. The list is capped at six entries.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from zenscore.analytics.aggregate import PeriodSummary
from zenscore.analytics.snapshot import Metric


MAX_RECOMMENDATIONS = 6


@dataclass(frozen=True)
class Recommendation:
    """A single actionable suggestion."""

    icon: str
    title: str
    description: str
    priority: int  # higher = more important

    def to_dict(self) -> dict[str, object]:
        return {
            "icon": self.icon,
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class Rule:
    """Emit ``recommendation`` when ``condition`` holds for the metric's average.

    Rules with ``metric=None`` are general advice; their condition is
    given the period's average recovery score.
    """

    metric: Metric | None
    condition: Callable[[float], bool]
    recommendation: Recommendation

    def matches(self, summary: PeriodSummary) -> bool:
        return self.condition(summary.average(self.metric or Metric.RECOVERY))


def _always(_value: float) -> bool:
    return True


DEFAULT_RULES: tuple[Rule, ...] = (
    # Sleep
    Rule(Metric.SLEEP, lambda v: v < 7.0, Recommendation(
        icon="recommendations_activity_load",
        title="Improve Sleep Duration",
        description="Go to bed 30 minutes earlier to boost recovery. Aim for 7-9 hours per night.",
        priority=10,
    )),
    Rule(Metric.SLEEP, lambda v: v >= 8.0, Recommendation(
        icon="recommendations_activity_load",
        title="Excellent Sleep",
        description="Your sleep duration is optimal. Maintain your current bedtime routine.",
        priority=5,
    )),
    # HRV
    Rule(Metric.HRV, lambda v: v >= 60.0, Recommendation(
        icon="recommendations_light_strength_training",
        title="High Intensity Training",
        description=(
            "This is a great day for moderate to high-intensity training. "
            "Your HRV indicates good recovery."
        ),
        priority=8,
    )),
    Rule(Metric.HRV, lambda v: v < 40.0, Recommendation(
        icon="recommendations_breath_work_session",
        title="Stress Management",
        description="Consider stress-management or breath-work. Your HRV suggests elevated stress levels.",
        priority=9,
    )),
    # Resting HR
    Rule(Metric.RESTING_HR, lambda v: v > 65.0, Recommendation(
        icon="recommendations_breath_work_session",
        title="Lower Resting Heart Rate",
        description="Your RHR is elevated. Try 10 minutes of meditation or deep breathing daily.",
        priority=8,
    )),
    Rule(Metric.RESTING_HR, lambda v: v < 60.0, Recommendation(
        icon="recommendations_activity_load",
        title="Strong Cardiovascular Health",
        description="Your RHR is trending lower, indicating improved recovery and fitness.",
        priority=6,
    )),
    # Activity
    Rule(Metric.ACTIVITY, lambda v: v < 300.0, Recommendation(
        icon="recommendations_activity_load",
        title="Increase Activity",
        description="Aim for at least 5,000 more steps today. Light movement aids recovery.",
        priority=7,
    )),
    Rule(Metric.ACTIVITY, lambda v: v > 700.0, Recommendation(
        icon="recommendations_activity_load",
        title="Recovery Day Needed",
        description="Your activity load is high. Consider a rest day or active recovery session.",
        priority=9,
    )),
    Rule(Metric.ACTIVITY, lambda v: 300.0 <= v <= 700.0, Recommendation(
        icon="recommendations_light_strength_training",
        title="Balanced Training Load",
        description=(
            "Try a 30-minute resistance workout. "
            "Your recovery score indicates you're ready for moderate intensity."
        ),
        priority=6,
    )),
    # General wellness
    Rule(None, _always, Recommendation(
        icon="recommendations_stay_hydrated",
        title="Stay Hydrated",
        description=(
            "Drink at least 2.5L of water today to support cellular recovery "
            "and metabolic function."
        ),
        priority=5,
    )),
    Rule(None, _always, Recommendation(
        icon="recommendations_morning_sunlight",
        title="Morning Sunlight",
        description=(
            "Get 10-15 minutes of natural light exposure to regulate your "
            "circadian rhythm and boost energy."
        ),
        priority=4,
    )),
)


class RecommendationEngine:
    """Evaluates a rule table against period summaries.

    Construct one and pass it to whoever needs recommendations; the
    engine holds no per-request state.
    """

    def __init__(
        self,
        rules: Sequence[Rule] = DEFAULT_RULES,
        limit: int = MAX_RECOMMENDATIONS,
    ) -> None:
        self.rules = tuple(rules)
        self.limit = limit

    def candidates(self, summary: PeriodSummary) -> list[Recommendation]:
        """Every matching rule's recommendation, in table order."""
        return [rule.recommendation for rule in self.rules if rule.matches(summary)]

    def generate(self, summary: PeriodSummary) -> list[Recommendation]:
        """Ranked recommendations for ``summary``, at most ``limit`` of them."""
        ranked = sorted(self.candidates(summary), key=lambda r: r.priority, reverse=True)
        return ranked[: self.limit]
