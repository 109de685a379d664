"""Analytics engine turning daily health metrics into scores, summaries and advice.

Modules:
    score           -- Daily recovery score (0-100), status buckets, colours
    snapshot        -- DailySnapshot record and the Metric enum
    trends          -- Trend classification (5% threshold, polarity-aware)
    aggregate       -- Weekly / monthly / two-month period summaries
    recommendations -- Rule-table recommendation ranking
    insights        -- Weekly, monthly and per-metric insight text
    series          -- Chart series and date labels
"""

from zenscore.analytics.score import (
    compute_recovery_score,
    score_breakdown,
    recovery_status,
    recovery_color,
    activity_load,
    ScoreBreakdown,
    RecoveryStatus,
)
from zenscore.analytics.snapshot import DailySnapshot, Metric
from zenscore.analytics.trends import (
    classify_trend,
    relative_change,
    compare_summaries,
    split_trends,
    Trend,
    TrendBasis,
    MetricTrends,
)
from zenscore.analytics.aggregate import (
    aggregate,
    weekly_summary,
    monthly_summary,
    two_month_summary,
    previous_period_end,
    Period,
    PeriodSummary,
)
from zenscore.analytics.recommendations import (
    RecommendationEngine,
    Recommendation,
    Rule,
    DEFAULT_RULES,
)
from zenscore.analytics.insights import (
    weekly_insight,
    monthly_insight,
    metric_insight,
    normalized_metric_scores,
)
from zenscore.analytics.series import (
    recovery_series,
    metric_series,
    date_labels,
    LabelFormat,
)

__all__ = [
    # score
    "compute_recovery_score",
    "score_breakdown",
    "recovery_status",
    "recovery_color",
    "activity_load",
    "ScoreBreakdown",
    "RecoveryStatus",
    # snapshot
    "DailySnapshot",
    "Metric",
    # trends
    "classify_trend",
    "relative_change",
    "compare_summaries",
    "split_trends",
    "Trend",
    "TrendBasis",
    "MetricTrends",
    # aggregate
    "aggregate",
    "weekly_summary",
    "monthly_summary",
    "two_month_summary",
    "previous_period_end",
    "Period",
    "PeriodSummary",
    # recommendations
    "RecommendationEngine",
    "Recommendation",
    "Rule",
    "DEFAULT_RULES",
    # insights
    "weekly_insight",
    "monthly_insight",
    "metric_insight",
    "normalized_metric_scores",
    # series
    "recovery_series",
    "metric_series",
    "date_labels",
    "LabelFormat",
]
