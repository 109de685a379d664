"""CLI for the zenscore recovery analytics engine."""

import json
import logging

import click

from zenscore.errors import ZenScoreError


PERIOD_CHOICES = {
    "week": 7,
    "month": 30,
    "two-months": 60,
}


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.group()
def main() -> None:
    """zenscore: daily recovery scoring, trends and recommendations."""


@main.command()
@click.option("--sleep", "sleep_hours", default=0.0, help="Sleep duration in hours.")
@click.option("--resting-hr", default=0.0, help="Resting heart rate in bpm (0 = no reading).")
@click.option("--hrv", default=0.0, help="HRV (SDNN) in ms (0 = no reading).")
@click.option("--activity", default=0.0, help="Activity load.")
def score(sleep_hours: float, resting_hr: float, hrv: float, activity: float) -> None:
    """Score a single day's metrics."""
    from datetime import date

    from zenscore.analytics.snapshot import DailySnapshot
    from zenscore.analytics.score import score_breakdown

    try:
        snap = DailySnapshot(
            date=date.today(),
            sleep_hours=sleep_hours,
            resting_hr=resting_hr,
            hrv_ms=hrv,
            activity_load=activity,
        )
    except ZenScoreError as e:
        raise click.ClickException(str(e))

    b = score_breakdown(snap.sleep_hours, snap.resting_hr, snap.hrv_ms, snap.activity_load)
    click.echo(f"Recovery:   {b.total:.1f}/100 ({b.status.label})")
    click.echo(f"  Sleep:    {b.sleep:.1f}/25")
    click.echo(f"  RHR:      {b.resting_hr:.1f}/25")
    click.echo(f"  HRV:      {b.hrv:.1f}/30")
    click.echo(f"  Activity: {b.activity:.1f}/20")


@main.command()
@click.argument("file", type=click.Path(exists=True))
@click.option("--period", "-p", type=click.Choice(list(PERIOD_CHOICES)), default="week",
              help="Summary window.")
@click.option("--now", type=click.DateTime(formats=["%Y-%m-%d"]), default=None,
              help="Last day of the window (default: today).")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON.")
@click.option("--output", "-o", default=None, help="Write the JSON report to a file.")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def report(
    file: str,
    period: str,
    now,
    as_json: bool,
    output: str | None,
    verbose: bool,
) -> None:
    """Summarise a file of daily records (JSON or JSONL)."""
    from zenscore.loader import load_snapshots
    from zenscore.analytics.aggregate import aggregate, previous_period_end
    from zenscore.analytics.recommendations import RecommendationEngine
    from zenscore.analytics.insights import weekly_insight, monthly_insight
    from zenscore.analytics.snapshot import Metric

    _configure_logging(verbose)
    window = PERIOD_CHOICES[period]

    try:
        snapshots = load_snapshots(file)
        current = aggregate(snapshots, window, now=now)
        previous = None
        if snapshots and snapshots[0].date < current.start_date:
            previous = aggregate(snapshots, window, now=previous_period_end(current))
            if previous.is_empty:
                previous = None
            else:
                current = aggregate(snapshots, window, now=now, previous=previous)
    except ZenScoreError as e:
        raise click.ClickException(str(e))

    recommendations = RecommendationEngine().generate(current)

    if period == "week":
        insights = [weekly_insight(current, previous)]
    elif period == "month":
        insights = [monthly_insight(current)]
    else:
        insights = [monthly_insight(month) for month in current.sub_periods]

    if as_json or output:
        payload = {
            "period": period,
            "summary": current.to_dict(),
            "recommendations": [r.to_dict() for r in recommendations],
            "insights": insights,
        }
        text = json.dumps(payload, indent=2)
        if output:
            with open(output, "w") as f:
                f.write(text)
            click.echo(f"Report written to {output}")
        else:
            click.echo(text)
        return

    click.echo(f"\n{'=' * 60}")
    click.echo(f"  {period.title()} report: {current.start_date} .. {current.end_date}")
    click.echo(f"  Days with data: {current.day_count}")
    click.echo(f"{'=' * 60}")
    rows = [
        ("Recovery", Metric.RECOVERY, "/100"),
        ("Sleep", Metric.SLEEP, " h"),
        ("Resting HR", Metric.RESTING_HR, " bpm"),
        ("HRV", Metric.HRV, " ms"),
        ("Activity", Metric.ACTIVITY, ""),
    ]
    for label, metric, unit in rows:
        trend = current.trends.get(metric)
        click.echo(f"  {label + ':':<12}{current.average(metric):6.1f}{unit:<5} {trend.symbol}")
    click.echo(f"  (trends vs {current.trend_basis.value})")
    if current.best_recovery_day is not None:
        click.echo(f"  Best day:   {current.best_recovery_day.date} "
                   f"({current.best_recovery_day.recovery_score:.0f})")
        click.echo(f"  Worst day:  {current.worst_recovery_day.date} "
                   f"({current.worst_recovery_day.recovery_score:.0f})")

    click.echo(f"\n--- Recommendations ---")
    for r in recommendations:
        click.echo(f"  [{r.priority:>2}] {r.title}: {r.description}")

    click.echo(f"\n--- Insights ---")
    for text in insights:
        click.echo(f"  {text}")
    click.echo(f"{'=' * 60}")


if __name__ == "__main__":
    main()
