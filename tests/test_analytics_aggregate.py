"""Tests for zenscore.analytics.aggregate -- period summaries."""

import logging
from datetime import date, datetime, timedelta

import pytest

from zenscore.analytics.aggregate import (
    aggregate,
    weekly_summary,
    monthly_summary,
    two_month_summary,
    previous_period_end,
    Period,
    PeriodSummary,
)
from zenscore.analytics.snapshot import Metric
from zenscore.analytics.trends import Trend, TrendBasis
from zenscore.errors import SnapshotOrderError

from tests.conftest import make_days, make_snapshot, BASE_DAY


class TestEmpty:
    def test_zero_averages(self):
        s = aggregate([], 7, now=BASE_DAY)
        for m in Metric:
            assert s.average(m) == 0.0

    def test_no_extrema(self):
        s = aggregate([], 30, now=BASE_DAY)
        assert s.best_recovery_day is None
        assert s.worst_recovery_day is None
        assert s.longest_sleep is None
        assert s.shortest_sleep is None

    def test_no_trend_basis(self):
        s = aggregate([], 7, now=BASE_DAY)
        assert s.trend_basis is TrendBasis.NONE
        assert s.trends.recovery is Trend.STABLE

    def test_empty_month_still_has_weeks(self):
        s = monthly_summary([], now=BASE_DAY)
        assert len(s.sub_periods) == 5
        assert all(w.is_empty for w in s.sub_periods)


class TestWindow:
    def test_bounds(self):
        s = weekly_summary([], now=BASE_DAY)
        assert s.end_date == BASE_DAY
        assert s.start_date == BASE_DAY - timedelta(days=7)
        assert s.window_days == 7
        assert s.period is Period.WEEK

    def test_datetime_now(self):
        s = aggregate([], 7, now=datetime(2026, 10, 17, 8, 30))
        assert s.end_date == BASE_DAY

    def test_ad_hoc_window_has_no_period(self):
        assert aggregate([], 10, now=BASE_DAY).period is None

    def test_out_of_window_dropped(self, caplog):
        old = make_snapshot(day=BASE_DAY - timedelta(days=20), sleep=2.0)
        days = [old] + make_days(7, sleep=8.0)
        with caplog.at_level(logging.DEBUG, logger="zenscore.analytics.aggregate"):
            s = weekly_summary(days, now=BASE_DAY)
        assert s.day_count == 7
        assert s.average_sleep == 8.0
        assert "Dropped 1 snapshot(s)" in caplog.text
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_history_outside_window_warns(self, caplog):
        days = make_days(7, end=date(2025, 1, 7))
        with caplog.at_level(logging.WARNING, logger="zenscore.analytics.aggregate"):
            s = weekly_summary(days, now=BASE_DAY)
        assert s.is_empty
        assert s.trend_basis is TrendBasis.NONE
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "None of 7 snapshot(s)" in warnings[0].getMessage()

    def test_empty_input_does_not_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="zenscore.analytics.aggregate"):
            monthly_summary([], now=BASE_DAY)
        assert caplog.records == []

    def test_invalid_window(self):
        with pytest.raises(ValueError):
            aggregate([], 0, now=BASE_DAY)

    def test_period_days(self):
        assert Period.DAY.days == 1
        assert Period.TWO_MONTHS.days == 60


class TestOrdering:
    def test_unsorted_rejected(self):
        days = make_days(3)
        with pytest.raises(SnapshotOrderError):
            aggregate(list(reversed(days)), 7, now=BASE_DAY)

    def test_duplicate_day_rejected(self):
        days = make_days(2)
        with pytest.raises(SnapshotOrderError):
            aggregate([days[0], days[0], days[1]], 7, now=BASE_DAY)

    def test_order_error_is_value_error(self):
        days = make_days(2)
        with pytest.raises(ValueError):
            aggregate([days[1], days[0]], 7, now=BASE_DAY)


class TestAverages:
    def test_strained_week(self, strained_week):
        s = weekly_summary(strained_week, now=BASE_DAY)
        assert s.average_sleep == 6.0
        assert s.average_resting_hr == 70.0
        assert s.average_hrv == 35.0
        assert s.average_activity_load == 200.0
        assert s.average_recovery_score == pytest.approx(62.5833, abs=1e-3)

    def test_mixed_values(self):
        days = make_days(4, sleep=[6.0, 7.0, 8.0, 9.0], rhr=[50, 60, 70, 80])
        s = weekly_summary(days, now=BASE_DAY)
        assert s.average_sleep == pytest.approx(7.5)
        assert s.average_resting_hr == pytest.approx(65.0)

    def test_snapshots_kept_in_order(self):
        days = make_days(5)
        s = weekly_summary(days, now=BASE_DAY)
        assert list(s.snapshots) == days


class TestExtrema:
    def test_best_and_worst(self):
        days = make_days(5, sleep=[7.0, 4.0, 8.0, 6.0, 9.5])
        s = weekly_summary(days, now=BASE_DAY)
        assert s.best_recovery_day == days[2]  # 8h is the first to max sleep points
        assert s.worst_recovery_day == days[1]
        assert s.longest_sleep == 9.5
        assert s.shortest_sleep == 4.0


class TestDeterminism:
    def test_same_input_same_summary(self):
        days = make_days(30, sleep=[6 + (i % 4) * 0.5 for i in range(30)])
        a = monthly_summary(days, now=BASE_DAY)
        b = monthly_summary(days, now=BASE_DAY)
        assert a == b


class TestTrends:
    def test_split_when_no_previous(self):
        sleep = [6.0] * 3 + [8.0] * 4
        s = weekly_summary(make_days(7, sleep=sleep), now=BASE_DAY)
        assert s.trend_basis is TrendBasis.SPLIT
        assert s.trends.sleep is Trend.INCREASING

    def test_one_half_empty(self):
        s = weekly_summary(make_days(2), now=BASE_DAY)
        assert s.trend_basis is TrendBasis.NONE

    def test_previous_period(self):
        prev_end = BASE_DAY - timedelta(days=8)
        prev = weekly_summary(make_days(7, end=prev_end, rhr=70.0, sleep=6.0), now=prev_end)
        cur = weekly_summary(make_days(7, rhr=60.0, sleep=7.0), now=BASE_DAY, previous=prev)
        assert cur.trend_basis is TrendBasis.PREVIOUS
        assert cur.trends.sleep is Trend.INCREASING
        assert cur.trends.resting_hr is Trend.INCREASING  # dropped RHR = improving
        assert cur.trends.hrv is Trend.STABLE

    def test_previous_period_end(self):
        cur = weekly_summary([], now=BASE_DAY)
        assert previous_period_end(cur) == BASE_DAY - timedelta(days=8)
        prev = weekly_summary([], now=previous_period_end(cur))
        assert prev.end_date < cur.start_date


class TestMonthlyDecomposition:
    def test_week_count(self):
        s = monthly_summary(make_days(31), now=BASE_DAY)
        assert s.period is Period.MONTH
        assert len(s.sub_periods) == 5
        assert [w.day_count for w in s.sub_periods] == [7, 7, 7, 7, 3]

    def test_weeks_partition_month(self):
        days = make_days(31)
        s = monthly_summary(days, now=BASE_DAY)
        union = [snap for week in s.sub_periods for snap in week.snapshots]
        assert sorted(union, key=lambda x: x.date) == list(s.snapshots)
        assert len(union) == len(set(union)) == s.day_count

    def test_partition_with_gaps(self):
        days = [d for i, d in enumerate(make_days(31)) if i % 3]
        s = monthly_summary(days, now=BASE_DAY)
        union = {snap.date for week in s.sub_periods for snap in week.snapshots}
        assert union == {snap.date for snap in s.snapshots}
        assert sum(w.day_count for w in s.sub_periods) == s.day_count

    def test_week_windows(self):
        s = monthly_summary([], now=BASE_DAY)
        start = BASE_DAY - timedelta(days=30)
        for i, week in enumerate(s.sub_periods):
            assert week.end_date == start + timedelta(days=7 * (i + 1))
            assert week.window_days == 7

    def test_multiple_of_seven_window(self):
        # Last day (offset 28) goes into the final week, not a sixth bucket
        s = aggregate(make_days(29), 28, now=BASE_DAY)
        assert len(s.sub_periods) == 4
        assert s.sub_periods[-1].day_count == 8

    def test_weeks_chained(self):
        s = monthly_summary(make_days(31), now=BASE_DAY)
        assert s.sub_periods[0].trend_basis is TrendBasis.SPLIT
        assert all(w.trend_basis is TrendBasis.PREVIOUS for w in s.sub_periods[1:])

    def test_week_has_no_sub_periods(self):
        assert weekly_summary(make_days(7), now=BASE_DAY).sub_periods == ()


class TestTwoMonthDecomposition:
    def test_split_at_day_30(self):
        s = two_month_summary(make_days(61), now=BASE_DAY)
        first, second = s.sub_periods
        assert first.day_count == 30
        assert second.day_count == 31
        start = BASE_DAY - timedelta(days=60)
        assert all((d.date - start).days < 30 for d in first.snapshots)
        assert all((d.date - start).days >= 30 for d in second.snapshots)

    def test_months_hold_weeks(self):
        s = two_month_summary(make_days(61), now=BASE_DAY)
        first, second = s.sub_periods
        assert [w.day_count for w in first.sub_periods] == [7, 7, 7, 7, 2]
        assert [w.day_count for w in second.sub_periods] == [7, 7, 7, 7, 3]

    def test_second_month_compared_to_first(self):
        sleep = [6.0] * 30 + [8.0] * 31
        s = two_month_summary(make_days(61, sleep=sleep), now=BASE_DAY)
        second = s.sub_periods[1]
        assert second.trend_basis is TrendBasis.PREVIOUS
        assert second.trends.sleep is Trend.INCREASING
        # Whole window: first half (offsets < 30) vs second half
        assert s.trend_basis is TrendBasis.SPLIT
        assert s.trends.sleep is Trend.INCREASING


class TestSerialization:
    def test_to_dict(self):
        s = monthly_summary(make_days(10), now=BASE_DAY)
        d = s.to_dict()
        assert d["start_date"] == (BASE_DAY - timedelta(days=30)).isoformat()
        assert len(d["days"]) == 10
        assert len(d["sub_periods"]) == 5
        assert d["trend_basis"] in {"previous", "split", "none"}
        assert set(d["averages"]) == {m.value for m in Metric}

    def test_repr(self):
        s = weekly_summary(make_days(3), now=BASE_DAY)
        assert "days=3" in repr(s)
        assert isinstance(s, PeriodSummary)
