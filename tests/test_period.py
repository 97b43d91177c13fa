"""Tests for period resolution."""

from datetime import date

import pytest

from quarterly.core.period import (
    QuarterView,
    ViewMode,
    YearView,
    resolve_period,
    view_for,
)


class TestQuarterPeriod:
    def test_q1_leap_year(self):
        period = resolve_period(QuarterView(2024, 1))
        assert period.start == date(2024, 1, 1)
        assert period.end == date(2024, 3, 31)
        assert period.mode is ViewMode.QUARTER
        assert period.quarter == 1
        assert [m.name for m in period.months] == ["Jan", "Feb", "Mar"]
        assert [m.days for m in period.months] == [31, 29, 31]
        assert period.total_days == 91

    def test_q1_common_year(self):
        period = resolve_period(QuarterView(2023, 1))
        assert [m.days for m in period.months] == [31, 28, 31]
        assert period.total_days == 90

    def test_q4_months(self):
        period = resolve_period(QuarterView(2023, 4))
        assert [m.first_day for m in period.months] == [
            date(2023, 10, 1),
            date(2023, 11, 1),
            date(2023, 12, 1),
        ]
        assert period.end == date(2023, 12, 31)

    def test_label(self):
        assert resolve_period(QuarterView(2024, 2)).label == "Q2 2024"

    def test_invalid_quarter(self):
        with pytest.raises(ValueError):
            QuarterView(2024, 5)

    def test_contains(self):
        period = resolve_period(QuarterView(2024, 2))
        assert period.contains(date(2024, 4, 1))
        assert period.contains(date(2024, 6, 30))
        assert not period.contains(date(2024, 7, 1))


class TestYearPeriod:
    def test_full_year(self):
        period = resolve_period(YearView(2024))
        assert period.start == date(2024, 1, 1)
        assert period.end == date(2024, 12, 31)
        assert period.quarter is None
        assert period.mode is ViewMode.YEAR
        assert len(period.months) == 12
        assert period.total_days == 366
        assert period.label == "2024"

    def test_custom_month_names(self):
        names = ("Jan", "Feb", "Mar", "Apr", "Mai", "Jun", "Jul", "Aug", "Sep", "Okt", "Nov", "Dets")
        period = resolve_period(YearView(2024), month_names=names)
        assert period.months[4].name == "Mai"
        assert period.months[11].name == "Dets"


class TestWeeks:
    def test_aligned_quarter(self):
        period = resolve_period(QuarterView(2024, 1))
        assert period.weeks[0].start == date(2024, 1, 1)
        assert period.weeks[0].number == 1
        assert len(period.weeks) == 13
        assert all(w.days == 7 for w in period.weeks)

    def test_clipped_at_both_ends(self):
        period = resolve_period(QuarterView(2023, 1))
        first, last = period.weeks[0], period.weeks[-1]
        assert first.start == date(2022, 12, 26)
        assert first.number == 52
        assert first.days == 1
        assert last.start == date(2023, 3, 27)
        assert last.days == 5

    def test_week_starting_mid_quarter_start(self):
        period = resolve_period(QuarterView(2024, 4))
        assert period.weeks[0].start == date(2024, 9, 30)
        assert period.weeks[0].days == 6

    @pytest.mark.parametrize("view", [QuarterView(2023, 1), QuarterView(2024, 3), YearView(2023), YearView(2024)])
    def test_week_days_cover_period(self, view):
        period = resolve_period(view)
        assert sum(w.days for w in period.weeks) == period.total_days
        assert all(1 <= w.days <= 7 for w in period.weeks)
        assert all(w.start.weekday() == 0 for w in period.weeks)

    def test_current_week(self):
        period = resolve_period(QuarterView(2024, 1), today=date(2024, 2, 14))
        current = [w for w in period.weeks if w.is_current]
        assert len(current) == 1
        assert period.current_week.start == date(2024, 2, 12)

    def test_no_current_week_outside_period(self):
        period = resolve_period(QuarterView(2024, 1), today=date(2024, 8, 1))
        assert period.current_week is None


class TestViewFor:
    def test_quarter(self):
        assert view_for(2024, "quarter", 2) == QuarterView(2024, 2)

    def test_year(self):
        assert view_for(2024, ViewMode.YEAR) == YearView(2024)

    def test_quarter_required(self):
        with pytest.raises(ValueError):
            view_for(2024, ViewMode.QUARTER)


def test_resolve_is_idempotent():
    today = date(2024, 2, 14)
    assert resolve_period(QuarterView(2024, 1), today) == resolve_period(QuarterView(2024, 1), today)
