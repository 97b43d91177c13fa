"""Period resolution: quarter/year views to date ranges, months and weeks."""

from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum

from .dates import (
    check_quarter,
    days_between_inclusive,
    days_in_month,
    format_quarter,
    iso_week_number,
    monday_on_or_before,
    quarter_end,
    quarter_start,
    year_end,
    year_start,
)

MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


class ViewMode(str, Enum):
    QUARTER = "quarter"
    YEAR = "year"


@dataclass(frozen=True)
class QuarterView:
    year: int
    quarter: int

    def __post_init__(self) -> None:
        check_quarter(self.quarter)


@dataclass(frozen=True)
class YearView:
    year: int


View = QuarterView | YearView


def view_for(year: int, mode: ViewMode | str = ViewMode.QUARTER, quarter: int | None = None) -> View:
    """Build a view from the flat (year, mode, quarter) triple."""
    match ViewMode(mode):
        case ViewMode.QUARTER:
            if quarter is None:
                raise ValueError("quarter view needs a quarter")
            return QuarterView(year, quarter)
        case ViewMode.YEAR:
            return YearView(year)


@dataclass(frozen=True)
class Month:
    """A calendar month column of the timeline grid."""

    name: str
    first_day: date
    days: int


@dataclass(frozen=True)
class Week:
    """A Monday-based week; `days` counts only the days inside the period."""

    number: int
    start: date
    end: date
    days: int
    is_current: bool = False


@dataclass(frozen=True)
class Period:
    """The resolved viewing window."""

    year: int
    quarter: int | None
    mode: ViewMode
    start: date
    end: date
    months: tuple[Month, ...]
    weeks: tuple[Week, ...]

    @property
    def total_days(self) -> int:
        return days_between_inclusive(self.start, self.end)

    @property
    def label(self) -> str:
        if self.mode is ViewMode.QUARTER:
            return format_quarter(self.year, self.quarter)
        return str(self.year)

    @property
    def current_week(self) -> Week | None:
        return next((w for w in self.weeks if w.is_current), None)

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


def build_months(year: int, first_month: int, count: int, month_names=MONTH_NAMES) -> tuple[Month, ...]:
    return tuple(
        Month(
            name=month_names[month - 1],
            first_day=date(year, month, 1),
            days=days_in_month(year, month),
        )
        for month in range(first_month, first_month + count)
    )


def build_weeks(start: date, end: date, today: date | None = None) -> tuple[Week, ...]:
    """
    Weeks covering [start, end], starting from the Monday on/before start.

    Each week's day count is clipped to the period on both ends.
    """
    weeks = []
    week_start = monday_on_or_before(start)
    while week_start <= end:
        week_end = week_start + timedelta(days=6)
        clipped_start = max(week_start, start)
        clipped_end = min(week_end, end)
        weeks.append(
            Week(
                number=iso_week_number(week_start),
                start=week_start,
                end=week_end,
                days=days_between_inclusive(clipped_start, clipped_end),
                is_current=today is not None and week_start <= today <= week_end,
            )
        )
        week_start += timedelta(days=7)
    return tuple(weeks)


def resolve_period(view: View, today: date | None = None, month_names=MONTH_NAMES) -> Period:
    """
    Resolve a quarter or year view into its date range, months and weeks.

    Pure function - `today` only drives current-week highlighting.
    """
    match view:
        case QuarterView(year=year, quarter=quarter):
            start = quarter_start(year, quarter)
            end = quarter_end(year, quarter)
            months = build_months(year, start.month, 3, month_names)
            mode = ViewMode.QUARTER
        case YearView(year=year):
            quarter = None
            start = year_start(year)
            end = year_end(year)
            months = build_months(year, 1, 12, month_names)
            mode = ViewMode.YEAR
        case _:
            raise ValueError(f"unknown view: {view!r}")

    return Period(
        year=year,
        quarter=quarter,
        mode=mode,
        start=start,
        end=end,
        months=months,
        weeks=build_weeks(start, end, today),
    )
