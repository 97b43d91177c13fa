"""Pure date and period arithmetic - no I/O dependencies."""

import calendar
import math
from datetime import date, datetime, timedelta

DATE_FORMAT_HINT = "DD.MM.YYYY"


def normalize(value: date | datetime) -> date:
    """Drop any time-of-day component."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between_inclusive(start: date, end: date) -> int:
    """Number of calendar days from start to end, counting both ends."""
    return (end - start).days + 1


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def check_quarter(quarter: int) -> None:
    """Raise ValueError for a quarter outside 1-4."""
    if quarter not in (1, 2, 3, 4):
        raise ValueError(f"quarter must be 1-4, got {quarter!r}")


def quarter_of(d: date) -> int:
    return (d.month - 1) // 3 + 1


def quarter_info(d: date) -> tuple[int, int]:
    """(year, quarter) of a date."""
    return d.year, quarter_of(d)


def quarter_start(year: int, quarter: int) -> date:
    """First day of the quarter (Q1=Jan, Q2=Apr, Q3=Jul, Q4=Oct)."""
    check_quarter(quarter)
    return date(year, (quarter - 1) * 3 + 1, 1)


def quarter_end(year: int, quarter: int) -> date:
    """Last calendar day of the quarter's third month."""
    check_quarter(quarter)
    month = (quarter - 1) * 3 + 3
    return date(year, month, days_in_month(year, month))


def year_start(year: int) -> date:
    return date(year, 1, 1)


def year_end(year: int) -> date:
    return date(year, 12, 31)


def monday_on_or_before(d: date) -> date:
    return d - timedelta(days=d.weekday())


def iso_week_number(d: date) -> int:
    """ISO-8601 week number (week 1 holds the year's first Thursday)."""
    return d.isocalendar()[1]


def parse_date(text: str | None) -> date | None:
    """
    Parse a DD.MM.YYYY string.

    Single-digit day and month are accepted. Returns None for anything that
    is not a real calendar date.
    """
    if not text or not isinstance(text, str):
        return None

    parts = text.strip().split(".")
    if len(parts) != 3:
        return None

    try:
        day, month, year = (int(p) for p in parts)
    except ValueError:
        return None

    try:
        return date(year, month, day)
    except ValueError:
        return None


def format_date(d: date) -> str:
    return d.strftime("%d.%m.%Y")


def format_quarter(year: int, quarter: int) -> str:
    return f"Q{quarter} {year}"


def calculate_duration(start: date, end: date) -> int:
    """Whole days from start to end."""
    return (end - start).days


def format_duration(days: int) -> str:
    """
    Human-readable duration.

    Under a week counts days, under a month counts weeks, under a year
    counts 30-day months, and everything else counts years. Partial units
    round up.
    """

    def _unit(count: int, singular: str) -> str:
        return f"1 {singular}" if count == 1 else f"{count} {singular}s"

    if days < 7:
        return _unit(days, "day")
    if days < 30:
        return _unit(math.ceil(days / 7), "week")
    if days < 365:
        return _unit(math.ceil(days / 30), "month")
    return _unit(math.ceil(days / 365), "year")
