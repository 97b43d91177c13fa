"""Plain-text rendering of a timeline for the terminal."""

from datetime import date

from .core.dates import format_date, format_duration
from .core.layout import TaskBar
from .core.period import Period
from .core.tasks import sort_by_start
from .workflows import Timeline

BAR_CHAR = "█"
CONTINUES_LEFT = "◄"
CONTINUES_RIGHT = "►"
PARTIAL_MARKER = "*"
CURRENT_WEEK_MARKER = "^"


def _columns(percent: float, width: int) -> int:
    return round(percent / 100 * width)


def bar_span(bar: TaskBar, width: int) -> tuple[int, int]:
    """(first column, column count) of a bar in a chart `width` wide."""
    start = min(_columns(bar.left, width), width - 1)
    length = max(1, _columns(bar.width, width))
    return start, min(length, width - start)


def render_month_header(period: Period, width: int) -> str:
    """Month names placed at the column where each month begins."""
    line = [" "] * width
    offset = 0
    for month in period.months:
        col = min(round(offset / period.total_days * width), width - 1)
        for i, ch in enumerate(month.name):
            if col + i < width:
                line[col + i] = ch
        offset += month.days
    return "".join(line).rstrip()


def render_week_ruler(period: Period, width: int) -> str:
    """Week boundaries as '|' ticks, with the current week marked."""
    line = [" "] * width
    offset = 0
    for week in period.weeks:
        col = min(round(offset / period.total_days * width), width - 1)
        line[col] = "|"
        if week.is_current:
            end_col = min(round((offset + week.days) / period.total_days * width), width)
            for c in range(col + 1, end_col):
                line[c] = CURRENT_WEEK_MARKER
        offset += week.days
    return "".join(line).rstrip()


def render_row(bars: list[TaskBar], width: int) -> str:
    line = [" "] * width
    for bar in bars:
        start, length = bar_span(bar, width)
        for c in range(start, start + length):
            line[c] = BAR_CHAR
        if bar.continues_left:
            line[start] = CONTINUES_LEFT
        if bar.continues_right:
            line[start + length - 1] = CONTINUES_RIGHT
    return "".join(line).rstrip()


def describe_bar(bar: TaskBar, today: date | None = None) -> str:
    task = bar.task
    partial = f" {PARTIAL_MARKER}" if bar.is_partial else ""
    status = f", {task.status(today).value}" if today else ""
    return (
        f"  [{bar.row}] {task.name}{partial}  "
        f"{format_date(task.start_date)} - {format_date(task.end_date)} "
        f"({format_duration(task.duration_days())}{status})"
    )


def render_timeline(timeline: Timeline, width: int = 72, today: date | None = None) -> str:
    """Render the chart: title, month header, week ruler, one line per row, legend."""
    period = timeline.period
    layout = timeline.layout

    lines = [f"## {period.label}  ({format_date(period.start)} - {format_date(period.end)})", ""]
    if timeline.is_empty:
        lines.append(f"No tasks in {period.label}.")
        return "\n".join(lines)

    lines.append(render_month_header(period, width))
    lines.append(render_week_ruler(period, width))
    for row in layout.rows():
        lines.append(render_row(row, width))

    lines.append("")
    bars_by_task = {id(bar.task): bar for bar in layout.bars}
    for task in sort_by_start(timeline.tasks):
        lines.append(describe_bar(bars_by_task[id(task)], today))

    return "\n".join(lines)


def render_weeks(period: Period) -> str:
    lines = []
    for week in period.weeks:
        marker = "  <- current" if week.is_current else ""
        lines.append(
            f"W{week.number:02d}  {format_date(week.start)} - {format_date(week.end)}  "
            f"{week.days} day{'s' if week.days != 1 else ''}{marker}"
        )
    return "\n".join(lines)
