"""Timeline layout engine - pure geometry for task bars, no I/O."""

from collections.abc import Hashable
from dataclasses import dataclass
from datetime import date

from .dates import days_between_inclusive
from .period import Period
from .tasks import Task


@dataclass(frozen=True)
class LayoutConfig:
    """Rendering constants for the chart. Pixel values are defaults only."""

    min_width_percent: float = 1.0
    task_height: int = 38
    task_gap: int = 4
    header_height: int = 60
    min_chart_height: int = 200
    bottom_padding: int = 40

    @property
    def row_height(self) -> int:
        return self.task_height + self.task_gap


DEFAULT_LAYOUT = LayoutConfig()


@dataclass(frozen=True)
class TaskBar:
    """A task plus its geometry in the current period."""

    task: Task
    left: float
    width: float
    row: int
    continues_left: bool
    continues_right: bool
    display_start: date
    display_end: date

    @property
    def is_partial(self) -> bool:
        return self.continues_left or self.continues_right

    @property
    def id(self) -> str:
        return self.task.id

    @property
    def name(self) -> str:
        return self.task.name

    @property
    def color(self) -> str | None:
        return self.task.color


@dataclass(frozen=True)
class Layout:
    """Bars for a period plus the aggregate chart metrics."""

    bars: tuple[TaskBar, ...]
    max_row: int
    chart_height: int
    row_height: int
    task_height: int

    @property
    def row_count(self) -> int:
        return self.max_row + 1

    def rows(self) -> list[list[TaskBar]]:
        """Bars grouped by row, each row ordered by start date."""
        grouped: list[list[TaskBar]] = [[] for _ in range(self.row_count)]
        for bar in self.bars:
            grouped[bar.row].append(bar)
        for row in grouped:
            row.sort(key=lambda b: b.display_start)
        return grouped


def filter_visible(tasks: list[Task], period: Period) -> list[Task]:
    """
    Tasks whose date range overlaps the period, in input order.

    Overlap is inclusive: a task ending on the period's first day is visible.
    """
    return [t for t in tasks if t.overlaps(period.start, period.end)]


def assign_rows(tasks: list[Task]) -> list[int]:
    """
    First-fit row packing.

    Tasks are visited by start date (stable) and put in the first row
    holding nothing that overlaps them; a new row opens when none fits.
    Returns the row index of each task, aligned with the input list.
    """
    rows: list[list[Task]] = []
    assignment = [0] * len(tasks)
    order = sorted(range(len(tasks)), key=lambda i: tasks[i].start_date)
    for i in order:
        task = tasks[i]
        for index, row in enumerate(rows):
            if not any(task.overlaps_task(other) for other in row):
                row.append(task)
                assignment[i] = index
                break
        else:
            rows.append([task])
            assignment[i] = len(rows) - 1
    return assignment


def chart_height(max_row: int, config: LayoutConfig = DEFAULT_LAYOUT) -> int:
    return max(
        config.min_chart_height,
        (max_row + 1) * config.row_height + config.header_height + config.bottom_padding,
    )


def position_bar(task: Task, period: Period, row: int, config: LayoutConfig = DEFAULT_LAYOUT) -> TaskBar:
    """Clamp a task to the period and express it as percentages."""
    if task.end_date < task.start_date:
        raise ValueError(f"task {task.id!r} ends before it starts")
    if not task.overlaps(period.start, period.end):
        raise ValueError(f"task {task.id!r} is outside {period.label}")

    display_start = max(task.start_date, period.start)
    display_end = min(task.end_date, period.end)

    total_days = period.total_days
    start_offset = days_between_inclusive(period.start, display_start) - 1
    duration = days_between_inclusive(display_start, display_end)

    return TaskBar(
        task=task,
        left=start_offset / total_days * 100,
        width=max(duration / total_days * 100, config.min_width_percent),
        row=row,
        continues_left=task.start_date < period.start,
        continues_right=task.end_date > period.end,
        display_start=display_start,
        display_end=display_end,
    )


def layout_tasks(tasks: list[Task], period: Period, config: LayoutConfig | None = None) -> Layout:
    """
    Lay out visible tasks on the period's timeline.

    `tasks` must already be filtered to the period (see filter_visible).
    Bars come back in input order; rows come from first-fit packing.
    """
    config = config or DEFAULT_LAYOUT
    rows = assign_rows(tasks)
    bars = tuple(position_bar(t, period, row, config) for t, row in zip(tasks, rows))
    max_row = max((b.row for b in bars), default=-1)
    return Layout(
        bars=bars,
        max_row=max_row,
        chart_height=chart_height(max_row, config),
        row_height=config.row_height,
        task_height=config.task_height,
    )


class LayoutCache:
    """
    Memoizes layouts by (task list version, view).

    Layout is pure, so a cache miss only costs a recompute.
    """

    def __init__(self, max_entries: int = 32):
        self.max_entries = max_entries
        self._entries: dict[tuple[int, Hashable], Layout] = {}

    def get_or_compute(self, version: int, view: Hashable, compute) -> Layout:
        key = (version, view)
        if key not in self._entries:
            if len(self._entries) >= self.max_entries:
                self._entries.pop(next(iter(self._entries)))
            self._entries[key] = compute()
        return self._entries[key]

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
