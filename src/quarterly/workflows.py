"""Shared workflow layer between the CLI and the core.

Wires a task store, configuration and the pure core together into a
Timeline for one view.
"""

import logging
from dataclasses import dataclass
from datetime import date

from .adapters.memory_store import InMemoryTaskStore
from .config import Config
from .core.dates import format_date, parse_date
from .core.layout import Layout, LayoutCache, filter_visible, layout_tasks
from .core.period import Period, View, resolve_period
from .core.sample import create_sample_tasks
from .core.tasks import Task, TaskDraft
from .ports.task_repo import TaskRepository

logger = logging.getLogger(__name__)

TASK_SPEC_SEPARATOR = "|"


@dataclass
class Timeline:
    """Everything a renderer needs for one view."""

    period: Period
    tasks: list[Task]
    layout: Layout

    @property
    def is_empty(self) -> bool:
        return not self.tasks


def build_timeline(
    tasks: list[Task],
    view: View,
    config: Config | None = None,
    today: date | None = None,
) -> Timeline:
    """Resolve the period, filter visible tasks and lay them out."""
    config = config or Config()
    period = resolve_period(view, today)
    visible = filter_visible(tasks, period)
    return Timeline(period=period, tasks=visible, layout=layout_tasks(visible, period, config.layout_config()))


class TimelineBuilder:
    """
    Builds timelines from a task repository, reusing layouts while
    neither the task list nor the view has changed.
    """

    def __init__(self, store: TaskRepository, config: Config | None = None):
        self.store = store
        self.config = config or Config()
        self.cache = LayoutCache()

    def build(self, view: View, today: date | None = None) -> Timeline:
        period = resolve_period(view, today)
        visible = filter_visible(self.store.list_tasks(), period)

        def compute() -> Layout:
            logger.debug(f"Computing layout for {period.label} (version {self.store.version})")
            return layout_tasks(visible, period, self.config.layout_config())

        layout = self.cache.get_or_compute(self.store.version, view, compute)
        return Timeline(period=period, tasks=visible, layout=layout)


def parse_task_spec(spec: str) -> TaskDraft:
    """
    Parse a "NAME|DD.MM.YYYY|DD.MM.YYYY" command-line task.

    Unparseable dates become None so validation can report them.
    """
    parts = [p.strip() for p in spec.split(TASK_SPEC_SEPARATOR)]
    if len(parts) != 3:
        raise ValueError(f"expected NAME{TASK_SPEC_SEPARATOR}START{TASK_SPEC_SEPARATOR}END, got {spec!r}")
    name, start, end = parts
    return TaskDraft(name=name, start_date=parse_date(start), end_date=parse_date(end))


def build_store(
    config: Config,
    task_specs: list[str] | tuple[str, ...] = (),
    include_sample: bool = False,
    today: date | None = None,
) -> tuple[InMemoryTaskStore, dict[str, dict[str, str]]]:
    """
    Create a store seeded with sample tasks and/or command-line tasks.

    Returns the store and the validation errors of rejected specs, keyed by
    the spec text.
    """
    store = InMemoryTaskStore(
        create_sample_tasks() if include_sample else None,
        today=today,
        window=config.validation_window(),
    )
    rejected: dict[str, dict[str, str]] = {}
    for spec in task_specs:
        result = store.add(parse_task_spec(spec))
        if not result.success:
            rejected[spec] = result.errors
    return store, rejected


def timeline_to_dict(timeline: Timeline) -> dict:
    """JSON-ready view of a timeline."""
    period = timeline.period
    layout = timeline.layout
    return {
        "period": {
            "label": period.label,
            "mode": period.mode.value,
            "year": period.year,
            "quarter": period.quarter,
            "start": period.start.isoformat(),
            "end": period.end.isoformat(),
            "months": [
                {"name": m.name, "first_day": m.first_day.isoformat(), "days": m.days}
                for m in period.months
            ],
            "weeks": [
                {
                    "number": w.number,
                    "start": w.start.isoformat(),
                    "end": w.end.isoformat(),
                    "days": w.days,
                    "is_current": w.is_current,
                }
                for w in period.weeks
            ],
        },
        "bars": [
            {
                "id": bar.id,
                "name": bar.name,
                "color": bar.color,
                "start": format_date(bar.task.start_date),
                "end": format_date(bar.task.end_date),
                "left": round(bar.left, 4),
                "width": round(bar.width, 4),
                "row": bar.row,
                "is_partial": bar.is_partial,
                "continues_left": bar.continues_left,
                "continues_right": bar.continues_right,
            }
            for bar in layout.bars
        ],
        "max_row": layout.max_row,
        "chart_height": layout.chart_height,
        "row_height": layout.row_height,
        "task_height": layout.task_height,
    }
