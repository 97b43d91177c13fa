"""Pure task domain logic - no I/O dependencies."""

import random
import uuid
from dataclasses import dataclass
from datetime import date
from enum import Enum

from .dates import calculate_duration, normalize

TASK_COLORS = (
    "#3B82F6",  # blue
    "#10B981",  # green
    "#F59E0B",  # yellow
    "#EF4444",  # red
    "#8B5CF6",  # purple
    "#F97316",  # orange
    "#06B6D4",  # cyan
    "#84CC16",  # lime
)


class TaskStatus(Enum):
    UPCOMING = "upcoming"
    IN_PROGRESS = "in progress"
    COMPLETED = "completed"


def task_color(index: int | None = None) -> str:
    """Palette color cycling by index, or a random one without an index."""
    if index is not None:
        return TASK_COLORS[index % len(TASK_COLORS)]
    return random.choice(TASK_COLORS)


def generate_task_id() -> str:
    return f"task_{uuid.uuid4().hex}"


@dataclass
class TaskDraft:
    """Task data without identity - the input to a create."""

    name: str
    start_date: date | None
    end_date: date | None
    color: str | None = None


@dataclass
class Task:
    """A named task scheduled over a calendar date range."""

    id: str
    name: str
    start_date: date
    end_date: date
    color: str | None = None

    def __post_init__(self) -> None:
        self.start_date = normalize(self.start_date)
        self.end_date = normalize(self.end_date)

    def overlaps(self, start: date, end: date) -> bool:
        """Closed-interval overlap with [start, end]."""
        return self.start_date <= end and self.end_date >= start

    def overlaps_task(self, other: "Task") -> bool:
        return self.overlaps(other.start_date, other.end_date)

    def duration_days(self) -> int:
        return calculate_duration(self.start_date, self.end_date)

    def status(self, as_of: date | None = None) -> TaskStatus:
        """Where the task stands relative to a given day."""
        as_of = normalize(as_of or date.today())
        if as_of < self.start_date:
            return TaskStatus.UPCOMING
        if as_of > self.end_date:
            return TaskStatus.COMPLETED
        return TaskStatus.IN_PROGRESS

    def is_active(self, as_of: date | None = None) -> bool:
        return self.status(as_of) is TaskStatus.IN_PROGRESS

    @classmethod
    def from_draft(cls, draft: TaskDraft, task_id: str | None = None) -> "Task":
        """Create a Task from a validated draft."""
        if draft.start_date is None or draft.end_date is None:
            raise ValueError("draft is missing a start or end date")
        return cls(
            id=task_id or generate_task_id(),
            name=(draft.name or "").strip(),
            start_date=draft.start_date,
            end_date=draft.end_date,
            color=draft.color,
        )


def sort_by_start(tasks: list[Task]) -> list[Task]:
    """Stable sort by start date; ties keep their input order."""
    return sorted(tasks, key=lambda t: t.start_date)
