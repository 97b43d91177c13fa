"""In-memory task store - lives for the lifetime of the process."""

import logging
from dataclasses import replace
from datetime import date

from quarterly.core.tasks import Task, TaskDraft, task_color
from quarterly.core.validation import ValidationWindow, validate_task
from quarterly.ports.task_repo import TaskOperationResult

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {"name", "start_date", "end_date", "color"}


class InMemoryTaskStore:
    """
    Ordered in-memory task list.

    Implements TaskRepository protocol. Mutations are validation-gated when
    `auto_validate` is on; failures come back as TaskOperationResult values.
    """

    def __init__(
        self,
        initial_tasks: list[Task] | None = None,
        *,
        auto_validate: bool = True,
        today: date | None = None,
        window: ValidationWindow | None = None,
    ):
        self._tasks: list[Task] = list(initial_tasks or [])
        self._version = 0
        self.auto_validate = auto_validate
        self.today = today
        self.window = window

    @property
    def version(self) -> int:
        return self._version

    @property
    def count(self) -> int:
        return len(self._tasks)

    def _bump(self) -> None:
        self._version += 1

    def _validate(self, name, start_date, end_date) -> dict[str, str]:
        if not self.auto_validate:
            return {}
        return validate_task(name, start_date, end_date, self.today, window=self.window)

    def _index_of(self, task_id: str) -> int | None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def list_tasks(self) -> list[Task]:
        return list(self._tasks)

    def get(self, task_id: str) -> Task | None:
        index = self._index_of(task_id)
        return None if index is None else self._tasks[index]

    def add(self, draft: TaskDraft) -> TaskOperationResult:
        """Validate a draft and append it with a fresh id."""
        errors = self._validate(draft.name, draft.start_date, draft.end_date)
        if errors:
            logger.info(f"Rejected new task {draft.name!r}: {errors}")
            return TaskOperationResult.invalid(errors)

        color = draft.color or task_color(len(self._tasks))
        task = Task.from_draft(replace(draft, color=color))
        self._tasks.append(task)
        self._bump()
        logger.info(f"Added task {task.id} ({task.name!r})")
        return TaskOperationResult.ok(task)

    def update(self, task_id: str, **changes) -> TaskOperationResult:
        """Replace attributes of an existing task, keeping its id and position."""
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise TypeError(f"cannot update task fields: {', '.join(sorted(unknown))}")

        index = self._index_of(task_id)
        if index is None:
            logger.warning(f"Update of unknown task {task_id}")
            return TaskOperationResult.not_found()

        current = self._tasks[index]
        merged = {
            "name": current.name,
            "start_date": current.start_date,
            "end_date": current.end_date,
            "color": current.color,
            **changes,
        }
        errors = self._validate(merged["name"], merged["start_date"], merged["end_date"])
        if errors:
            logger.info(f"Rejected update of task {task_id}: {errors}")
            return TaskOperationResult.invalid(errors)

        merged["name"] = (merged["name"] or "").strip()
        updated = replace(current, **merged)
        self._tasks[index] = updated
        self._bump()
        logger.info(f"Updated task {task_id}")
        return TaskOperationResult.ok(updated)

    def delete(self, task_id: str) -> TaskOperationResult:
        index = self._index_of(task_id)
        if index is None:
            logger.warning(f"Delete of unknown task {task_id}")
            return TaskOperationResult.not_found()

        removed = self._tasks.pop(index)
        self._bump()
        logger.info(f"Deleted task {task_id}")
        return TaskOperationResult.ok(removed)

    def in_range(self, start: date, end: date) -> list[Task]:
        return [t for t in self._tasks if t.overlaps(start, end)]

    def has_active_tasks(self, as_of: date | None = None) -> bool:
        as_of = as_of or date.today()
        return any(t.is_active(as_of) for t in self._tasks)

    def clear(self) -> None:
        if self._tasks:
            self._tasks.clear()
            self._bump()
