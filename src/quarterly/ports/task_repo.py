"""Task repository interface."""

from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from quarterly.core.tasks import Task, TaskDraft
from quarterly.core.validation import MESSAGES, ValidationErrors


@dataclass
class TaskOperationResult:
    """Outcome of a create/update/delete. Failures are values, not exceptions."""

    success: bool
    task: Task | None = None
    errors: ValidationErrors = field(default_factory=dict)
    error: str | None = None

    @classmethod
    def ok(cls, task: Task | None = None) -> "TaskOperationResult":
        return cls(success=True, task=task)

    @classmethod
    def invalid(cls, errors: ValidationErrors) -> "TaskOperationResult":
        return cls(success=False, errors=dict(errors))

    @classmethod
    def not_found(cls) -> "TaskOperationResult":
        return cls(success=False, error=MESSAGES["not_found"])


class TaskRepository(Protocol):
    """Interface for the authoritative, ordered task list."""

    @property
    def version(self) -> int:
        """Counter bumped on every successful mutation."""
        ...

    def list_tasks(self) -> list[Task]:
        """Snapshot of all tasks in insertion order."""
        ...

    def get(self, task_id: str) -> Task | None:
        """Fetch one task, or None if absent."""
        ...

    def add(self, draft: TaskDraft) -> TaskOperationResult:
        """Validate and append a new task."""
        ...

    def update(self, task_id: str, **changes) -> TaskOperationResult:
        """Validate and replace a task's attributes in place."""
        ...

    def delete(self, task_id: str) -> TaskOperationResult:
        """Remove a task by id."""
        ...

    def in_range(self, start: date, end: date) -> list[Task]:
        """Tasks overlapping [start, end]."""
        ...
