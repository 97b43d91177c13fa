"""Ports - interfaces/protocols for external dependencies."""

from .task_repo import TaskOperationResult, TaskRepository

__all__ = [
    "TaskOperationResult",
    "TaskRepository",
]
