"""Functional core - pure business logic with no I/O."""

from .tasks import Task, TaskDraft, TaskStatus, task_color, generate_task_id
from .validation import ValidationErrors, ValidationWindow, validate_task, validate_task_form
from .period import Period, QuarterView, YearView, ViewMode, resolve_period, view_for
from .layout import Layout, LayoutConfig, TaskBar, filter_visible, layout_tasks
from .navigation import NavigationBounds, NavigationState, QuarterNavigator

__all__ = [
    # Tasks
    "Task",
    "TaskDraft",
    "TaskStatus",
    "task_color",
    "generate_task_id",
    # Validation
    "ValidationErrors",
    "ValidationWindow",
    "validate_task",
    "validate_task_form",
    # Period
    "Period",
    "QuarterView",
    "YearView",
    "ViewMode",
    "resolve_period",
    "view_for",
    # Layout
    "Layout",
    "LayoutConfig",
    "TaskBar",
    "filter_visible",
    "layout_tasks",
    # Navigation
    "NavigationBounds",
    "NavigationState",
    "QuarterNavigator",
]
