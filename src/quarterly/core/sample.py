"""Demo tasks for an empty chart."""

from .dates import parse_date
from .tasks import Task, task_color

_SAMPLE_TASKS = [
    ("task 1", "23.01.2023", "27.01.2023"),
    ("task 2", "21.02.2023", "03.03.2023"),
    ("task 3", "30.01.2023", "20.03.2023"),
    ("task 4", "28.02.2023", "01.03.2023"),
]


def create_sample_tasks() -> list[Task]:
    """Four overlapping tasks in Q1 2023, ids "1".."4"."""
    return [
        Task(
            id=str(index + 1),
            name=name,
            start_date=parse_date(start),
            end_date=parse_date(end),
            color=task_color(index),
        )
        for index, (name, start, end) in enumerate(_SAMPLE_TASKS)
    ]
