"""Tests for the in-memory task store."""

from datetime import date, datetime

import pytest

from quarterly.adapters.memory_store import InMemoryTaskStore
from quarterly.core.tasks import TASK_COLORS, Task, TaskDraft
from quarterly.core.validation import MESSAGES


@pytest.fixture
def store():
    return InMemoryTaskStore()


@pytest.fixture
def draft():
    return TaskDraft(name="Design", start_date=date(2024, 1, 1), end_date=date(2024, 1, 10))


class TestAdd:
    def test_add_assigns_id_and_color(self, store, draft):
        result = store.add(draft)
        assert result.success is True
        assert result.task.id.startswith("task_")
        assert result.task.color == TASK_COLORS[0]
        assert store.list_tasks() == [result.task]
        assert store.version == 1

    def test_colors_cycle_by_insertion(self, store, draft):
        store.add(draft)
        second = store.add(draft)
        assert second.task.color == TASK_COLORS[1]

    def test_keeps_explicit_color(self, store):
        result = store.add(TaskDraft("Design", date(2024, 1, 1), date(2024, 1, 2), color="#000000"))
        assert result.task.color == "#000000"

    def test_ids_unique(self, store, draft):
        ids = {store.add(draft).task.id for _ in range(5)}
        assert len(ids) == 5

    def test_invalid_draft_rejected(self, store):
        result = store.add(TaskDraft(name="", start_date=None, end_date=None))
        assert result.success is False
        assert set(result.errors) == {"name", "start_date", "end_date"}
        assert store.count == 0
        assert store.version == 0

    def test_zero_length_rejected(self, store):
        result = store.add(TaskDraft("Design", date(2024, 1, 1), date(2024, 1, 1)))
        assert result.errors == {"end_date": MESSAGES["end_before_start"]}

    def test_same_day_datetimes_rejected(self, store):
        result = store.add(TaskDraft("Design", datetime(2024, 1, 5, 9), datetime(2024, 1, 5, 17)))
        assert result.success is False
        assert result.errors == {"end_date": MESSAGES["end_before_start"]}
        assert store.count == 0

    def test_range_window_uses_store_today(self):
        store = InMemoryTaskStore(today=date(2025, 1, 15))
        result = store.add(TaskDraft("Design", date(2023, 6, 1), date(2023, 7, 1)))
        assert result.errors == {"start_date": MESSAGES["start_too_old"]}

    def test_auto_validate_off(self):
        store = InMemoryTaskStore(auto_validate=False)
        result = store.add(TaskDraft("D", date(2024, 1, 1), date(2024, 1, 1)))
        assert result.success is True


class TestUpdate:
    def test_update_in_place(self, store, draft):
        first = store.add(draft).task
        second = store.add(draft).task

        result = store.update(first.id, name="  Redesign ", end_date=date(2024, 2, 1))

        assert result.success is True
        assert result.task.id == first.id
        assert result.task.name == "Redesign"
        assert result.task.end_date == date(2024, 2, 1)
        assert result.task.color == first.color
        assert [t.id for t in store.list_tasks()] == [first.id, second.id]
        assert store.version == 3

    def test_update_with_datetime(self, store, draft):
        task = store.add(draft).task
        result = store.update(task.id, end_date=datetime(2024, 2, 1, 12))
        assert result.success is True
        assert result.task.end_date == date(2024, 2, 1)
        assert type(result.task.end_date) is date

    def test_update_unknown(self, store):
        result = store.update("missing", name="Other")
        assert result.success is False
        assert result.error == "Task not found"

    def test_update_invalid_leaves_task(self, store, draft):
        task = store.add(draft).task
        result = store.update(task.id, end_date=date(2023, 12, 1))
        assert result.success is False
        assert "end_date" in result.errors
        assert store.get(task.id) == task
        assert store.version == 1

    def test_update_unknown_field(self, store, draft):
        task = store.add(draft).task
        with pytest.raises(TypeError):
            store.update(task.id, id="other")


class TestDelete:
    def test_delete(self, store, draft):
        task = store.add(draft).task
        result = store.delete(task.id)
        assert result.success is True
        assert store.get(task.id) is None
        assert store.count == 0
        assert store.version == 2

    def test_delete_unknown(self, store):
        result = store.delete("missing")
        assert result.success is False
        assert result.error == MESSAGES["not_found"]


class TestQueries:
    @pytest.fixture
    def seeded(self):
        return InMemoryTaskStore(
            [
                Task(id="1", name="Jan", start_date=date(2024, 1, 1), end_date=date(2024, 1, 31)),
                Task(id="2", name="Feb", start_date=date(2024, 2, 1), end_date=date(2024, 2, 29)),
            ]
        )

    def test_in_range_inclusive(self, seeded):
        assert [t.id for t in seeded.in_range(date(2024, 1, 31), date(2024, 2, 1))] == ["1", "2"]
        assert [t.id for t in seeded.in_range(date(2024, 3, 1), date(2024, 3, 31))] == []

    def test_list_is_snapshot(self, seeded):
        snapshot = seeded.list_tasks()
        snapshot.clear()
        assert seeded.count == 2

    def test_has_active_tasks(self, seeded):
        assert seeded.has_active_tasks(date(2024, 2, 10)) is True
        assert seeded.has_active_tasks(date(2024, 6, 1)) is False

    def test_clear(self, seeded):
        seeded.clear()
        assert seeded.count == 0
        assert seeded.version == 1
