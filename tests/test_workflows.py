"""Tests for the shared workflow layer."""

import json
from datetime import date

import pytest

from quarterly.adapters.memory_store import InMemoryTaskStore
from quarterly.config import Config
from quarterly.core.period import QuarterView, YearView
from quarterly.core.sample import create_sample_tasks
from quarterly.core.tasks import TaskDraft
from quarterly.workflows import (
    TimelineBuilder,
    build_store,
    build_timeline,
    parse_task_spec,
    timeline_to_dict,
)


@pytest.fixture
def config():
    return Config()


class TestBuildTimeline:
    def test_sample_quarter(self, config):
        timeline = build_timeline(create_sample_tasks(), QuarterView(2023, 1), config)
        assert timeline.period.label == "Q1 2023"
        assert len(timeline.tasks) == 4
        assert timeline.layout.max_row == 2

    def test_empty_quarter(self, config):
        timeline = build_timeline(create_sample_tasks(), QuarterView(2023, 2), config)
        assert timeline.is_empty
        assert timeline.layout.max_row == -1
        assert timeline.layout.chart_height == config.min_chart_height

    def test_year_view(self, config):
        timeline = build_timeline(create_sample_tasks(), YearView(2023), config)
        assert len(timeline.tasks) == 4
        assert len(timeline.period.months) == 12

    def test_uses_config_layout(self):
        config = Config(task_height=20, task_gap=2)
        timeline = build_timeline(create_sample_tasks(), QuarterView(2023, 1), config)
        assert timeline.layout.row_height == 22


class TestTimelineBuilder:
    def test_reuses_layout_until_store_changes(self, config):
        store = InMemoryTaskStore(create_sample_tasks())
        builder = TimelineBuilder(store, config)

        first = builder.build(QuarterView(2023, 1))
        second = builder.build(QuarterView(2023, 1))
        assert first.layout is second.layout

        store.add(TaskDraft("New task", date(2023, 2, 1), date(2023, 2, 10)))
        third = builder.build(QuarterView(2023, 1))
        assert third.layout is not first.layout
        assert len(third.layout.bars) == 5

    def test_today_marks_current_week(self, config):
        builder = TimelineBuilder(InMemoryTaskStore(), config)
        timeline = builder.build(QuarterView(2023, 1), today=date(2023, 2, 15))
        assert timeline.period.current_week.start == date(2023, 2, 13)


class TestParseTaskSpec:
    def test_parses(self):
        draft = parse_task_spec("Launch | 01.02.2024 | 10.02.2024")
        assert draft == TaskDraft("Launch", date(2024, 2, 1), date(2024, 2, 10))

    def test_bad_dates_become_none(self):
        draft = parse_task_spec("Launch|tomorrow|10.02.2024")
        assert draft.start_date is None

    def test_wrong_shape(self):
        with pytest.raises(ValueError):
            parse_task_spec("Launch|01.02.2024")


class TestBuildStore:
    def test_sample_and_specs(self, config):
        store, rejected = build_store(config, ["Launch|01.02.2023|10.02.2023"], include_sample=True)
        assert store.count == 5
        assert rejected == {}

    def test_rejected_specs(self, config):
        store, rejected = build_store(config, ["X|01.02.2023|10.02.2023"])
        assert store.count == 0
        assert set(rejected["X|01.02.2023|10.02.2023"]) == {"name"}

    def test_window_applies_with_today(self, config):
        _, rejected = build_store(config, ["Launch|01.02.2020|10.02.2020"], today=date(2025, 1, 15))
        assert "start_date" in rejected["Launch|01.02.2020|10.02.2020"]


def test_timeline_to_dict_is_json_ready(config):
    timeline = build_timeline(create_sample_tasks(), QuarterView(2023, 1), config, today=date(2023, 1, 25))
    data = timeline_to_dict(timeline)

    json.dumps(data)
    assert data["period"]["label"] == "Q1 2023"
    assert data["period"]["start"] == "2023-01-01"
    assert [m["name"] for m in data["period"]["months"]] == ["Jan", "Feb", "Mar"]
    assert sum(w["is_current"] for w in data["period"]["weeks"]) == 1
    assert [b["row"] for b in data["bars"]] == [0, 1, 0, 2]
    assert data["bars"][0]["start"] == "23.01.2023"
    assert data["max_row"] == 2
    assert data["chart_height"] == 226
