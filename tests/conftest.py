# tests/conftest.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from demand_timeline.core.state import AppState
from demand_timeline.tasks.task_store import TaskStore
from demand_timeline.timeline.layout import DayLayout
from demand_timeline.timeline.time_window import TimeWindow

# Sunday 2030-01-06, mid-afternoon.
FIXED_NOW = datetime(2030, 1, 6, 14, 5, 33)


@dataclass(slots=True)
class FakeLayoutSink:
    """LayoutSink that records every published layout."""

    published: list[DayLayout] = field(default_factory=list)

    async def publish(self, layout: DayLayout) -> None:
        self.published.append(layout)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="demand-timeline-test",
        log_level="DEBUG",
        console_enabled=True,
        seed_demo=False,
        day_start="08:00",
        day_end="20:00",
        tick_minutes=30,
        refresh_seconds=0.01,
        data_dir=tmp_path,
        tasks_db_path=tmp_path / "tasks.sqlite3",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_db_path)


@pytest.fixture()
def window() -> TimeWindow:
    return TimeWindow.from_hhmm("08:00", "20:00")


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, window: TimeWindow) -> AppState:
    """
    AppState wired with a real SQLite store and a frozen clock.

    NOTE: the store is real because its correctness is part of what we want to test.
    """
    return AppState(
        settings=settings,
        task_store=store,
        window=window,
        selected_date=FIXED_NOW.date(),
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture()
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture()
def sink() -> FakeLayoutSink:
    return FakeLayoutSink()
