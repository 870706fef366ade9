# src/demand_timeline/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any

from ..timeline.layout import DayLayout, build_day_layout
from ..timeline.time_window import TimeWindow
from .ports import Clock, TaskRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    task_store: TaskRepo
    window: TimeWindow
    selected_date: date
    clock: Clock = field(default=datetime.now)

    def now(self) -> datetime:
        return self.clock()

    def today(self) -> date:
        return self.now().date()

    def current_layout(self, true_now: datetime | None = None) -> DayLayout:
        """
        Layout for the selected date.

        Pass `true_now` when the caller already sampled the clock for this pass.
        """
        if true_now is None:
            true_now = self.now()
        return build_day_layout(
            self.task_store.list_tasks(),
            self.selected_date,
            true_now,
            self.window,
        )
