# src/demand_timeline/timeline/layout.py

"""
Day layout.

Wires the pieces together for one render pass:
selected date + all tasks -> visible tasks -> lanes + window percentages,
reference clock -> now marker and per-task status.

`true_now` is sampled once by the caller and reused for every derived value,
so status and the now marker can never disagree within a pass.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime

from ..tasks.task_models import RecurringTask, Task, TaskStatus
from .lanes import Interval, LaneAssignment, pack_lanes
from .recurrence import filter_for_date
from .reference_clock import minutes_of_day, reference_now
from .time_window import TimeWindow, minutes_from_time

logger = logging.getLogger(__name__)

_SINGLE_LANE = LaneAssignment(lane=0, lanes_in_group=1)


@dataclass(frozen=True, slots=True)
class LayoutRecord:
    id: int | str
    title: str
    start: str
    end: str
    start_percent: float
    end_percent: float
    lane: int
    lanes_in_group: int
    status: TaskStatus

    @property
    def height_percent(self) -> float:
        # Keep zero-height (fully clamped) tasks visible.
        return max(1.0, self.end_percent - self.start_percent)


@dataclass(frozen=True, slots=True)
class DayLayout:
    date: date
    reference_now: datetime
    now_percent: float
    window: TimeWindow
    records: list[LayoutRecord] = field(default_factory=list)


def classify_status(task: Task, reference_minutes: int) -> TaskStatus:
    if task.completed:
        return TaskStatus.DONE
    if reference_minutes >= minutes_from_time(task.end):
        return TaskStatus.OVERDUE
    return TaskStatus.ON_TRACK


def build_day_layout(
    tasks: Iterable[RecurringTask],
    selected: date,
    true_now: datetime,
    window: TimeWindow,
) -> DayLayout:
    visible = filter_for_date(tasks, selected)

    ref = reference_now(selected, true_now)
    ref_minutes = minutes_of_day(ref)

    intervals = [
        Interval(id=t.id, start_min=minutes_from_time(t.task.start), end_min=minutes_from_time(t.task.end))
        for t in visible
    ]
    lanes = pack_lanes(intervals)

    records: list[LayoutRecord] = []
    for t in visible:
        info = lanes.get(t.id, _SINGLE_LANE)
        records.append(
            LayoutRecord(
                id=t.id,
                title=t.task.title,
                start=t.task.start,
                end=t.task.end,
                start_percent=window.percent_from_time(t.task.start),
                end_percent=window.percent_from_time(t.task.end),
                lane=info.lane,
                lanes_in_group=info.lanes_in_group,
                status=classify_status(t.task, ref_minutes),
            )
        )

    logger.debug(
        "Layout date=%s visible=%d ref_now=%s",
        selected.isoformat(),
        len(records),
        ref.strftime("%H:%M:%S"),
    )

    return DayLayout(
        date=selected,
        reference_now=ref,
        now_percent=window.percent_from_instant(ref),
        window=window,
        records=records,
    )
