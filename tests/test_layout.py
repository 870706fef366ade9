# tests/test_layout.py

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from demand_timeline.tasks.task_models import Daily, Once, RecurringTask, Task, TaskStatus, Weekly
from demand_timeline.timeline.layout import build_day_layout, classify_status
from demand_timeline.timeline.time_window import TimeWindow


def _rt(task_id: int, start: str, end: str, rec=None, completed: bool = False) -> RecurringTask:
    return RecurringTask(
        task=Task(id=task_id, title=f"task {task_id}", start=start, end=end, completed=completed),
        recurrence=rec or Daily(),
    )


def _sample(fixed_now: datetime) -> list[RecurringTask]:
    return [
        _rt(1, "08:30", "09:15", completed=True),
        _rt(2, "09:30", "10:30"),
        _rt(3, "11:00", "12:00", Weekly(weekday=1)),  # Mondays only
        _rt(4, "14:00", "15:00"),
        _rt(5, "14:30", "16:00"),
        _rt(6, "17:30", "18:00", Once(date=fixed_now.date())),
    ]


def test_classify_status_rules() -> None:
    t = Task(id=1, title="t", start="09:00", end="10:00")
    assert classify_status(t, 9 * 60 + 59) is TaskStatus.ON_TRACK
    assert classify_status(t, 10 * 60) is TaskStatus.OVERDUE  # end reached
    assert classify_status(t, 23 * 60) is TaskStatus.OVERDUE
    done = Task(id=2, title="d", start="09:00", end="10:00", completed=True)
    assert classify_status(done, 23 * 60) is TaskStatus.DONE
    assert classify_status(done, 0) is TaskStatus.DONE


def test_today_layout(fixed_now: datetime, window: TimeWindow) -> None:
    layout = build_day_layout(_sample(fixed_now), fixed_now.date(), fixed_now, window)

    # Sunday: the Monday-only task is filtered out, order preserved.
    assert [r.id for r in layout.records] == [1, 2, 4, 5, 6]
    by_id = {r.id: r for r in layout.records}

    assert by_id[1].status is TaskStatus.DONE
    assert by_id[2].status is TaskStatus.OVERDUE
    assert by_id[4].status is TaskStatus.ON_TRACK  # 14:05 < 15:00
    assert by_id[6].status is TaskStatus.ON_TRACK

    assert (by_id[4].lane, by_id[4].lanes_in_group) == (0, 2)
    assert (by_id[5].lane, by_id[5].lanes_in_group) == (1, 2)
    assert (by_id[2].lane, by_id[2].lanes_in_group) == (0, 1)

    assert by_id[4].start_percent == pytest.approx(50.0)
    assert by_id[4].end_percent == pytest.approx(700 / 720 * 100)
    assert layout.reference_now == fixed_now
    assert layout.now_percent == pytest.approx((14 * 60 + 5 - 480) / 720 * 100)


def test_past_day_everything_open_is_overdue(fixed_now: datetime, window: TimeWindow) -> None:
    yesterday = (fixed_now - timedelta(days=1)).date()
    layout = build_day_layout(_sample(fixed_now), yesterday, fixed_now, window)

    statuses = {r.id: r.status for r in layout.records}
    assert statuses[1] is TaskStatus.DONE
    assert all(s is TaskStatus.OVERDUE for tid, s in statuses.items() if tid != 1)
    assert 6 not in statuses  # one-off belongs to today
    assert 3 not in statuses  # Saturday
    assert layout.now_percent == 100.0


def test_future_day_nothing_overdue(fixed_now: datetime, window: TimeWindow) -> None:
    monday = (fixed_now + timedelta(days=1)).date()
    layout = build_day_layout(_sample(fixed_now), monday, fixed_now, window)

    assert 3 in {r.id for r in layout.records}
    assert {r.status for r in layout.records} == {TaskStatus.DONE, TaskStatus.ON_TRACK}
    assert layout.now_percent == 0.0


def test_empty_task_set(fixed_now: datetime, window: TimeWindow) -> None:
    layout = build_day_layout([], fixed_now.date(), fixed_now, window)
    assert layout.records == []
    assert layout.date == fixed_now.date()


def test_height_is_at_least_one_percent(fixed_now: datetime, window: TimeWindow) -> None:
    early = _rt(9, "06:00", "07:00")  # entirely before the window, clamps to 0..0
    layout = build_day_layout([early], fixed_now.date(), fixed_now, window)
    (rec,) = layout.records
    assert rec.start_percent == rec.end_percent == 0.0
    assert rec.height_percent == 1.0
