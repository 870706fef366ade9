# src/demand_timeline/timeline/reference_clock.py

from __future__ import annotations

from datetime import date, datetime, time


def reference_now(selected: date, true_now: datetime) -> datetime:
    """
    The "now" that status checks should use for the selected date.

    - today:       selected date at true_now's hour/minute/second (tracks the real clock)
    - past date:   23:59:00 (day fully elapsed, every open task is overdue)
    - future date: 00:00:00 (day not started, nothing is overdue yet)

    The result keeps true_now's tzinfo; the environment's time zone is not consulted.
    """
    today = true_now.date()
    tz = true_now.tzinfo

    if selected == today:
        return datetime.combine(
            selected,
            time(true_now.hour, true_now.minute, true_now.second),
            tzinfo=tz,
        )
    if selected < today:
        return datetime.combine(selected, time(23, 59, 0), tzinfo=tz)
    return datetime.combine(selected, time(0, 0, 0), tzinfo=tz)


def minutes_of_day(moment: datetime) -> int:
    return moment.hour * 60 + moment.minute
