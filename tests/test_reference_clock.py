# tests/test_reference_clock.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from demand_timeline.timeline.reference_clock import minutes_of_day, reference_now


def test_today_tracks_real_clock(fixed_now: datetime) -> None:
    ref = reference_now(fixed_now.date(), fixed_now)
    assert ref == fixed_now.replace(microsecond=0)
    assert (ref.hour, ref.minute, ref.second) == (14, 5, 33)


def test_future_date_is_start_of_day(fixed_now: datetime) -> None:
    future = (fixed_now + timedelta(days=5)).date()
    ref = reference_now(future, fixed_now)
    assert ref.date() == future
    assert (ref.hour, ref.minute, ref.second) == (0, 0, 0)


def test_past_date_is_end_of_day(fixed_now: datetime) -> None:
    yesterday = (fixed_now - timedelta(days=1)).date()
    ref = reference_now(yesterday, fixed_now)
    assert ref.date() == yesterday
    assert (ref.hour, ref.minute, ref.second) == (23, 59, 0)


def test_keeps_tzinfo_and_is_deterministic() -> None:
    tz = timezone(timedelta(hours=-3))
    now = datetime(2030, 1, 6, 0, 30, tzinfo=tz)
    # Local calendar date of `now` decides "today", not its UTC date.
    ref = reference_now(now.date(), now)
    assert ref.tzinfo is tz
    assert (ref.hour, ref.minute) == (0, 30)
    assert reference_now(now.date(), now) == ref


def test_minutes_of_day() -> None:
    assert minutes_of_day(datetime(2030, 1, 6, 23, 59, 59)) == 1439
