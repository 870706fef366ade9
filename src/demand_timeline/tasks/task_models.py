# src/demand_timeline/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from typing import Any

from ..timeline.dates import format_ymd, parse_ymd
from ..timeline.time_window import minutes_from_time

_HHMM_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class InvalidTaskError(ValueError):
    """Rejected at creation time (bad time string, end <= start, bad recurrence)."""


class TaskStatus(StrEnum):
    """
    Display status of a visible task relative to the reference "now".

    Every colour/badge in a view derives from this and nothing else.
    """

    DONE = "done"
    OVERDUE = "overdue"
    ON_TRACK = "on_track"


@dataclass(frozen=True, slots=True)
class Daily:
    pass


@dataclass(frozen=True, slots=True)
class Weekly:
    weekday: int  # 0=Sunday ... 6=Saturday


@dataclass(frozen=True, slots=True)
class Once:
    date: date


Recurrence = Daily | Weekly | Once


@dataclass(frozen=True, slots=True)
class Task:
    id: int | str
    title: str
    start: str  # HH:MM
    end: str  # HH:MM
    completed: bool = False


@dataclass(frozen=True, slots=True)
class RecurringTask:
    task: Task
    recurrence: Recurrence

    @property
    def id(self) -> int | str:
        return self.task.id


def validate_time_range(start: str, end: str) -> None:
    """Creation-time check: both strict 24h "HH:MM" and end after start."""
    for label, value in (("start", start), ("end", end)):
        if not isinstance(value, str) or not _HHMM_RE.match(value):
            raise InvalidTaskError(f"{label} must be HH:MM (00:00-23:59), got {value!r}")
    if minutes_from_time(end) <= minutes_from_time(start):
        raise InvalidTaskError("end time must be after start time")


def recurrence_to_dict(rec: Recurrence) -> dict[str, Any]:
    if isinstance(rec, Daily):
        return {"kind": "daily"}
    if isinstance(rec, Weekly):
        return {"kind": "weekly", "weekday": int(rec.weekday)}
    if isinstance(rec, Once):
        return {"kind": "once", "date": format_ymd(rec.date)}
    raise InvalidTaskError(f"unsupported recurrence: {rec!r}")


def recurrence_from_dict(raw: dict[str, Any]) -> Recurrence:
    """
    Inverse of recurrence_to_dict.

    Raises InvalidTaskError for an unknown kind or a bad payload.
    """
    kind = str((raw or {}).get("kind") or "").strip().lower()
    if kind == "daily":
        return Daily()
    if kind == "weekly":
        try:
            weekday = int(raw["weekday"])
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTaskError(f"weekly recurrence needs an integer weekday: {raw!r}") from e
        if not 0 <= weekday <= 6:
            raise InvalidTaskError(f"weekday must be 0..6, got {weekday}")
        return Weekly(weekday=weekday)
    if kind == "once":
        try:
            return Once(date=parse_ymd(str(raw["date"])))
        except (KeyError, ValueError) as e:
            raise InvalidTaskError(f"once recurrence needs a YYYY-MM-DD date: {raw!r}") from e
    raise InvalidTaskError(f"unknown recurrence kind: {kind!r}")


def validate_recurrence(rec: Recurrence) -> None:
    if isinstance(rec, Weekly) and not 0 <= rec.weekday <= 6:
        raise InvalidTaskError(f"weekday must be 0..6, got {rec.weekday}")
    if not isinstance(rec, (Daily, Weekly, Once)):
        raise InvalidTaskError(f"unsupported recurrence: {rec!r}")
