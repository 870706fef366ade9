# src/demand_timeline/timeline/recurrence.py

"""
Recurrence resolution.

Decides whether a recurring task instantiates on a calendar date, and filters
a task collection down to the tasks visible on that date.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date

from ..tasks.task_models import Daily, Once, Recurrence, RecurringTask, Weekly
from .dates import weekday_of

logger = logging.getLogger(__name__)


def matches(recurrence: Recurrence, day: date) -> bool:
    """
    True if the recurrence instantiates on `day`.

    Total: an unrecognized recurrence shape never matches and never raises.
    """
    if isinstance(recurrence, Daily):
        return True
    if isinstance(recurrence, Weekly):
        return weekday_of(day) == recurrence.weekday
    if isinstance(recurrence, Once):
        return recurrence.date == day

    logger.debug("Unrecognized recurrence %r; treating as non-matching", recurrence)
    return False


def task_matches(task: RecurringTask, day: date) -> bool:
    return matches(task.recurrence, day)


def filter_for_date(tasks: Iterable[RecurringTask], day: date) -> list[RecurringTask]:
    """Tasks visible on `day`, in their original relative order."""
    return [t for t in tasks if task_matches(t, day)]
