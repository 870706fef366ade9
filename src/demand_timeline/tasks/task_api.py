# src/demand_timeline/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.ports import TaskRepo
from .task_models import Daily, Once, Recurrence, RecurringTask, Weekly

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "New task"


def create_task(
    task_store: TaskRepo,
    *,
    title: str,
    start: str,
    end: str,
    recurrence: Recurrence,
) -> int:
    """
    Convenience helper: create a not-yet-completed task.

    A blank title falls back to DEFAULT_TITLE. Time validation (HH:MM, end after
    start) happens in the store; InvalidTaskError propagates to the caller.
    """
    clean_title = (title or "").strip() or DEFAULT_TITLE
    task_id = task_store.add_task(
        title=clean_title,
        start=start,
        end=end,
        recurrence=recurrence,
        completed=False,
    )
    logger.info("Created task id=%s %s-%s %s", task_id, start, end, describe_recurrence(recurrence))
    return task_id


def mark_completed(task_store: TaskRepo, task_id: int, completed: bool = True) -> bool:
    changed = task_store.set_completed(task_id, completed)
    if not changed:
        logger.info("mark_completed: no task id=%s", task_id)
    return changed


def delete_task(task_store: TaskRepo, task_id: int) -> bool:
    return task_store.delete_task(task_id)


def clear_all_tasks(task_store: TaskRepo) -> int:
    return task_store.clear_all()


def is_recurring(task: RecurringTask) -> bool:
    """Deleting a recurring task removes it from every day, not just one."""
    return not isinstance(task.recurrence, Once)


_WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def describe_recurrence(rec: Recurrence) -> str:
    if isinstance(rec, Daily):
        return "every day"
    if isinstance(rec, Weekly):
        return f"every {_WEEKDAY_NAMES[rec.weekday]}"
    if isinstance(rec, Once):
        return f"once on {rec.date.isoformat()}"
    return "unknown"
