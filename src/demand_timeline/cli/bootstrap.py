# src/demand_timeline/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the concrete task store and day window into AppState,
- seeds the sample day on a fresh store (optional).
"""

from __future__ import annotations

import logging
from datetime import datetime

from ..config import get_settings
from ..core.ports import Clock
from ..core.state import AppState
from ..tasks.task_store import TaskStore
from ..timeline.time_window import TimeWindow

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, clock: Clock | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    if clock is None:
        clock = datetime.now

    _ensure_local_dirs(settings)

    # An empty or inverted window still renders (span is at least one minute); warn once here.
    window = TimeWindow.from_hhmm(settings.day_start, settings.day_end)
    if window.end_min <= window.start_min:
        logger.warning("Day window %s is empty or inverted", window.label())

    task_store = TaskStore(settings.tasks_db_path)
    if getattr(settings, "seed_demo", False):
        task_store.seed_demo_tasks()

    return AppState(
        settings=settings,
        task_store=task_store,
        window=window,
        selected_date=clock().date(),
        clock=clock,
    )
