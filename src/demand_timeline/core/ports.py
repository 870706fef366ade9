# src/demand_timeline/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps storage and front-ends swappable and makes testing easier.
"""

from datetime import datetime
from typing import Awaitable, Callable, Protocol

from ..tasks.task_models import Recurrence, RecurringTask
from ..timeline.layout import DayLayout

Clock = Callable[[], datetime]
# Returns the current instant; sampled once per render pass.


class TaskRepo(Protocol):
    # Read side (render passes)
    def list_tasks(self) -> list[RecurringTask]: ...
    def get_task(self, task_id: int) -> RecurringTask | None: ...
    def count_tasks(self) -> int: ...

    # Write side (user actions)
    def add_task(
            self,
            *,
            title: str,
            start: str,
            end: str,
            recurrence: Recurrence,
            completed: bool = False,
    ) -> int: ...
    def set_completed(self, task_id: int, completed: bool) -> bool: ...
    def delete_task(self, task_id: int) -> bool: ...
    def clear_all(self) -> int: ...
    def close(self) -> None: ...


class LayoutSink(Protocol):
    """
    Front-end port: where a freshly computed day layout goes
    (console printer, a web push channel, a test recorder...).
    """

    def publish(self, layout: DayLayout) -> Awaitable[None]: ...
