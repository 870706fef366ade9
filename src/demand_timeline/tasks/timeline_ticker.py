# src/demand_timeline/tasks/timeline_ticker.py

from __future__ import annotations

"""
Timeline ticker.

A small polling loop that, every interval:
- samples the wall clock once,
- loads the task set,
- builds the day layout for the selected date,
- hands it to an injected sink port.

How the layout is shown (console, web, ...) belongs to the sink, not the ticker.
"""

import asyncio
import logging

from ..core.ports import Clock, LayoutSink
from ..core.state import AppState

logger = logging.getLogger(__name__)


async def tick_once(state: AppState, sink: LayoutSink, *, clock: Clock | None = None) -> bool:
    """
    One render pass. Returns True if the sink received a layout.

    Failures are logged; the next pass starts from scratch.
    """
    try:
        now = (clock or state.clock)()
        layout = state.current_layout(true_now=now)
    except Exception:
        logger.exception("build layout failed date=%s", state.selected_date)
        return False

    try:
        await sink.publish(layout)
    except Exception:
        logger.exception("layout publish failed date=%s", state.selected_date)
        return False

    return True


async def run_timeline_ticker(
        state: AppState,
        sink: LayoutSink,
        *,
        interval_seconds: float = 10.0,
        clock: Clock | None = None,
) -> None:
    """
    Re-render the selected day every interval_seconds.

    To stop the ticker, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))
    logger.info("Timeline ticker started (interval=%.2fs)", sleep_s)

    while True:
        await tick_once(state, sink, clock=clock)
        await asyncio.sleep(sleep_s)
