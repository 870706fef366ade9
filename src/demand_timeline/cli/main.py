# src/demand_timeline/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts one front-end:
- console REPL in the main thread (default),
- or, with the console disabled, a watch loop that re-prints the day every tick.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleLayoutSink, run_console_loop
from ..logging_setup import setup_logging
from ..tasks.timeline_ticker import run_timeline_ticker

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled. Watching %s. Press Ctrl+C to stop.", state.selected_date)
            sink = ConsoleLayoutSink(tick_minutes=settings.tick_minutes)
            asyncio.run(
                run_timeline_ticker(state, sink, interval_seconds=settings.refresh_seconds)
            )
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        state.task_store.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
