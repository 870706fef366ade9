# src/demand_timeline/connectors/console_connector.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..timeline.layout import DayLayout
from .console_render import render_day_layout

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


@dataclass(slots=True)
class ConsoleLayoutSink:
    """LayoutSink that prints every published layout to stdout."""

    tick_minutes: int = 30

    async def publish(self, layout: DayLayout) -> None:
        _print_ts("\n" + render_day_layout(layout, tick_minutes=self.tick_minutes))


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started (date=%s).", state.selected_date)
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        # Immediate user-visible notes (e.g. recurring-delete warnings)
        print(f"[{_ts_local()}] {text}", flush=True)

    # Start on the timeline itself.
    print(command_registry.handle(state, "/show") or "")

    while True:
        try:
            user_input = input(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            response = command_registry.handle(state, user_input, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is None:
            response = "Commands start with '/'. Use /help to list them."

        print(f"[{_ts_local()}] {response}")

    logger.info("Console connector finished.")
