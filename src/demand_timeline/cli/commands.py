# src/demand_timeline/cli/commands.py

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Callable
from typing import cast

from ..connectors.console_render import render_day_layout
from ..core.state import AppState
from ..tasks.task_api import (
    clear_all_tasks,
    create_task,
    delete_task,
    describe_recurrence,
    is_recurring,
    mark_completed,
)
from ..tasks.task_models import Daily, InvalidTaskError, Once, Recurrence, Weekly
from ..timeline.dates import parse_ymd, shift_date

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_DATE_LIKE_RE = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /day, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_task_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def _show(state: AppState) -> str:
    tick = int(getattr(state.settings, "tick_minutes", 30) or 30)
    return render_day_layout(state.current_layout(), tick_minutes=tick)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_show(state: AppState, args: list[str]) -> str:
    return _show(state)


def cmd_day(state: AppState, args: list[str]) -> str:
    """
    /day               -> show selected date
    /day today         -> jump to today
    /day YYYY-MM-DD    -> jump to date
    """
    if not args:
        return f"Selected date: {state.selected_date.isoformat()}. Use /day YYYY-MM-DD or /day today."

    arg = args[0].lower()
    if arg == "today":
        state.selected_date = state.today()
    else:
        try:
            state.selected_date = parse_ymd(arg)
        except ValueError:
            return f"Invalid date: {args[0]}. Expected YYYY-MM-DD."

    logger.debug("Selected date -> %s", state.selected_date)
    return _show(state)


def cmd_next(state: AppState, args: list[str]) -> str:
    state.selected_date = shift_date(state.selected_date, 1)
    return _show(state)


def cmd_prev(state: AppState, args: list[str]) -> str:
    state.selected_date = shift_date(state.selected_date, -1)
    return _show(state)


_ADD_USAGE = (
    "Usage:\n"
    "  /add HH:MM HH:MM daily [title]\n"
    "  /add HH:MM HH:MM weekly <0-6, 0=Sunday> [title]\n"
    "  /add HH:MM HH:MM once [YYYY-MM-DD] [title]   (date defaults to the selected date)"
)


def _parse_recurrence(state: AppState, args: list[str]) -> tuple[Recurrence, list[str]]:
    """Consume the recurrence part of /add args; return it plus the remaining words."""
    kind = args[0].lower()
    rest = args[1:]

    if kind == "daily":
        return Daily(), rest

    if kind == "weekly":
        if not rest or not rest[0].isdigit():
            raise InvalidTaskError("weekly needs a weekday number 0-6 (0=Sunday)")
        return Weekly(weekday=int(rest[0])), rest[1:]

    if kind == "once":
        # A date-shaped word is the date; anything else starts the title.
        if rest and _DATE_LIKE_RE.match(rest[0]):
            try:
                return Once(date=parse_ymd(rest[0])), rest[1:]
            except ValueError as e:
                raise InvalidTaskError(f"invalid date {rest[0]!r}, expected YYYY-MM-DD") from e
        return Once(date=state.selected_date), rest

    raise InvalidTaskError(f"unknown recurrence: {kind}")


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) < 3:
        return _ADD_USAGE

    start, end = args[0], args[1]
    try:
        recurrence, title_words = _parse_recurrence(state, args[2:])
        task_id = create_task(
            state.task_store,
            title=" ".join(title_words),
            start=start,
            end=end,
            recurrence=recurrence,
        )
    except InvalidTaskError as e:
        return f"Task not created: {e}\n{_ADD_USAGE}"

    if emit:
        emit(f"Task #{task_id} added ({start}-{end}, {describe_recurrence(recurrence)}).")
    return _show(state)


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /done <id>"
    if not mark_completed(state.task_store, task_id, True):
        return f"No task #{task_id}."
    return _show(state)


def cmd_undone(state: AppState, args: list[str]) -> str:
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /undone <id>"
    if not mark_completed(state.task_store, task_id, False):
        return f"No task #{task_id}."
    return _show(state)


def cmd_del(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    task_id = _parse_task_id(args)
    if task_id is None:
        return "Usage: /del <id>"

    task = state.task_store.get_task(task_id)
    if task is not None and is_recurring(task) and emit:
        emit(f"Task #{task_id} is recurring ({describe_recurrence(task.recurrence)}); removing it from every day.")

    if not delete_task(state.task_store, task_id):
        return f"No task #{task_id}."
    return _show(state)


def cmd_clear(state: AppState, args: list[str]) -> str:
    """
    /clear      -> ask for confirmation
    /clear yes  -> delete every task
    """
    if not args or args[0].lower() != "yes":
        return "This deletes ALL tasks on every day. Confirm with /clear yes."
    n = clear_all_tasks(state.task_store)
    return f"Deleted {n} task(s)."


def cmd_list(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.list_tasks()
    if not tasks:
        return "No tasks stored."
    lines = ["All tasks:"]
    for t in tasks:
        mark = "x" if t.task.completed else " "
        lines.append(
            f"  [{mark}] #{t.id} {t.task.start}-{t.task.end} {t.task.title} ({describe_recurrence(t.recurrence)})"
        )
    return "\n".join(lines)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("show", cmd_show, help_text="Show the selected day's timeline.", aliases=["s"])
registry.register("day", cmd_day, help_text="Select a date: /day YYYY-MM-DD | /day today.")
registry.register("next", cmd_next, help_text="Go to the next day.", aliases=["n"])
registry.register("prev", cmd_prev, help_text="Go to the previous day.", aliases=["p"])
registry.register("add", cmd_add, help_text="Add a task: /add HH:MM HH:MM daily|weekly N|once [date] [title].")
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.")
registry.register("undone", cmd_undone, help_text="Mark a task not completed: /undone <id>.")
registry.register("del", cmd_del, help_text="Delete a task (from every day if recurring): /del <id>.")
registry.register("clear", cmd_clear, help_text="Delete all tasks: /clear yes.")
registry.register("list", cmd_list, help_text="List every stored task with its recurrence.")
