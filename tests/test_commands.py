# tests/test_commands.py

from __future__ import annotations

from datetime import date

from demand_timeline.cli.commands import CommandRegistry, registry
from demand_timeline.core.state import AppState
from demand_timeline.tasks.task_models import Daily, Once, Weekly


def test_command_registry_routes_2_and_3_params(state: AppState) -> None:
    reg = CommandRegistry()
    called = {"h2": 0, "h3": 0}

    def h2(state, args):
        called["h2"] += 1
        return "h2"

    def h3(state, args, emit):
        called["h3"] += 1
        if emit is not None:
            emit("note")
        return "h3"

    reg.register("a", h2, "a")
    reg.register("b", h3, "b", aliases=["bee"])

    assert reg.handle(state, "/a x") == "h2"
    assert reg.handle(state, "/BEE y", emit=lambda _: None) == "h3"
    assert called["h2"] == 1
    assert called["h3"] == 1
    assert "/b - b" in reg.build_help()


def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert reg.handle(state, "hello") is None
    assert "Unknown command" in (reg.handle(state, "/nope") or "")
    assert "Empty command" in (reg.handle(state, "/") or "")


def test_day_navigation(state: AppState) -> None:
    out = registry.handle(state, "/day 2030-02-01") or ""
    assert state.selected_date == date(2030, 2, 1)
    assert out.startswith("2030-02-01 (Friday)")

    registry.handle(state, "/next")
    assert state.selected_date == date(2030, 2, 2)
    registry.handle(state, "/prev")
    registry.handle(state, "/prev")
    assert state.selected_date == date(2030, 1, 31)

    registry.handle(state, "/day today")
    assert state.selected_date == date(2030, 1, 6)

    assert "Invalid date" in (registry.handle(state, "/day 2030-13-01") or "")
    assert state.selected_date == date(2030, 1, 6)


def test_add_done_and_render(state: AppState) -> None:
    notes: list[str] = []
    out = registry.handle(state, "/add 13:00 15:00 daily Write report", emit=notes.append) or ""
    assert "Write report" in out
    assert "ON TRACK" in out
    assert notes and "added" in notes[0]

    (task,) = state.task_store.list_tasks()
    assert task.recurrence == Daily()
    assert (task.task.start, task.task.end) == ("13:00", "15:00")

    out = registry.handle(state, f"/done {task.id}") or ""
    assert "DONE" in out
    out = registry.handle(state, f"/undone {task.id}") or ""
    assert "ON TRACK" in out
    assert "No task" in (registry.handle(state, "/done 999") or "")
    assert "Usage" in (registry.handle(state, "/done abc") or "")


def test_add_variants_and_validation(state: AppState) -> None:
    registry.handle(state, "/add 09:00 10:00 weekly 1 Planning")
    registry.handle(state, "/add 11:00 12:00 once Lunch with team")
    registry.handle(state, "/add 11:00 12:00 once 2030-03-01 Trip")

    recs = [t.recurrence for t in state.task_store.list_tasks()]
    assert recs == [Weekly(weekday=1), Once(date=date(2030, 1, 6)), Once(date=date(2030, 3, 1))]
    titles = [t.task.title for t in state.task_store.list_tasks()]
    assert titles == ["Planning", "Lunch with team", "Trip"]

    assert "end time must be after start time" in (registry.handle(state, "/add 10:00 09:00 daily X") or "")
    assert "Task not created" in (registry.handle(state, "/add 09:00 10:00 weekly 9 X") or "")
    assert "Task not created" in (registry.handle(state, "/add 09:00 10:00 monthly X") or "")
    reply = registry.handle(state, "/add 11:00 12:00 once 2030-13-01 Trip") or ""
    assert "Task not created" in reply and "2030-13-01" in reply
    assert "Task not created" in (registry.handle(state, "/add 11:00 12:00 once 2030-02-30 Trip") or "")
    assert "Usage" in (registry.handle(state, "/add 09:00") or "")
    assert state.task_store.count_tasks() == 3


def test_delete_recurring_warns_and_clear_needs_confirmation(state: AppState) -> None:
    tid = state.task_store.add_task(title="Daily sync", start="09:00", end="09:30", recurrence=Daily())
    once = state.task_store.add_task(
        title="One-off", start="10:00", end="10:30", recurrence=Once(date=date(2030, 1, 6))
    )

    notes: list[str] = []
    registry.handle(state, f"/del {tid}", emit=notes.append)
    assert notes and "every day" in notes[0]
    assert state.task_store.get_task(tid) is None

    notes.clear()
    registry.handle(state, f"/del {once}", emit=notes.append)
    assert notes == []

    state.task_store.add_task(title="A", start="09:00", end="09:30", recurrence=Daily())
    assert "Confirm" in (registry.handle(state, "/clear") or "")
    assert state.task_store.count_tasks() == 1
    assert registry.handle(state, "/clear yes") == "Deleted 1 task(s)."
    assert "No tasks stored" in (registry.handle(state, "/list") or "")


def test_show_places_now_marker(state: AppState) -> None:
    state.task_store.add_task(title="Morning", start="09:00", end="10:00", recurrence=Daily())
    state.task_store.add_task(title="Evening", start="18:00", end="19:00", recurrence=Daily())
    out = registry.handle(state, "/show") or ""
    lines = out.splitlines()
    marker = next(i for i, line in enumerate(lines) if "---- now 14:05 ----" in line)
    morning = next(i for i, line in enumerate(lines) if "Morning" in line)
    evening = next(i for i, line in enumerate(lines) if "Evening" in line)
    assert morning < marker < evening
    assert "OVERDUE" in lines[morning]
    assert "scale: 08:00 08:30" in out
