# src/demand_timeline/connectors/console_render.py

from __future__ import annotations

from ..tasks.task_models import TaskStatus
from ..timeline.layout import DayLayout, LayoutRecord

_WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

_BADGES = {
    TaskStatus.DONE: "DONE",
    TaskStatus.OVERDUE: "OVERDUE",
    TaskStatus.ON_TRACK: "ON TRACK",
}


def _record_line(r: LayoutRecord) -> str:
    return (
        f"  #{r.id:<4} {r.start}-{r.end}  [{_BADGES[r.status]:<8}]  "
        f"lane {r.lane + 1}/{r.lanes_in_group}  "
        f"top {r.start_percent:5.1f}%  height {r.height_percent:5.1f}%  {r.title}"
    )


def render_day_layout(layout: DayLayout, *, tick_minutes: int = 30) -> str:
    """Plain-text rendering of one day: header, hour scale, tasks top-down with the now marker."""
    day = layout.date
    now_label = layout.reference_now.strftime("%H:%M")

    lines = [
        f"{day.isoformat()} ({_WEEKDAYS[day.weekday()]})  window {layout.window.label()}  "
        f"now {now_label} ({layout.now_percent:.1f}%)",
        "  scale: " + " ".join(layout.window.ticks(tick_minutes)),
    ]

    if not layout.records:
        lines.append("  (no tasks on this day)")
        lines.append(f"  ---- now {now_label} ----")
        return "\n".join(lines)

    ordered = sorted(layout.records, key=lambda r: (r.start_percent, r.lane, r.end_percent))
    marker_done = False
    for r in ordered:
        if not marker_done and r.start_percent > layout.now_percent:
            lines.append(f"  ---- now {now_label} ----")
            marker_done = True
        lines.append(_record_line(r))
    if not marker_done:
        lines.append(f"  ---- now {now_label} ----")

    return "\n".join(lines)
