# src/demand_timeline/timeline/time_window.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


def minutes_from_time(hhmm: str) -> int:
    """
    "HH:MM" -> minutes since midnight (hours * 60 + minutes).

    Range is not checked here; "25:00" gives 1500. A string that is not two
    colon-separated integers raises ValueError.
    """
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def format_hhmm(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _clamp(n: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, n))


@dataclass(frozen=True, slots=True)
class TimeWindow:
    """
    Bounded clock range of a day (e.g. 08:00-20:00).

    Positions are returned as percentages of the window, clamped to [0, 100].
    """

    start_min: int
    end_min: int

    @classmethod
    def from_hhmm(cls, start: str, end: str) -> TimeWindow:
        return cls(start_min=minutes_from_time(start), end_min=minutes_from_time(end))

    @property
    def total_min(self) -> int:
        # Never zero, even for an inverted or empty window.
        return max(1, self.end_min - self.start_min)

    def _percent(self, minutes: int) -> float:
        pos = minutes - self.start_min
        return _clamp(pos / self.total_min * 100.0, 0.0, 100.0)

    def percent_from_time(self, hhmm: str) -> float:
        return self._percent(minutes_from_time(hhmm))

    def percent_from_instant(self, moment: datetime) -> float:
        """Same mapping as percent_from_time, using only the hour and minute."""
        return self._percent(moment.hour * 60 + moment.minute)

    def ticks(self, step_minutes: int = 30) -> list[str]:
        """Scale labels from start to end inclusive, every step_minutes."""
        step = max(1, int(step_minutes))
        return [format_hhmm(m) for m in range(self.start_min, self.end_min + 1, step)]

    def label(self) -> str:
        return f"{format_hhmm(self.start_min)}-{format_hhmm(self.end_min)}"
