# src/demand_timeline/timeline/lanes.py

"""
Overlap lane packing.

Tasks of one day are split into overlap-connected groups (components of the
overlap graph, so A-B-C chains land in one group even if A and C never touch).
Within a group tasks are packed greedily into lanes:

- sort by (start, end)
- reuse the first lane whose last end <= task start
- otherwise open a new lane

Every task in a group reports the group's final lane count, so a view can split
the group's width evenly. Different groups never influence each other.

Tasks are addressed by dense indices for the duration of one call; nothing is
kept between calls.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Hashable, Sequence
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Interval:
    id: Hashable
    start_min: int
    end_min: int


@dataclass(frozen=True, slots=True)
class LaneAssignment:
    lane: int
    lanes_in_group: int


def overlaps(a: Interval, b: Interval) -> bool:
    """Half-open intersection: intervals that only touch do not overlap."""
    return a.start_min < b.end_min and b.start_min < a.end_min


def _adjacency(intervals: Sequence[Interval]) -> list[list[int]]:
    n = len(intervals)
    adj: list[list[int]] = [[] for _ in range(n)]
    for i in range(n):
        for j in range(i + 1, n):
            if overlaps(intervals[i], intervals[j]):
                adj[i].append(j)
                adj[j].append(i)
    return adj


def overlap_components(intervals: Sequence[Interval]) -> list[list[int]]:
    """
    Connected components of the overlap graph, as lists of input indices.

    Components are ordered by their lowest index; indices inside a component
    are in BFS discovery order.
    """
    adj = _adjacency(intervals)
    comp_id = [-1] * len(intervals)
    components: list[list[int]] = []

    for root in range(len(intervals)):
        if comp_id[root] != -1:
            continue
        cid = len(components)
        comp_id[root] = cid
        members = [root]
        queue = deque([root])
        while queue:
            u = queue.popleft()
            for v in adj[u]:
                if comp_id[v] == -1:
                    comp_id[v] = cid
                    members.append(v)
                    queue.append(v)
        components.append(members)

    return components


def _pack_component(intervals: Sequence[Interval], members: list[int]) -> dict[int, int]:
    ordered = sorted(members, key=lambda i: (intervals[i].start_min, intervals[i].end_min, i))
    lane_ends: list[int] = []
    lane_of: dict[int, int] = {}

    for i in ordered:
        item = intervals[i]
        placed = -1
        for lane, lane_end in enumerate(lane_ends):
            if lane_end <= item.start_min:
                placed = lane
                break
        if placed == -1:
            lane_ends.append(item.end_min)
            placed = len(lane_ends) - 1
        else:
            lane_ends[placed] = item.end_min
        lane_of[i] = placed

    return lane_of


def pack_lanes(intervals: Sequence[Interval]) -> dict[Hashable, LaneAssignment]:
    """
    Assign (lane, lanes_in_group) to every interval id.

    Guarantee: two intervals of the same group sharing a lane never overlap.
    Same input (same order) -> same output.
    """
    out: dict[Hashable, LaneAssignment] = {}
    for members in overlap_components(intervals):
        lane_of = _pack_component(intervals, members)
        width = max(lane_of.values()) + 1
        for i, lane in lane_of.items():
            out[intervals[i].id] = LaneAssignment(lane=lane, lanes_in_group=width)
    return out
