"""
Conflict detection.

Given recognized events, detect overlaps on the same date ("trùng lịch").
Overlap rule:
    start < other_end AND end > other_start
"""

from __future__ import annotations

from typing import List, Sequence, Tuple

from lichhoc.model import Event
from lichhoc.periods import clock_minutes


def _overlaps(a_start: int, a_end: int, b_start: int, b_end: int) -> bool:
    # touching endpoints (a_end == b_start) do not overlap
    return a_start < b_end and a_end > b_start


def find_conflicts(events: Sequence[Event]) -> List[Tuple[Event, Event]]:
    """
    Find overlapping event pairs (A,B), each pair appears once (i<j).
    Overlap only if same date AND time intervals overlap.
    """
    conflicts: List[Tuple[Event, Event]] = []

    parsed: List[Tuple[int, int, Event]] = []
    for ev in events:
        try:
            start = clock_minutes(ev.start_time)
            end = clock_minutes(ev.end_time)
        except ValueError:
            continue
        if end <= start:
            continue
        parsed.append((start, end, ev))

    # O(n^2) is fine for one week of classes
    for i in range(len(parsed)):
        s1, e1, ev1 = parsed[i]
        for j in range(i + 1, len(parsed)):
            s2, e2, ev2 = parsed[j]
            if ev1.date != ev2.date:
                continue
            if _overlaps(s1, e1, s2, e2):
                conflicts.append((ev1, ev2))

    return conflicts
