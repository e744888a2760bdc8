"""
Class period -> clock time lookup.

The table mirrors the fixed institutional timetable (50 minute periods,
morning break after period 2, lunch after period 5).
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from lichhoc.model import PeriodTime


PERIOD_TIMES: Mapping[int, PeriodTime] = MappingProxyType(
    {
        1: PeriodTime("07:00", "07:50"),
        2: PeriodTime("08:00", "08:50"),
        3: PeriodTime("09:10", "10:00"),
        4: PeriodTime("10:10", "11:00"),
        5: PeriodTime("11:10", "12:00"),
        6: PeriodTime("13:00", "13:50"),
        7: PeriodTime("14:00", "14:50"),
        8: PeriodTime("15:00", "15:50"),
        9: PeriodTime("16:00", "16:50"),
        10: PeriodTime("17:00", "17:50"),
        11: PeriodTime("18:00", "18:50"),
        12: PeriodTime("19:00", "19:50"),
        13: PeriodTime("20:00", "20:50"),
    }
)


def period_time(period: int) -> PeriodTime:
    """
    Return the clock range of a period.

    Periods outside the table get an approximate 50 minute slot. Past the
    last period the table is continued one hour per period; below the first
    the period number is read as the hour. Hours are clamped to 0..23.
    """
    known = PERIOD_TIMES.get(period)
    if known is not None:
        return known

    last = max(PERIOD_TIMES)
    if period > last:
        hour = clock_minutes(PERIOD_TIMES[last].start) // 60 + period - last
    else:
        hour = period
    hour = min(max(hour, 0), 23)
    return PeriodTime(f"{hour:02d}:00", f"{hour:02d}:50")


def period_range(start: int, end: int) -> Tuple[str, str]:
    """
    Clock range covering periods start..end (inclusive).

    A reversed range (end < start) collapses to the start period.
    """
    if end < start:
        end = start
    return period_time(start).start, period_time(end).end


# ---------------------------------------------------------------------------
# Clock ranges written in the text
# ---------------------------------------------------------------------------

# "7h00 - 8h40", "07:00-08:40", "13h - 15h"
CLOCK_RANGE_RE = re.compile(
    r"(\d{1,2})\s*[h:]\s*(\d{2})?\s*[-–]\s*(\d{1,2})\s*[h:]\s*(\d{2})?",
    re.IGNORECASE,
)


def clock_minutes(hhmm: str) -> int:
    """
    Minutes since midnight of an 'HH:MM' string.
    """
    hours, minutes = hhmm.split(":")
    return int(hours) * 60 + int(minutes)


def parse_clock_range(text: str) -> Optional[Tuple[str, str]]:
    """
    Find a clock range in text and normalize it to ('HH:MM', 'HH:MM').

    Returns None if there is no range, a value is not a valid time of day,
    or the range does not move forward.
    """
    m = CLOCK_RANGE_RE.search(text or "")
    if not m:
        return None

    sh, sm, eh, em = m.group(1), m.group(2) or "00", m.group(3), m.group(4) or "00"
    if int(sh) > 23 or int(eh) > 23 or int(sm) > 59 or int(em) > 59:
        return None

    start = f"{int(sh):02d}:{sm}"
    end = f"{int(eh):02d}:{em}"
    if clock_minutes(start) >= clock_minutes(end):
        return None
    return start, end
