"""
Event assembly (captured fields -> Event).

Every grammar hands over a RawFields bundle; this module turns it into the
final Event:
- title cleaned from decorations and trailing "(2+0)" style suffixes
- date from the explicit date, else the weekday projected on the week anchor,
  else today
- time from the explicit clock range, else the period table, else the
  placeholder slot
- description joined from the parts that are actually present
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import Iterable, List, Optional, Tuple

from lichhoc.config import DEFAULT_END_TIME, DEFAULT_START_TIME, DESCRIPTION_SEPARATOR
from lichhoc.model import Event, RawFields
from lichhoc.periods import clock_minutes, parse_clock_range, period_range
from lichhoc.week import project_weekday

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Title helpers
# ---------------------------------------------------------------------------

# emoji, bullets, dashes in front of the first letter/digit
LEADING_DECOR_RE = re.compile(r"^[^\w(\[]+")

_TRAILING_PAREN_RE = re.compile(r"\s*\(([^()]*)\)\s*$")
_CREDITS_RE = re.compile(r"^\s*(\d+)\s*\+\s*(\d+)\s*$")
_CODE_SUFFIX_RE = re.compile(r"\s+[-–]\s+Mã\s*(?:học\s*phần|HP)?\s*:\s*(.+)$", re.IGNORECASE)


def split_annotations(raw_title: str) -> Tuple[str, str, str]:
    """
    Split a title line into (title, credits, course_code).

    Handles "Title (2+0)", "Title (2+0) (DPM123)" and
    "Title - Mã học phần: DPM123". Missing parts are "".
    """
    title = raw_title.strip()
    credits = ""
    code = ""

    m = _CODE_SUFFIX_RE.search(title)
    if m:
        code = m.group(1).strip()
        title = title[: m.start()]

    while True:
        m = _TRAILING_PAREN_RE.search(title)
        if not m:
            break
        inner = m.group(1).strip()
        credits_m = _CREDITS_RE.match(inner)
        if credits_m and not credits:
            credits = f"{credits_m.group(1)}+{credits_m.group(2)}"
        elif inner and not code:
            code = inner
        title = title[: m.start()]

    return title.strip(), credits, code


def clean_title(raw_title: str) -> str:
    """
    Title as stored in Event.title: single spaces, no leading glyphs,
    no trailing parenthetical annotations.
    """
    title = " ".join(raw_title.split())
    title = LEADING_DECOR_RE.sub("", title)
    while True:
        stripped = _TRAILING_PAREN_RE.sub("", title)
        if stripped == title:
            break
        title = stripped
    return title.strip(" -–:")


# ---------------------------------------------------------------------------
# Field resolution
# ---------------------------------------------------------------------------


def _resolve_times(fields: RawFields) -> Tuple[str, str]:
    clock = parse_clock_range(fields.clock) if fields.clock else None
    if clock is not None:
        return clock
    if fields.period_start is not None:
        end = fields.period_end if fields.period_end is not None else fields.period_start
        return period_range(fields.period_start, end)
    return DEFAULT_START_TIME, DEFAULT_END_TIME


def _slot_label(fields: RawFields) -> str:
    parts: List[str] = []
    if fields.weekday is not None:
        parts.append(fields.weekday.label)
    if fields.period_start is not None:
        end = fields.period_end if fields.period_end is not None else fields.period_start
        if end != fields.period_start:
            parts.append(f"Tiết {fields.period_start}-{end}")
        else:
            parts.append(f"Tiết {fields.period_start}")
    return DESCRIPTION_SEPARATOR.join(parts)


def compose_description(fields: RawFields) -> Optional[str]:
    """
    Join the optional fields that are present; None if none is.
    """
    parts = [
        f"Nhóm: {fields.group.strip()}" if fields.group.strip() else "",
        f"GV: {fields.instructor.strip()}" if fields.instructor.strip() else "",
        f"Mã học phần: {fields.course_code.strip()}" if fields.course_code.strip() else "",
        f"TC: {fields.credits.strip()}" if fields.credits.strip() else "",
        _slot_label(fields),
        " ".join(fields.remainder.split()),
    ]
    present = [p for p in parts if p]
    if not present:
        return None
    return DESCRIPTION_SEPARATOR.join(present)


# ---------------------------------------------------------------------------
# Assembler
# ---------------------------------------------------------------------------


class Assembler:
    """
    Builds Events for one parse call.

    Ids are sequential ("1", "2", ...) and only meaningful within the call.
    """

    def __init__(self, anchor: date, today: date) -> None:
        self.anchor = anchor
        self.today = today
        self._next_id = 1

    def resolve_date(self, fields: RawFields) -> date:
        if fields.explicit_date is not None:
            return fields.explicit_date
        if fields.weekday is not None:
            return project_weekday(self.anchor, fields.weekday)
        return self.today

    def build(self, fields: RawFields) -> Optional[Event]:
        """
        Turn one field bundle into an Event, or None if it has no usable title.
        """
        title = clean_title(fields.title)
        if not title:
            logger.debug("Dropping candidate at offset %d: no title", fields.offset)
            return None

        start, end = _resolve_times(fields)
        if clock_minutes(start) >= clock_minutes(end):
            logger.debug("Dropping %r: empty time range %s-%s", title, start, end)
            return None

        event = Event(
            id=str(self._next_id),
            title=title,
            date=self.resolve_date(fields),
            start_time=start,
            end_time=end,
            location=fields.room.strip() or None,
            description=compose_description(fields),
        )
        self._next_id += 1
        return event

    def build_all(self, candidates: Iterable[RawFields]) -> List[Event]:
        events: List[Event] = []
        for fields in candidates:
            event = self.build(fields)
            if event is not None:
                events.append(event)
        return events
