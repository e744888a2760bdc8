"""
Central data model definitions used across the project.

This module defines the canonical structure of the recognized records so that:
- all grammars hand the same field bundle to the assembler
- the Event record looks the same to every consumer (CLI, ICS export, conflicts)
- weekday numerals are converted in exactly one place
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import IntEnum
from typing import Any, Dict, Optional


class Weekday(IntEnum):
    """
    Day of the week, numbered like ``date.weekday()`` (Monday = 0).

    Vietnamese timetables write "Thứ 2" for Monday up to "Thứ 7" for
    Saturday. Sunday ("Chủ nhật") shows up as numeral 1 in some layouts and
    as 8 in others; both map to SUNDAY here.
    """

    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def from_numeral(cls, numeral: int) -> Optional["Weekday"]:
        """
        Convert a "Thứ N" numeral into a Weekday, or None if N is not a day.
        """
        if numeral in (1, 8):
            return cls.SUNDAY
        if 2 <= numeral <= 7:
            return cls(numeral - 2)
        return None

    @property
    def label(self) -> str:
        # back to the way the timetable writes it
        if self is Weekday.SUNDAY:
            return "Chủ nhật"
        return f"Thứ {self.value + 2}"


@dataclass(frozen=True)
class PeriodTime:
    """
    Canonical clock range of one class period.
    """

    start: str
    end: str


@dataclass
class RawFields:
    """
    Fields captured by a grammar for one candidate event.

    Everything is optional here; the assembler decides whether the bundle
    is good enough to become an Event.
    """

    title: str = ""
    weekday: Optional[Weekday] = None
    explicit_date: Optional[date] = None
    period_start: Optional[int] = None
    period_end: Optional[int] = None
    clock: str = ""
    room: str = ""
    instructor: str = ""
    group: str = ""
    course_code: str = ""
    credits: str = ""
    remainder: str = ""
    offset: int = 0


@dataclass
class Event:
    """
    Represents one recognized calendar event (single date & time slot).

    ``id`` is only unique within one parse call; callers that persist
    events assign their own durable ids.
    """

    id: str
    title: str
    date: date
    start_time: str
    end_time: str
    location: Optional[str] = None
    description: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "date": self.date.isoformat(),
            "start_time": self.start_time,
            "end_time": self.end_time,
            "location": self.location,
            "description": self.description,
        }
