"""
Week anchor resolution.

A timetable page usually carries a header such as

    Tuần 38 [từ ngày 12/05/2025 đến ngày 18/05/2025]

Its first date anchors the week; records only say "Thứ N" and are
projected onto that week.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from lichhoc.model import Weekday

logger = logging.getLogger(__name__)


WEEK_HEADER_RE = re.compile(
    r"Tuần\s*(\d{1,2})\s*\[\s*từ\s+ngày\s+(\d{1,2})/(\d{1,2})/(\d{4})"
    r"\s+đến\s+ngày\s+(\d{1,2})/(\d{1,2})/(\d{4})\s*\]",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class WeekHeader:
    number: int
    start: date
    end: date


def make_date(year: str, month: str, day: str) -> Optional[date]:
    """
    Build a date from captured digits, None if the date does not exist.
    """
    try:
        return date(int(year), int(month), int(day))
    except ValueError:
        return None


def find_week_header(text: str) -> Optional[WeekHeader]:
    """
    Return the first well-formed week header in text, if any.
    """
    for m in WEEK_HEADER_RE.finditer(text):
        start = make_date(m.group(4), m.group(3), m.group(2))
        end = make_date(m.group(7), m.group(6), m.group(5))
        if start is None or end is None:
            logger.debug("Ignoring week header with invalid date: %r", m.group(0))
            continue
        return WeekHeader(number=int(m.group(1)), start=start, end=end)
    return None


def resolve_anchor(text: str, today: Optional[date] = None) -> date:
    """
    First day of the week the text talks about; today if it does not say.
    """
    header = find_week_header(text)
    if header is not None:
        return header.start
    return today if today is not None else date.today()


def project_weekday(anchor: date, weekday: Weekday) -> date:
    """
    First date on or after anchor that falls on weekday.
    """
    offset = (int(weekday) - anchor.weekday()) % 7
    return anchor + timedelta(days=offset)
