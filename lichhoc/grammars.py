"""
Grammar chain (text -> captured fields).

Each grammar knows one timetable layout seen in the wild. The matcher
tries them in a fixed order and keeps the output of the first grammar that
produces at least one event; later grammars are not consulted and results
are never merged.

Order (most specific first):
1. annotated  - the emoji list a student portal exports
                ("📌 Thứ 6 (16/05/2025)", "⏰ Tiết 1 - 2 (7h00 - 8h40)", ...)
2. week_table - a week page with "Tuần N [từ ngày .. đến ngày ..]" and
                "Nhóm: / Phòng: / GV:" records
3. general    - "Thứ N ... Tiết a-b ... Title" anywhere, loose spacing
4. lines      - block/line classifier for anything else
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import List, Optional, Sequence, Tuple

from lichhoc import config
from lichhoc.assemble import LEADING_DECOR_RE, Assembler, split_annotations
from lichhoc.model import Event, RawFields, Weekday
from lichhoc.periods import CLOCK_RANGE_RE, PERIOD_TIMES
from lichhoc.segment import WEEKDAY_MARKER_RE, segment, weekday_of
from lichhoc.week import WEEK_HEADER_RE, find_week_header, make_date

logger = logging.getLogger(__name__)


# Vietnamese letters (NFC): Latin-1 and Latin Extended up to "ỹ"
_L = "A-Za-zÀ-ỹ"

# "Tiết 1 - 2", "Tiết 1 - Tiết 3", "Tiết 7 9", "Tiết 4"
PERIOD_RE = re.compile(
    r"Tiết\s*(?P<p1>\d{1,2})(?:(?:\s*[-–]\s*(?:Tiết\s*)?|[ \t]+)(?P<p2>\d{1,2}))?(?![\d:h])",
    re.IGNORECASE,
)

# "(7h00 - 8h40)" or "7h00 - 8h40" right after a period
_CLOCK_AFTER = r"[ \t]*\(?[ \t]*(?P<clock>" + CLOCK_RANGE_RE.pattern + r")[ \t]*\)?"
_CLOCK_AFTER_RE = re.compile(_CLOCK_AFTER, re.IGNORECASE)

# end of a free-text field: the next weekday/period/week marker or field label
_FIELD_END = r"(?:Thứ|Tiết|Tuần)\s*\d|Chủ\s*nhật|(?:Nhóm|Phòng|GV|Giảng\s*viên)\s*:"


def _gap(n: int, least: int = 0) -> str:
    # between least and n characters, never running into the next "Thứ N"
    return rf"(?:(?!Thứ\s*\d)[\s\S]){{{least},{n}}}?"


def _int(value: Optional[str]) -> Optional[int]:
    return int(value) if value else None


def _weekday(numeral: Optional[str]) -> Optional[Weekday]:
    return Weekday.from_numeral(int(numeral)) if numeral else None


def _credits(theory: Optional[str], practice: Optional[str]) -> str:
    if theory is None or practice is None:
        return ""
    return f"{theory}+{practice}"


class Grammar:
    """
    One extraction strategy. ``scan`` returns candidates in text order.
    """

    name = "grammar"

    def scan(self, text: str) -> List[RawFields]:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# 1. Explicit annotations
# ---------------------------------------------------------------------------


class AnnotatedGrammar(Grammar):
    """
    Fully labelled records:

        📌 Thứ 6 (16/05/2025)
        ⏰ Tiết 1 - 2 (7h00 - 8h40)
        📘 Phát triển ứng dụng di động đa nền tảng (2+0) - Mã học phần: DPM0123
        👨‍🏫 Giảng viên: Võ Văn Lên
        🏫 Phòng: K23-101

    Emoji are optional (OCR tends to lose them), so is the clock range.
    """

    name = "annotated"

    PATTERN = re.compile(
        r"Thứ\s*(?P<weekday>\d)\s*\(\s*(?P<day>\d{1,2})\s*/\s*(?P<month>\d{1,2})\s*/\s*(?P<year>\d{4})\s*\)"
        r"[\s\S]{0,80}?"
        r"Tiết\s*(?P<p1>\d{1,2})\s*[-–]\s*(?:Tiết\s*)?(?P<p2>\d{1,2})"
        r"[ \t]*(?P<clock>[^\n]{0,120})\n"
        r"\s*[^\w\n(]*(?P<title>[^\n]{1,200}?)[ \t]*(?=\n|$)"
        r"[\s\S]{0,160}?(?:Giảng\s*viên|GV)\s*:\s*(?P<instructor>[^\n]{1,100}?)[ \t]*(?=\n|$)"
        r"[\s\S]{0,160}?Phòng\s*:\s*(?P<room>[^\n]{1,60}?)[ \t]*(?=\n|$)",
        re.IGNORECASE,
    )

    GROUP_PATTERN = re.compile(r"Nhóm\s*:\s*(?P<group>[^\n]{1,60}?)[ \t]*(?=\n|$)", re.IGNORECASE)

    def _group(self, text: str, start: int, end: int) -> str:
        # "Nhóm:" may sit on any line of the record, up to the next weekday marker
        following = WEEKDAY_MARKER_RE.search(text, end)
        stop = following.start() if following else len(text)
        m = self.GROUP_PATTERN.search(text, start, stop)
        return m.group("group") if m else ""

    def scan(self, text: str) -> List[RawFields]:
        out: List[RawFields] = []
        for m in self.PATTERN.finditer(text):
            title, credits, code = split_annotations(m.group("title"))
            out.append(
                RawFields(
                    title=title,
                    weekday=_weekday(m.group("weekday")),
                    explicit_date=make_date(m.group("year"), m.group("month"), m.group("day")),
                    period_start=int(m.group("p1")),
                    period_end=int(m.group("p2")),
                    clock=m.group("clock").strip(" \t()"),
                    room=m.group("room"),
                    instructor=m.group("instructor"),
                    group=self._group(text, m.start(), m.end()),
                    course_code=code,
                    credits=credits,
                    offset=m.start(),
                )
            )
        return out


# ---------------------------------------------------------------------------
# 2. Week table
# ---------------------------------------------------------------------------


class WeekTableGrammar(Grammar):
    """
    Records of a week page, weekday and period somewhere around them:

        Tuần 38 [từ ngày 12/05/2025 đến ngày 18/05/2025]
        Thứ 6    Tiết 1 - 2
        Phát triển ứng dụng di động đa nền tảng (2+0) (DPM0123)
        Nhóm: CNTT.CQ.01 Phòng: K23-101 GV: Võ Văn Lên

    Only used when the week header is present.
    """

    name = "week_table"

    PATTERN = re.compile(
        rf"(?P<title>[{_L}][{_L} \t]{{0,150}}?)\s*"
        r"(?:\((?P<theory>\d+)\s*\+\s*(?P<practice>\d+)\)\s*)?"
        r"(?:\((?P<code>[A-Z0-9]+)\)\s*)?"
        r"Nhóm\s*:\s*(?P<group>[A-Z0-9.]+)\s*"
        r"Phòng\s*:\s*(?P<room>[A-Z0-9-]+)\s*"
        rf"GV\s*:\s*(?P<instructor>[{_L}](?:(?!{_FIELD_END})[{_L} \t]){{0,80}})",
        re.IGNORECASE,
    )

    def __init__(self, window: int = config.CONTEXT_WINDOW) -> None:
        self.window = window

    def _nearest(self, pattern: "re.Pattern[str]", text: str, start: int, end: int) -> Optional["re.Match[str]"]:
        # last hit before the record, else first hit after it
        before = list(pattern.finditer(text, max(0, start - self.window), start))
        if before:
            return before[-1]
        return pattern.search(text, end, min(len(text), end + self.window))

    def scan(self, text: str) -> List[RawFields]:
        if find_week_header(text) is None:
            return []

        out: List[RawFields] = []
        for m in self.PATTERN.finditer(text):
            marker = self._nearest(WEEKDAY_MARKER_RE, text, m.start(), m.end())
            weekday = weekday_of(marker) if marker else None

            clock = ""
            period = self._nearest(PERIOD_RE, text, m.start(), m.end())
            if period:
                p1 = int(period.group("p1"))
                p2 = _int(period.group("p2")) or p1
                written = _CLOCK_AFTER_RE.match(text, period.end())
                if written:
                    clock = written.group("clock")
            else:
                p1 = p2 = config.DEFAULT_PERIOD

            out.append(
                RawFields(
                    title=m.group("title"),
                    weekday=weekday if weekday is not None else config.DEFAULT_WEEKDAY,
                    period_start=p1,
                    period_end=p2,
                    clock=clock,
                    room=m.group("room"),
                    instructor=m.group("instructor"),
                    group=m.group("group"),
                    course_code=m.group("code") or "",
                    credits=_credits(m.group("theory"), m.group("practice")),
                    offset=m.start(),
                )
            )
        return out


# ---------------------------------------------------------------------------
# 3. General fallback
# ---------------------------------------------------------------------------

_LABEL_WORDS = r"(?:Thứ|Tiết|Nhóm|Phòng|GV|Giảng|Tuần|Mã)"


class GeneralGrammar(Grammar):
    """
    Weekday and period followed, somewhere, by a title-like run of letters.
    Group, room and instructor are picked up when they follow the title.
    """

    name = "general"

    PATTERN = re.compile(
        r"Thứ\s*(?P<weekday>\d)"
        + _gap(50, least=1)
        + r"Tiết\s*(?P<p1>\d{1,2})(?:(?:\s*[-–]\s*(?:Tiết\s*)?|[ \t]+)(?P<p2>\d{1,2}))?(?![\d:h])"
        + r"(?:" + _CLOCK_AFTER + r")?"
        + _gap(500)
        + rf"(?<![{_L}])(?!{_LABEL_WORDS}\b)"
        rf"(?P<title>[{_L}](?:(?!{_FIELD_END})[{_L} \t]){{2,150}})"
        r"(?:\((?P<theory>\d+)\s*\+\s*(?P<practice>\d+)\)[ \t]*)?"
        r"(?:\((?P<code>[A-Z0-9]+)\)[ \t]*)?"
        r"(?:" + _gap(100) + r"Nhóm\s*:\s*(?P<group>[\w.\-]+))?"
        r"(?:" + _gap(100) + r"Phòng\s*:\s*(?P<room>[\w.\-]+))?"
        r"(?:" + _gap(100) + rf"(?:GV|Giảng\s*viên)\s*:\s*(?P<instructor>[{_L}](?:(?!{_FIELD_END})[{_L} \t]){{0,80}}))?",
        re.IGNORECASE,
    )

    def scan(self, text: str) -> List[RawFields]:
        out: List[RawFields] = []
        for m in self.PATTERN.finditer(text):
            p1 = int(m.group("p1"))
            p2 = _int(m.group("p2"))
            if p2 is None:
                # never run past the last period of the day
                p2 = min(p1 + config.GENERAL_DEFAULT_SPAN, max(PERIOD_TIMES))
            out.append(
                RawFields(
                    title=m.group("title"),
                    weekday=_weekday(m.group("weekday")),
                    period_start=p1,
                    period_end=p2,
                    clock=m.group("clock") or "",
                    room=m.group("room") or "",
                    instructor=m.group("instructor") or "",
                    group=m.group("group") or "",
                    course_code=m.group("code") or "",
                    credits=_credits(m.group("theory"), m.group("practice")),
                    offset=m.start(),
                )
            )
        return out


# ---------------------------------------------------------------------------
# 4. Line classifier
# ---------------------------------------------------------------------------

_ROOM_LABEL_RE = re.compile(r"^Phòng(?:\s*học)?\s*:\s*", re.IGNORECASE)
_TEACHER_LABEL_RE = re.compile(r"^(?:GV|Giảng\s*viên)\s*:\s*", re.IGNORECASE)
_GROUP_LABEL_RE = re.compile(r"^Nhóm\s*:\s*", re.IGNORECASE)
_CODE_LABEL_RE = re.compile(r"^Mã(?:\s*học\s*phần|\s*HP)?\s*:\s*", re.IGNORECASE)
_MARKER_DATE_RE = re.compile(r"^\s*\(\s*(\d{1,2})\s*/\s*(\d{1,2})\s*/\s*(\d{4})\s*\)")


class LineGrammar(Grammar):
    """
    Last resort: one event per block, lines classified by their label.

    The first unlabelled line is the title, later unlabelled lines end up in
    the description. Blocks without a "Thứ N" marker are dated today; the
    time falls back to the placeholder slot when no "Tiết"/clock line exists.
    """

    name = "lines"

    @staticmethod
    def _take_text(fields: RawFields, line: str, remainder: List[str]) -> None:
        if fields.title:
            remainder.append(line)
            return
        title, credits, code = split_annotations(line)
        fields.title = title
        fields.credits = credits
        fields.course_code = fields.course_code or code

    def _scan_block(self, block_text: str, offset: int) -> RawFields:
        fields = RawFields(offset=offset)
        lines = [LEADING_DECOR_RE.sub("", ln.strip()) for ln in block_text.splitlines()]
        lines = [ln.strip() for ln in lines if ln.strip()]
        if not lines:
            return fields

        marker = WEEKDAY_MARKER_RE.match(lines[0])
        if marker:
            fields.weekday = weekday_of(marker)
            rest = lines[0][marker.end():]
            dm = _MARKER_DATE_RE.match(rest)
            if dm:
                fields.explicit_date = make_date(dm.group(3), dm.group(2), dm.group(1))
                rest = rest[dm.end():]
            rest = rest.strip(" \t-–:,")
            lines = ([rest] if rest else []) + lines[1:]

        remainder: List[str] = []
        for line in lines:
            if WEEK_HEADER_RE.search(line):
                continue
            if _ROOM_LABEL_RE.match(line):
                fields.room = _ROOM_LABEL_RE.sub("", line)
            elif _TEACHER_LABEL_RE.match(line):
                fields.instructor = _TEACHER_LABEL_RE.sub("", line)
            elif _GROUP_LABEL_RE.match(line):
                fields.group = _GROUP_LABEL_RE.sub("", line)
            elif _CODE_LABEL_RE.match(line):
                fields.course_code = _CODE_LABEL_RE.sub("", line)
            elif PERIOD_RE.match(line) and fields.period_start is None:
                period = PERIOD_RE.match(line)
                fields.period_start = int(period.group("p1"))
                fields.period_end = _int(period.group("p2"))
                rest = line[period.end():].strip(" \t-–:,")
                if CLOCK_RANGE_RE.search(rest):
                    fields.clock = rest
                elif rest:
                    self._take_text(fields, rest, remainder)
            elif CLOCK_RANGE_RE.match(line) and not fields.clock:
                fields.clock = line
            else:
                self._take_text(fields, line, remainder)

        fields.remainder = " ".join(remainder)
        return fields

    def scan(self, text: str) -> List[RawFields]:
        blocks = segment(text)
        if len(blocks) > 1:
            # a preamble before the first "Thứ N" is page chrome, not an event
            blocks = [b for b in blocks if b.has_marker]
        return [self._scan_block(block.text, block.offset) for block in blocks]


# ---------------------------------------------------------------------------
# Chain
# ---------------------------------------------------------------------------

GRAMMARS: Tuple[Grammar, ...] = (
    AnnotatedGrammar(),
    WeekTableGrammar(),
    GeneralGrammar(),
    LineGrammar(),
)


class GrammarMatcher:
    """
    Runs the grammar chain; first grammar with at least one event wins.
    """

    def __init__(self, grammars: Sequence[Grammar] = GRAMMARS) -> None:
        self.grammars = tuple(grammars)

    def match(self, text: str, anchor: date, today: date) -> Tuple[str, List[Event]]:
        """
        Return (grammar name, events); ("", []) if nothing matched.
        """
        for grammar in self.grammars:
            candidates = grammar.scan(text)
            if not candidates:
                continue
            events = Assembler(anchor, today).build_all(candidates)
            if events:
                logger.debug("Grammar %r produced %d event(s)", grammar.name, len(events))
                return grammar.name, events
            logger.debug("Grammar %r matched but yielded no usable event", grammar.name)
        return "", []
