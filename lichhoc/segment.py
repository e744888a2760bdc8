"""
Split raw text into candidate per-event blocks.

Each "Thứ N" / "Chủ nhật" / "CN" marker starts a new block and stays inside
the block it introduces. Text without any marker is one single block.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, Optional

from lichhoc.model import Weekday


# upper-case "CN" on its own only, not the start of "CNTT" or "CN.01"
_SUNDAY_SHORT = r"(?-i:(?<![\w.])CN(?![\w.]))"

WEEKDAY_MARKER_RE = re.compile(r"Thứ\s*(\d)|Chủ\s*nhật|" + _SUNDAY_SHORT, re.IGNORECASE)

# zero-width split point in front of every marker
_BOUNDARY_RE = re.compile(r"(?=Thứ\s*\d|Chủ\s*nhật|" + _SUNDAY_SHORT + r")", re.IGNORECASE)


@dataclass(frozen=True)
class Block:
    text: str
    offset: int

    @property
    def has_marker(self) -> bool:
        return WEEKDAY_MARKER_RE.match(self.text.lstrip()) is not None


def weekday_of(marker: "re.Match[str]") -> Optional[Weekday]:
    """
    Weekday named by a WEEKDAY_MARKER_RE match.
    """
    numeral = marker.group(1)
    if numeral is None:
        return Weekday.SUNDAY
    return Weekday.from_numeral(int(numeral))


def segment(text: str) -> List[Block]:
    """
    Cut text in front of every weekday marker.

    Blank pieces are skipped, but the concatenation of all pieces (blank
    or not) is always the original text.
    """
    if not text or not text.strip():
        return []

    cuts = [m.start() for m in _BOUNDARY_RE.finditer(text) if m.start() > 0]
    bounds = [0] + cuts + [len(text)]

    blocks: List[Block] = []
    for start, end in zip(bounds, bounds[1:]):
        piece = text[start:end]
        if piece.strip():
            blocks.append(Block(text=piece, offset=start))
    return blocks
