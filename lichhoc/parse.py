"""
Parsing (timetable text -> Event records).

- Normalizes the raw text (Unicode NFC, line endings, odd spaces)
- Resolves the week anchor once per call
- Runs the grammar chain and returns the events of the first grammar that
  recognizes anything

Important rules:
- Pure function: no I/O, no state kept between calls
- Unrecognized text is not an error, it simply yields no events
- Only a non-string argument raises
"""

from __future__ import annotations

import logging
import unicodedata
from datetime import date
from pathlib import Path
from typing import List, Optional

from bs4 import BeautifulSoup

from lichhoc.config import MAX_INPUT_CHARS
from lichhoc.grammars import GrammarMatcher
from lichhoc.model import Event
from lichhoc.week import resolve_anchor

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

_SPACE_TRANSLATION = str.maketrans(
    {
        "\u00a0": " ",  # no-break space
        "\u2007": " ",
        "\u202f": " ",
        "\u200b": None,  # zero width space
        "\ufeff": None,  # BOM
        "\t": " ",
    }
)


def normalize_text(text: str) -> str:
    """
    Bring OCR / pasted text into one canonical form.

    OCR output often carries decomposed diacritics ("e" + combining marks),
    which would defeat the label patterns, so everything is composed (NFC).
    """
    text = unicodedata.normalize("NFC", text)
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return text.translate(_SPACE_TRANSLATION)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse(
    text: str,
    today: Optional[date] = None,
    max_chars: int = MAX_INPUT_CHARS,
) -> List[Event]:
    """
    Extract calendar events from free timetable text.

    ``today`` stands in for the system date (week anchor fallback and the
    date of undated records). Events come back in the order they were found.
    """
    if not isinstance(text, str):
        raise TypeError(f"parse() expects str, got {type(text).__name__}")

    if not text.strip():
        return []

    text = normalize_text(text)
    if len(text) > max_chars:
        logger.warning("Input has %d characters, only the first %d are parsed", len(text), max_chars)
        text = text[:max_chars]

    today = today if today is not None else date.today()
    anchor = resolve_anchor(text, today)

    grammar, events = GrammarMatcher().match(text, anchor, today)
    if not events:
        logger.debug("No schedule recognized in %d characters of text", len(text))
    else:
        logger.debug("Recognized %d event(s) with grammar %r (anchor %s)", len(events), grammar, anchor)
    return events


def html_to_text(html: str) -> str:
    """
    Reduce a saved timetable web page to plain text, one cell per line.
    """
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup.get_text("\n", strip=True)


def parse_html(html: str, today: Optional[date] = None) -> List[Event]:
    """
    Same as parse(), for an HTML page instead of plain text.
    """
    if not isinstance(html, str):
        raise TypeError(f"parse_html() expects str, got {type(html).__name__}")
    return parse(html_to_text(html), today=today)


def parse_file(path: str | Path, today: Optional[date] = None, html: Optional[bool] = None) -> List[Event]:
    """
    Read a text or HTML file and parse it.

    ``html=None`` decides by file extension (.html / .htm).
    """
    p = Path(path)
    content = p.read_text(encoding="utf-8")
    if html is None:
        html = p.suffix.lower() in (".html", ".htm")
    if html:
        return parse_html(content, today=today)
    return parse(content, today=today)
