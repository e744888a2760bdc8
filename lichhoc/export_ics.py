"""
iCalendar (.ics) export.

We convert recognized events into a calendar file that can be imported into:
- Google Calendar
- Outlook
- Apple Calendar
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from pathlib import Path
from typing import Sequence

from lichhoc.model import Event


# RFC 5545 TEXT escapes, applied in a single pass
_ICS_TEXT_ESCAPES = str.maketrans({"\\": "\\\\", ";": "\\;", ",": "\\,", "\n": "\\n"})


def _ics_escape(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n").translate(_ICS_TEXT_ESCAPES)


def _dt_local(day: date, time_hh_mm: str) -> str:
    """
    Convert date + 'HH:MM' to ICS local datetime string 'YYYYMMDDTHHMM00'.
    """
    dt = datetime.strptime(f"{day.isoformat()} {time_hh_mm}", "%Y-%m-%d %H:%M")
    return dt.strftime("%Y%m%dT%H%M00")


def export_events_to_ics(events: Sequence[Event], out_path: str | Path) -> int:
    """
    Export events to an .ics file. Returns number of exported events.

    Event ids only live for one parse call, so the UID also carries the
    date and start time.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append("BEGIN:VCALENDAR")
    lines.append("VERSION:2.0")
    lines.append("PRODID:-//lichhoc//VI")
    lines.append("CALSCALE:GREGORIAN")

    dtstamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")

    count = 0
    for ev in events:
        try:
            dtstart = _dt_local(ev.date, ev.start_time)
            dtend = _dt_local(ev.date, ev.end_time)
        except ValueError:
            continue

        lines.append("BEGIN:VEVENT")
        lines.append(f"UID:{_ics_escape(f'{dtstart}-{ev.id}@lichhoc')}")
        lines.append(f"DTSTAMP:{dtstamp}")
        lines.append(f"DTSTART:{dtstart}")
        lines.append(f"DTEND:{dtend}")
        lines.append(f"SUMMARY:{_ics_escape(ev.title)}")
        if ev.location:
            lines.append(f"LOCATION:{_ics_escape(ev.location)}")
        if ev.description:
            lines.append(f"DESCRIPTION:{_ics_escape(ev.description)}")
        lines.append("END:VEVENT")
        count += 1

    lines.append("END:VCALENDAR")

    # ICS standard uses CRLF
    out.write_text("\r\n".join(lines) + "\r\n", encoding="utf-8")
    return count
