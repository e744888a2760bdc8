"""
lichhoc - turn timetable text (OCR output, pasted portal pages) into calendar events.
"""

from lichhoc.model import Event, Weekday
from lichhoc.parse import parse, parse_html

__all__ = ["Event", "Weekday", "parse", "parse_html"]
