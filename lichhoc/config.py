"""
Named defaults and limits of the extraction engine.

Values that stand in for missing data live here so that callers and tests
can refer to them by name instead of repeating literals.
"""

from __future__ import annotations

from lichhoc.model import Weekday

# ---------------------------------------------------------------------------
# Input limits
# ---------------------------------------------------------------------------

# Longer input is truncated before matching.
MAX_INPUT_CHARS = 10_000

# ---------------------------------------------------------------------------
# Defaults for absent data
# ---------------------------------------------------------------------------

# Placeholder slot used by the line classifier when no time is recoverable.
DEFAULT_START_TIME = "07:00"
DEFAULT_END_TIME = "08:40"

# Week-table records without a nearby "Thứ"/"Tiết" marker.
DEFAULT_WEEKDAY = Weekday.MONDAY
DEFAULT_PERIOD = 1

# General grammar: "Tiết a" without an end period spans a .. a + span.
GENERAL_DEFAULT_SPAN = 2

# ---------------------------------------------------------------------------
# Matching windows (characters)
# ---------------------------------------------------------------------------

# Week-table grammar looks this far around a record for weekday/period.
CONTEXT_WINDOW = 500

# ---------------------------------------------------------------------------
# Output formatting
# ---------------------------------------------------------------------------

DESCRIPTION_SEPARATOR = ", "
