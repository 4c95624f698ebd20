"""Clock-time arithmetic for attendance and shifts."""

import re
from typing import Optional

HHMM_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

MINUTES_PER_DAY = 24 * 60


def validate_hhmm(value: str) -> str:
    """Return *value* unchanged if it is a 24h ``HH:MM`` time, else raise ValueError."""
    if not isinstance(value, str) or not HHMM_PATTERN.match(value):
        raise ValueError(f"Invalid time {value!r}, expected HH:MM")
    return value


def minutes_since_midnight(value: str) -> int:
    hours, minutes = validate_hhmm(value).split(":")
    return int(hours) * 60 + int(minutes)


def compute_total_hours(check_in: Optional[str], check_out: Optional[str]) -> Optional[float]:
    """Hours between two clock times on the same or the following day.

    A check-out earlier than the check-in is read as an overnight shift and
    wraps by 24h. Equal times give 0. Returns ``None`` if either side is missing.
    """
    if not check_in or not check_out:
        return None

    delta = minutes_since_midnight(check_out) - minutes_since_midnight(check_in)
    if delta < 0:
        delta += MINUTES_PER_DAY
    return delta / 60
