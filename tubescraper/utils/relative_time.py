import re
from datetime import date, datetime, time
from typing import Optional

# Months and years are fixed 30/365 day approximations.
MINUTES_PER_UNIT = {
    "minute": 1,
    "hour": 60,
    "day": 1440,
    "week": 10080,
    "month": 43200,
    "year": 525600,
}

_RELATIVE_RE = re.compile(r"(\d+)\s+([a-z]+?)s?\s+ago", re.IGNORECASE)


def parse_relative_minutes(text: Optional[str]) -> Optional[int]:
    """Turn "<N> <unit>(s) ago" into minutes, or None if it does not parse.

    >>> parse_relative_minutes("2 weeks ago")
    20160
    >>> parse_relative_minutes("Streamed 3 hours ago")
    180
    """
    if not text:
        return None
    match = _RELATIVE_RE.search(text)
    if not match:
        return None
    factor = MINUTES_PER_UNIT.get(match.group(2).lower())
    if factor is None:
        return None
    return int(match.group(1)) * factor


def is_after_cutoff(cutoff: Optional[datetime], text: Optional[str], now: Optional[datetime] = None) -> bool:
    """True when the item described by ``text`` is newer than ``cutoff``.

    No cutoff, or text that cannot be parsed, counts as after the cutoff.
    """
    if cutoff is None:
        return True
    minutes_ago = parse_relative_minutes(text)
    if minutes_ago is None:
        return True
    now = now or datetime.now()
    minutes_since_cutoff = int((now - cutoff).total_seconds() // 60)
    return minutes_ago < minutes_since_cutoff


def cutoff_from_date(day: date) -> datetime:
    """Local midnight at the start of ``day``."""
    return datetime.combine(day, time.min)
