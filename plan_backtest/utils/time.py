"""
Time semantics utilities for event timestamps and trading days.

Event instants carry their own timezone offset; all day-level matching
against bars is done on the UTC calendar day.
"""

from datetime import date, datetime, timedelta, timezone
from typing import Optional

MS_PER_DAY = 86_400_000


def parse_instant(value: str) -> datetime:
    """
    Parse an ISO-8601 instant that carries a timezone offset.

    A trailing ``Z`` is accepted as UTC.

    Args:
        value: ISO-8601 string, e.g. ``2024-06-07T17:15:00-04:00``

    Returns:
        Timezone-aware datetime

    Raises:
        ValueError: If the string is not ISO-8601 or has no offset
    """
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"

    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise ValueError(f"Timestamp has no timezone offset: {value}")
    return parsed


def utc_day(ts: datetime) -> date:
    """UTC calendar day of an aware instant."""
    return ts.astimezone(timezone.utc).date()


def utc_midnight(day: date) -> datetime:
    """Midnight UTC at the start of ``day``."""
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def today_utc(now: Optional[datetime] = None) -> date:
    """Current UTC calendar day, or that of ``now`` when given."""
    if now is None:
        now = datetime.now(timezone.utc)
    return utc_day(now)


def elapsed_days(start: datetime, end: datetime) -> float:
    """
    Fractional calendar days between two instants.

    Computed from whole milliseconds so that results match millisecond
    epoch arithmetic exactly.
    """
    delta_ms = (end - start) // timedelta(milliseconds=1)
    return delta_ms / MS_PER_DAY


def format_day(day: date) -> str:
    """Format a calendar day as ``YYYY-MM-DD``."""
    return day.isoformat()


def format_instant(ts: datetime) -> str:
    """
    Format an instant as UTC ISO-8601 with a ``Z`` suffix.

    Args:
        ts: Timezone-aware datetime

    Returns:
        ISO8601 formatted string, e.g. ``2024-06-07T20:00:00Z``
    """
    return ts.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")
