"""Conversions between wall-clock strings and minutes of the day."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

from .errors import InvalidTimeFormat
from .models import MINUTES_PER_DAY, TemporalSnapshot, Weekday


def parse_time(s: str) -> int:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into minutes since midnight."""

    if not isinstance(s, str):
        raise InvalidTimeFormat(s, "not a string")
    parts = s.strip().split(":")
    if len(parts) not in (2, 3):
        raise InvalidTimeFormat(s)
    if not all(p.isascii() and p.isdigit() and len(p) <= 2 for p in parts):
        raise InvalidTimeFormat(s, "components must be numeric")
    hour, minute = int(parts[0]), int(parts[1])
    second = int(parts[2]) if len(parts) == 3 else 0
    if not 0 <= hour <= 23:
        raise InvalidTimeFormat(s, "hour out of range")
    if not 0 <= minute <= 59:
        raise InvalidTimeFormat(s, "minute out of range")
    if not 0 <= second <= 59:
        raise InvalidTimeFormat(s, "second out of range")
    return hour * 60 + minute


def format_twelve_hour(t: Optional[int]) -> str:
    """Format minutes since midnight as ``h:mm AM``; ``None`` gives ``""``."""

    if t is None:
        return ""
    hour, minute = divmod(t % MINUTES_PER_DAY, 60)
    suffix = "PM" if hour >= 12 else "AM"
    return f"{hour % 12 or 12}:{minute:02d} {suffix}"


def format_range(start: int, end: int) -> str:
    return f"{format_twelve_hour(start)} - {format_twelve_hour(end)}"


def snapshot(tz: ZoneInfo, now: Optional[datetime] = None) -> TemporalSnapshot:
    """Read the wall clock in ``tz`` as a day and minute of the day.

    ``now`` pins the clock: an aware datetime is converted into ``tz``, a naive
    one is taken as already local.
    """

    if now is None:
        local = datetime.now(tz)
    elif now.tzinfo is None:
        local = now.replace(tzinfo=tz)
    else:
        local = now.astimezone(tz)
    return TemporalSnapshot(
        day=Weekday.from_datetime(local), minute=local.hour * 60 + local.minute
    )
