"""Errors raised while composing a routine."""

from __future__ import annotations


class RoutineError(Exception):
    """Base class for routine composition errors."""


class InvalidTimeFormat(RoutineError, ValueError):
    def __init__(self, value: object, reason: str = "expected HH:MM or HH:MM:SS") -> None:
        super().__init__(f"Invalid time {value!r}: {reason}")
        self.value = value
        self.reason = reason


class InvalidMeeting(RoutineError, ValueError):
    """A catalog meeting has an unknown day or an empty time range."""


class InvalidSlotTable(RoutineError, ValueError):
    """Slot table rows are unordered, overlapping or otherwise malformed."""


class InvalidCatalogRow(RoutineError, ValueError):
    """A catalog row whose shape cannot be read as a section."""
