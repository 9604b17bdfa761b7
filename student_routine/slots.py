"""Institutional slot table used to lay out the weekly grid."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple

from .errors import InvalidSlotTable, InvalidTimeFormat
from .models import TimeSlot
from .timemodel import parse_time

DEFAULT_SLOT_ROWS = [
    {"id": "S1", "start": "08:00:00", "end": "09:20:00"},
    {"id": "S2", "start": "09:30:00", "end": "10:50:00"},
    {"id": "S3", "start": "11:00:00", "end": "12:20:00"},
    {"id": "S4", "start": "12:30:00", "end": "13:50:00"},
    {"id": "S5", "start": "14:00:00", "end": "15:20:00"},
    {"id": "S6", "start": "15:30:00", "end": "16:50:00"},
    {"id": "S7", "start": "17:00:00", "end": "18:20:00"},
]


class SlotTable:
    def __init__(self, slots: Iterable[TimeSlot]) -> None:
        self._slots: Tuple[TimeSlot, ...] = tuple(slots)
        seen = set()
        prev: Optional[TimeSlot] = None
        for slot in self._slots:
            if slot.start >= slot.end:
                raise InvalidSlotTable(f"Slot {slot.id} ends before it starts")
            if slot.id in seen:
                raise InvalidSlotTable(f"Duplicate slot id {slot.id}")
            if prev is not None and slot.start < prev.end:
                raise InvalidSlotTable(
                    f"Slot {slot.id} overlaps or precedes slot {prev.id}"
                )
            seen.add(slot.id)
            prev = slot

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, str]]) -> "SlotTable":
        slots: List[TimeSlot] = []
        for row in rows:
            try:
                slots.append(
                    TimeSlot(
                        id=str(row["id"]),
                        start=parse_time(row["start"]),
                        end=parse_time(row["end"]),
                    )
                )
            except KeyError as exc:
                raise InvalidSlotTable(f"Slot row missing {exc.args[0]!r}") from exc
            except InvalidTimeFormat as exc:
                raise InvalidSlotTable(str(exc)) from exc
        return cls(slots)

    @classmethod
    def load(cls, path: Path) -> "SlotTable":
        with Path(path).open("r", encoding="utf-8") as f:
            return cls.from_rows(json.load(f))

    def __len__(self) -> int:
        return len(self._slots)

    def __iter__(self) -> Iterator[TimeSlot]:
        return iter(self._slots)

    def __getitem__(self, index: int) -> TimeSlot:
        return self._slots[index]

    def __repr__(self) -> str:
        ids = ",".join(s.id for s in self._slots)
        return f"SlotTable({ids})"

    def index_at(self, minute: int) -> Optional[int]:
        """Index of the slot whose ``[start, end)`` holds ``minute``."""
        for i, slot in enumerate(self._slots):
            if slot.start <= minute < slot.end:
                return i
        return None

    def index_starting_at(self, minute: int) -> Optional[int]:
        for i, slot in enumerate(self._slots):
            if slot.start == minute:
                return i
        return None


DEFAULT_SLOTS = SlotTable.from_rows(DEFAULT_SLOT_ROWS)
