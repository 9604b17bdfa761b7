"""Data models for routine blocks, slots and grid cells."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, List, Optional, Tuple, Union

from .errors import InvalidMeeting

MINUTES_PER_DAY = 24 * 60


class Weekday(Enum):
    SUNDAY = "SUNDAY"
    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"
    SATURDAY = "SATURDAY"

    @classmethod
    def parse(cls, text: str) -> "Weekday":
        """Accept a full day name or its three-letter prefix, any case."""
        value = str(text or "").strip().upper()
        if len(value) >= 3:
            for day in cls:
                if day.value == value or (len(value) == 3 and day.value.startswith(value)):
                    return day
        raise InvalidMeeting(f"Unknown day {text!r}")

    @classmethod
    def from_datetime(cls, dt: datetime) -> "Weekday":
        # datetime.weekday() counts from Monday; the week here starts on Sunday
        return WEEK[(dt.weekday() + 1) % 7]


WEEK: Tuple[Weekday, ...] = tuple(Weekday)


class BlockKind(Enum):
    CLASS = "CLASS"
    LAB = "LAB"


@dataclass(frozen=True)
class Pick:
    course_code: str
    section_name: str


@dataclass
class Meeting:
    day: str
    startTime: str
    endTime: str


@dataclass
class CatalogSection:
    """One row of the course catalog feed, keyed the way the feed keys it."""

    courseCode: str
    sectionName: str
    faculties: Optional[str] = None
    roomName: Optional[str] = None
    roomNumber: Optional[str] = None
    labFaculties: Optional[str] = None
    labRoomName: Optional[str] = None
    sectionSchedule: dict = field(default_factory=dict)
    labSchedules: List[Any] = field(default_factory=list)

    @property
    def class_schedules(self) -> List[Any]:
        schedule = self.sectionSchedule or {}
        return list(schedule.get("classSchedules") or [])


@dataclass(frozen=True)
class ScheduleBlock:
    course_code: str
    section_name: str
    kind: BlockKind
    day: Weekday
    start: int
    end: int
    room: str = "?"
    faculty: str = "TBA"
    clash: bool = False
    is_now: bool = False

    @property
    def label(self) -> str:
        return f"{self.course_code}-{self.section_name} ({self.kind.value.title()})"

    @property
    def duration(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class ConflictPair:
    day: Weekday
    a: ScheduleBlock
    b: ScheduleBlock

    @property
    def key(self) -> Tuple[Any, ...]:
        return (
            self.day,
            self.a.label,
            self.a.start,
            self.a.end,
            self.b.label,
            self.b.start,
            self.b.end,
        )


@dataclass(frozen=True)
class TimeSlot:
    id: str
    start: int
    end: int


@dataclass(frozen=True)
class TemporalSnapshot:
    day: Weekday
    minute: int


@dataclass(frozen=True)
class MissingCatalogEntry:
    pick: Pick


@dataclass(frozen=True)
class UnalignedBlock:
    block: ScheduleBlock


@dataclass(frozen=True)
class EmptyCell:
    pass


@dataclass(frozen=True)
class BreakCell:
    pass


@dataclass(frozen=True)
class HiddenCell:
    pass


@dataclass(frozen=True)
class BlockHead:
    """A block starting at this slot, plus any blocks stacked under it.

    ``span`` is the block's own slot count. Blocks that start on the same slot,
    or inside the rows this head already covers, are kept in ``stacked`` and
    ``row_span`` grows to cover the longest of them.
    """

    block: ScheduleBlock
    span: int
    stacked: Tuple["BlockHead", ...] = ()
    row_span: int = 0

    def __post_init__(self) -> None:
        if self.row_span < self.span:
            object.__setattr__(self, "row_span", self.span)

    @property
    def blocks(self) -> Tuple[ScheduleBlock, ...]:
        return (self.block,) + tuple(h.block for h in self.stacked)


Cell = Union[EmptyCell, BreakCell, BlockHead, HiddenCell]

EMPTY = EmptyCell()
BREAK = BreakCell()
HIDDEN = HiddenCell()
