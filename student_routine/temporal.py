"""Current and next block tracking for a given time snapshot."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from .conflicts import ByDay
from .models import WEEK, BlockKind, ScheduleBlock, TemporalSnapshot, Weekday


class Scope(Enum):
    SINGLE_DAY = "today"
    FULL_WEEK = "week"


def is_current(block: ScheduleBlock, snap: TemporalSnapshot) -> bool:
    return block.day == snap.day and block.start <= snap.minute < block.end


def current_blocks(
    blocks: Iterable[ScheduleBlock], snap: TemporalSnapshot
) -> List[ScheduleBlock]:
    return sorted((b for b in blocks if is_current(b, snap)), key=lambda b: b.start)


def next_block(
    blocks: Iterable[ScheduleBlock], day: Weekday, minute: int
) -> Optional[ScheduleBlock]:
    upcoming = [b for b in blocks if b.day == day and b.start > minute]
    if not upcoming:
        return None
    return min(upcoming, key=lambda b: (b.start, b.course_code))


def _priority(block: ScheduleBlock):
    return (0 if block.kind is BlockKind.LAB else 1, block.start, block.course_code)


@dataclass(frozen=True)
class Notice:
    """What the current/next banner shows for the snapshot's day.

    When several blocks run at once (a class inside its lab, or a clash) all
    of them are reported: ``current`` is the lab if there is one, otherwise
    the earliest started, and the others are in ``also_current``.
    """

    current: Optional[ScheduleBlock]
    next: Optional[ScheduleBlock]
    also_current: Tuple[ScheduleBlock, ...] = ()


def annotate(by_day: ByDay, snap: TemporalSnapshot) -> ByDay:
    return {
        day: tuple(
            dataclasses.replace(b, is_now=True) if is_current(b, snap) else b
            for b in blocks
        )
        for day, blocks in by_day.items()
    }


def notice(by_day: ByDay, snap: TemporalSnapshot) -> Notice:
    today = by_day.get(snap.day, ())
    now = sorted(current_blocks(today, snap), key=_priority)
    return Notice(
        current=now[0] if now else None,
        next=next_block(today, snap.day, snap.minute),
        also_current=tuple(now[1:]),
    )


def day_order(scope: Scope, today: Weekday) -> List[Weekday]:
    if scope is Scope.SINGLE_DAY:
        return [today]
    return list(WEEK)
