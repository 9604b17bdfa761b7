"""Plain-text views of a composed routine."""

from __future__ import annotations

from typing import List, Optional, Sequence

from .models import WEEK, BlockHead, BreakCell, ConflictPair, HiddenCell, ScheduleBlock, Weekday
from .pipeline import Routine
from .temporal import Notice
from .timemodel import format_twelve_hour

CELL_WIDTH = 18


def _times(block: ScheduleBlock) -> str:
    return f"{format_twelve_hour(block.start)}-{format_twelve_hour(block.end)}"


def describe_pair(pair: ConflictPair) -> str:
    a, b = pair.a, pair.b
    return (
        f"{pair.day.value}: {a.course_code}-{a.section_name} ({_times(a)}) "
        f"clashes with {b.course_code}-{b.section_name} ({_times(b)})"
    )


def banner_text(notice: Notice) -> str:
    if notice.current:
        b = notice.current
        text = f"NOW: {b.course_code} (Sec {b.section_name}) {b.kind.value} Room {b.room}"
        if notice.also_current:
            others = ", ".join(o.label for o in notice.also_current)
            text += f" (also {others})"
        return text
    if notice.next:
        b = notice.next
        return f"Next: {b.course_code} ({_times(b)}) in {b.room}"
    return "No more classes today."


def today_first(today: Optional[Weekday]) -> List[Weekday]:
    """Week order rotated so ``today`` leads; the plain week if unknown."""
    if today not in WEEK:
        return list(WEEK)
    return [today] + [d for d in WEEK if d is not today]


def block_line(block: ScheduleBlock) -> str:
    flags = ""
    if block.is_now:
        flags += " NOW"
    if block.clash:
        flags += " (CLASH)"
    return (
        f"{block.course_code} (Sec {block.section_name}) {block.kind.value}{flags} "
        f"{_times(block)} Faculty: {block.faculty} Room: {block.room}"
    )


def list_lines(routine: Routine, days: Sequence[Weekday]) -> List[str]:
    lines: List[str] = []
    for day in days:
        title = day.value
        if day is routine.snapshot.day:
            title += " (Today)"
        lines.append(title)
        blocks = routine.by_day.get(day, ())
        if not blocks:
            lines.append("  No classes.")
        for block in blocks:
            lines.append("  " + block_line(block))
    return lines


def _cell_text(cell) -> str:
    if isinstance(cell, BlockHead):
        text = "/".join(
            f"{b.course_code} {b.kind.value}{'*' if b.is_now else ''}" for b in cell.blocks
        )
        if any(b.clash for b in cell.blocks):
            text = "!" + text
        return text
    if isinstance(cell, HiddenCell):
        return "|"
    if isinstance(cell, BreakCell):
        return "BREAK"
    return ""


def grid_lines(routine: Routine, days: Sequence[Weekday]) -> List[str]:
    def fit(text: str) -> str:
        return text[:CELL_WIDTH].ljust(CELL_WIDTH)

    lines = [fit("TIME/DAY") + "".join(fit(d.value) for d in days)]
    now_index = routine.now_slot_index
    for i, (slot, cells) in enumerate(routine.grid.rows(days)):
        label = f"{format_twelve_hour(slot.start)}-{format_twelve_hour(slot.end)}"
        if i == now_index:
            label = ">" + label
        lines.append(fit(label) + "".join(fit(_cell_text(cells[d])) for d in days))
    return [line.rstrip() for line in lines]
