"""Lay blocks out on the slot table as a day by slot grid."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .conflicts import ByDay
from .models import (
    BREAK,
    EMPTY,
    HIDDEN,
    WEEK,
    BlockHead,
    Cell,
    ScheduleBlock,
    TimeSlot,
    UnalignedBlock,
    Weekday,
)
from .slots import SlotTable


def slot_span(slots: SlotTable, index: int, block: ScheduleBlock) -> int:
    """Number of slots from ``index`` that fit inside the block, at least 1."""

    span = 0
    for slot in list(slots)[index:]:
        if slot.start >= block.end:
            break
        if slot.start >= block.start and slot.end <= block.end:
            span += 1
    return max(span, 1)


@dataclass(frozen=True)
class Grid:
    slots: SlotTable
    cells: Dict[Weekday, Tuple[Cell, ...]]
    unaligned: Tuple[UnalignedBlock, ...] = ()

    def cell(self, day: Weekday, index: int) -> Cell:
        return self.cells[day][index]

    def heads(self, day: Weekday) -> List[BlockHead]:
        return [c for c in self.cells[day] if isinstance(c, BlockHead)]

    def rows(
        self, days: Optional[Sequence[Weekday]] = None
    ) -> Iterator[Tuple[TimeSlot, Dict[Weekday, Cell]]]:
        days = list(days) if days is not None else list(WEEK)
        for i, slot in enumerate(self.slots):
            yield slot, {d: self.cells[d][i] for d in days}


def _layout_day(
    slots: SlotTable, blocks: Sequence[ScheduleBlock], unaligned: List[UnalignedBlock]
) -> Tuple[Cell, ...]:
    heads: Dict[int, BlockHead] = {}
    group: Optional[int] = None
    for block in sorted(blocks, key=lambda b: b.start):
        index = slots.index_starting_at(block.start)
        if index is None:
            logging.debug("%s on %s does not start on a slot", block.label, block.day.value)
            unaligned.append(UnalignedBlock(block))
            continue
        span = slot_span(slots, index, block)
        if group is not None and index < group + heads[group].row_span:
            head = heads[group]
            heads[group] = BlockHead(
                block=head.block,
                span=head.span,
                stacked=head.stacked + (BlockHead(block=block, span=span),),
                row_span=max(head.row_span, index - group + span),
            )
        else:
            heads[index] = BlockHead(block=block, span=span)
            group = index

    hidden = set()
    for index, head in heads.items():
        hidden.update(range(index + 1, index + head.row_span))

    if blocks:
        earliest = min(b.start for b in blocks)
        latest = max(b.end for b in blocks)
    cells: List[Cell] = []
    for i, slot in enumerate(slots):
        if i in heads:
            cells.append(heads[i])
        elif i in hidden:
            cells.append(HIDDEN)
        elif blocks and earliest <= slot.start < latest:
            cells.append(BREAK)
        else:
            cells.append(EMPTY)
    return tuple(cells)


def build_grid(by_day: ByDay, slots: SlotTable) -> Grid:
    """Build the full week grid.

    Blocks that do not start exactly on a slot boundary are left out of the
    grid and listed in ``Grid.unaligned``; they still count towards the day's
    break range.
    """

    unaligned: List[UnalignedBlock] = []
    cells = {day: _layout_day(slots, by_day.get(day, ()), unaligned) for day in WEEK}
    return Grid(slots=slots, cells=cells, unaligned=tuple(unaligned))
