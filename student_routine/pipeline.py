"""Full routine pass: resolve, detect clashes, annotate and lay out."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .conflicts import ByDay, detect_conflicts
from .grid import Grid, build_grid
from .models import (
    BlockHead,
    BlockKind,
    BreakCell,
    Cell,
    ConflictPair,
    HiddenCell,
    MissingCatalogEntry,
    Pick,
    ScheduleBlock,
    TemporalSnapshot,
    UnalignedBlock,
    Weekday,
)
from .resolver import Lookup, resolve
from .slots import DEFAULT_SLOTS, SlotTable
from .temporal import Notice, Scope, annotate, day_order, notice
from .timemodel import format_twelve_hour


@dataclass(frozen=True)
class Routine:
    snapshot: TemporalSnapshot
    by_day: ByDay
    pairs: Tuple[ConflictPair, ...]
    grid: Grid
    notice: Notice
    skipped: Tuple[MissingCatalogEntry, ...] = ()

    @property
    def unaligned(self) -> Tuple[UnalignedBlock, ...]:
        return self.grid.unaligned

    @property
    def clash_count(self) -> int:
        return sum(1 for blocks in self.by_day.values() for b in blocks if b.clash)

    @property
    def now_slot_index(self) -> Optional[int]:
        return self.grid.slots.index_at(self.snapshot.minute)

    def days(self, scope: Scope) -> List[Weekday]:
        return day_order(scope, self.snapshot.day)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "snapshot": {
                "day": self.snapshot.day.value,
                "minute": self.snapshot.minute,
            },
            "days": {
                day.value: [_block_dict(b) for b in blocks]
                for day, blocks in self.by_day.items()
            },
            "clashes": [
                {"day": p.day.value, "a": _block_dict(p.a), "b": _block_dict(p.b)}
                for p in self.pairs
            ],
            "clash_count": self.clash_count,
            "grid": {
                "slots": [
                    {"id": s.id, "start": s.start, "end": s.end} for s in self.grid.slots
                ],
                "cells": {
                    day.value: [_cell_dict(c) for c in cells]
                    for day, cells in self.grid.cells.items()
                },
            },
            "current": _block_dict(self.notice.current),
            "also_current": [_block_dict(b) for b in self.notice.also_current],
            "next": _block_dict(self.notice.next),
            "skipped": [
                {"courseCode": s.pick.course_code, "sectionName": s.pick.section_name}
                for s in self.skipped
            ],
            "unaligned": [_block_dict(u.block) for u in self.unaligned],
        }


def _block_dict(block: Optional[ScheduleBlock]) -> Optional[Dict[str, Any]]:
    if block is None:
        return None
    return {
        "courseCode": block.course_code,
        "sectionName": block.section_name,
        "type": block.kind.value,
        "day": block.day.value,
        "start": block.start,
        "end": block.end,
        "startText": format_twelve_hour(block.start),
        "endText": format_twelve_hour(block.end),
        "room": block.room,
        "faculty": block.faculty,
        "label": block.label,
        "clash": block.clash,
        "isNow": block.is_now,
    }


def _cell_dict(cell: Cell) -> Dict[str, Any]:
    if isinstance(cell, BlockHead):
        return {
            "state": "block",
            "span": cell.row_span,
            "blocks": [
                dict(_block_dict(h.block), span=h.span)
                for h in (cell,) + cell.stacked
            ],
        }
    if isinstance(cell, HiddenCell):
        return {"state": "hidden"}
    if isinstance(cell, BreakCell):
        return {"state": "break"}
    return {"state": "empty"}


def compose_routine(
    picks: Iterable[Pick],
    lookup: Lookup,
    snap: TemporalSnapshot,
    *,
    slots: SlotTable = DEFAULT_SLOTS,
    only_labs: bool = False,
) -> Routine:
    """Run a full pass over the student's picks for one time snapshot.

    Clash pairs always come from every block; ``only_labs`` narrows what the
    day lists, grid and banner show.
    """

    resolution = resolve(picks, lookup)
    report = detect_conflicts(resolution.blocks)
    by_day = report.by_day
    if only_labs:
        by_day = {
            day: tuple(b for b in blocks if b.kind is BlockKind.LAB)
            for day, blocks in by_day.items()
        }
    by_day = annotate(by_day, snap)
    grid = build_grid(by_day, slots)
    if resolution.skipped:
        logging.info("%d picks were not found in the catalog", len(resolution.skipped))
    return Routine(
        snapshot=snap,
        by_day=by_day,
        pairs=report.pairs,
        grid=grid,
        notice=notice(by_day, snap),
        skipped=resolution.skipped,
    )
