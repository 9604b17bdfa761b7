"""Clash detection between blocks on the same day."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from .models import WEEK, ConflictPair, ScheduleBlock, Weekday

ByDay = Dict[Weekday, Tuple[ScheduleBlock, ...]]


def overlaps(a: ScheduleBlock, b: ScheduleBlock) -> bool:
    return a.day == b.day and a.start < b.end and b.start < a.end


def group_by_day(blocks: Iterable[ScheduleBlock]) -> ByDay:
    """Every weekday in week order, each with its blocks in input order."""

    grouped: Dict[Weekday, List[ScheduleBlock]] = {day: [] for day in WEEK}
    for block in blocks:
        grouped[block.day].append(block)
    return {day: tuple(items) for day, items in grouped.items()}


@dataclass(frozen=True)
class ConflictReport:
    by_day: ByDay
    pairs: Tuple[ConflictPair, ...]


def detect_conflicts(blocks: Iterable[ScheduleBlock]) -> ConflictReport:
    """Flag overlapping blocks and list each clashing pair once.

    Each day is sorted by start time (stable, so ties keep input order). Once
    a later block starts at or after block i ends, every block after it does
    too, so the inner scan stops there without missing nested blocks.
    """

    by_day: ByDay = {}
    pairs: List[ConflictPair] = []
    for day, day_blocks in group_by_day(blocks).items():
        ordered = sorted(day_blocks, key=lambda b: b.start)
        clashing = [False] * len(ordered)
        found: List[Tuple[int, int]] = []
        for i in range(len(ordered)):
            for j in range(i + 1, len(ordered)):
                if ordered[j].start >= ordered[i].end:
                    break
                clashing[i] = clashing[j] = True
                found.append((i, j))
        flagged = tuple(
            dataclasses.replace(b, clash=True) if flag else b
            for b, flag in zip(ordered, clashing)
        )
        by_day[day] = flagged
        pairs.extend(ConflictPair(day=day, a=flagged[i], b=flagged[j]) for i, j in found)

    unique: List[ConflictPair] = []
    seen = set()
    for pair in pairs:
        if pair.key in seen:
            continue
        seen.add(pair.key)
        unique.append(pair)
    if unique:
        logging.debug("Found %d clashing pairs", len(unique))
    return ConflictReport(by_day=by_day, pairs=tuple(unique))
