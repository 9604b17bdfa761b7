"""Join a student's picks against the catalog into schedule blocks."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from .errors import InvalidMeeting
from .models import (
    BlockKind,
    CatalogSection,
    MissingCatalogEntry,
    Pick,
    ScheduleBlock,
    Weekday,
)
from .timemodel import parse_time

Lookup = Callable[[str, str], Optional[CatalogSection]]


def _field(obj: Any, name: str) -> Any:
    return getattr(obj, name) if hasattr(obj, name) else obj.get(name)


def _catalog_key(course_code: Any, section_name: Any) -> Tuple[str, str]:
    return str(course_code or "").strip().upper(), str(section_name or "").strip()


def normalize_picks(raw: Iterable[Any]) -> List[Pick]:
    """Trim picks, upper-case course codes and drop incomplete entries."""

    picks: List[Pick] = []
    for p in raw:
        if p is None:
            continue
        if isinstance(p, Pick):
            code, section = p.course_code, p.section_name
        else:
            code, section = _field(p, "courseCode"), _field(p, "sectionName")
        code, section = _catalog_key(code, section)
        if code and section:
            picks.append(Pick(course_code=code, section_name=section))
    return picks


class CatalogIndex:
    """Catalog sections keyed by upper-cased course code and section name."""

    def __init__(self, sections: Iterable[CatalogSection]) -> None:
        self._index: Dict[Tuple[str, str], CatalogSection] = {}
        for section in sections:
            self._index[_catalog_key(section.courseCode, section.sectionName)] = section

    def __len__(self) -> int:
        return len(self._index)

    def lookup(self, course_code: str, section_name: str) -> Optional[CatalogSection]:
        return self._index.get(_catalog_key(course_code, section_name))


@dataclass(frozen=True)
class Resolution:
    blocks: Tuple[ScheduleBlock, ...]
    skipped: Tuple[MissingCatalogEntry, ...]


def _block(
    section: CatalogSection,
    meeting: Any,
    kind: BlockKind,
    room: str,
    faculty: str,
) -> ScheduleBlock:
    if isinstance(meeting, Mapping):
        day, start_s, end_s = meeting.get("day"), meeting.get("startTime"), meeting.get("endTime")
    else:
        day, start_s, end_s = meeting.day, meeting.startTime, meeting.endTime
    code, section_name = _catalog_key(section.courseCode, section.sectionName)
    start = parse_time(start_s)
    end = parse_time(end_s)
    if start >= end:
        raise InvalidMeeting(
            f"{code}-{section_name} {kind.value} on {day}: {start_s} is not before {end_s}"
        )
    return ScheduleBlock(
        course_code=code,
        section_name=section_name,
        kind=kind,
        day=Weekday.parse(day),
        start=start,
        end=end,
        room=room,
        faculty=faculty,
    )


def blocks_for_section(section: CatalogSection) -> List[ScheduleBlock]:
    """One CLASS block per class meeting, then one LAB block per lab meeting."""

    blocks: List[ScheduleBlock] = []
    room = section.roomName or section.roomNumber or "?"
    faculty = section.faculties or "TBA"
    for meeting in section.class_schedules:
        blocks.append(_block(section, meeting, BlockKind.CLASS, room, faculty))

    lab_room = section.labRoomName or "?"
    lab_faculty = section.labFaculties or "TBA"
    for meeting in section.labSchedules or []:
        blocks.append(_block(section, meeting, BlockKind.LAB, lab_room, lab_faculty))
    return blocks


def resolve(picks: Iterable[Pick], lookup: Lookup) -> Resolution:
    """Expand picks into schedule blocks.

    Picks missing from the catalog are skipped and reported in
    ``Resolution.skipped``. Malformed meeting data raises.
    """

    blocks: List[ScheduleBlock] = []
    skipped: List[MissingCatalogEntry] = []
    picks = list(picks)
    for pick in picks:
        section = lookup(pick.course_code, pick.section_name)
        if section is None:
            logging.warning(
                "Section %s-%s not in catalog, skipping",
                pick.course_code,
                pick.section_name,
            )
            skipped.append(MissingCatalogEntry(pick))
            continue
        blocks.extend(blocks_for_section(section))
    logging.debug("Resolved %d picks into %d blocks", len(picks), len(blocks))
    return Resolution(blocks=tuple(blocks), skipped=tuple(skipped))
