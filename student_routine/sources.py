"""Load saved picks and catalog sections from JSON files."""

from __future__ import annotations

import dataclasses
import json
import logging
from pathlib import Path
from typing import Any, List

from .errors import InvalidCatalogRow
from .models import CatalogSection, Meeting, Pick
from .resolver import normalize_picks

DATA_DIR = Path("out/json")
CATALOG_FILE = "connect_raw.json"
PICKS_FILE = "routine_picks.json"
MEETING_FIELDS = tuple(f.name for f in dataclasses.fields(Meeting))


class DataSource:
    def __init__(self, data_dir: Path | str = DATA_DIR) -> None:
        self.data_dir = Path(data_dir)

    def _json_path(self, name: str) -> Path:
        return self.data_dir / name

    def get(self, name: str) -> Any:
        path = self._json_path(name)
        logging.debug("Reading %s", path)
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        # API responses wrap their payload as {"success": ..., "data": ...}
        if isinstance(data, dict) and "data" in data:
            return data["data"]
        return data

    def catalog(self) -> List[CatalogSection]:
        return parse_catalog(self.get(CATALOG_FILE) or [])

    def picks(self) -> List[Pick]:
        return parse_picks(self.get(PICKS_FILE))


def _meetings(row: dict, where: str, items: Any) -> List[Meeting]:
    if items is None:
        return []
    if not isinstance(items, list):
        raise InvalidCatalogRow(f"{where} must be a list, got {type(items).__name__}: {row!r}")
    meetings = []
    for item in items:
        if isinstance(item, Meeting):
            meetings.append(item)
            continue
        if not isinstance(item, dict):
            raise InvalidCatalogRow(f"{where} entry is not an object: {item!r}")
        missing = [k for k in MEETING_FIELDS if k not in item]
        if missing:
            raise InvalidCatalogRow(f"{where} entry lacks {', '.join(missing)}: {item!r}")
        meetings.append(Meeting(**{k: item[k] for k in MEETING_FIELDS}))
    return meetings


def parse_catalog(rows: List[dict]) -> List[CatalogSection]:
    if not isinstance(rows, list):
        raise InvalidCatalogRow(f"catalog must be a list of sections, got {type(rows).__name__}")
    fields = {f.name for f in dataclasses.fields(CatalogSection)}
    sections = []
    for row in rows:
        if not isinstance(row, dict):
            raise InvalidCatalogRow(f"catalog row is not an object: {row!r}")
        if not row.get("courseCode") or not row.get("sectionName"):
            logging.debug("Ignoring catalog row without course or section: %s", row)
            continue
        values = {k: v for k, v in row.items() if k in fields}
        schedule = values.get("sectionSchedule")
        if schedule is not None:
            if not isinstance(schedule, dict):
                raise InvalidCatalogRow(f"sectionSchedule must be an object: {row!r}")
            values["sectionSchedule"] = dict(
                schedule,
                classSchedules=_meetings(row, "classSchedules", schedule.get("classSchedules")),
            )
        values["labSchedules"] = _meetings(row, "labSchedules", values.get("labSchedules"))
        sections.append(CatalogSection(**values))
    return sections


def parse_picks(doc: Any) -> List[Pick]:
    if doc is None:
        return []
    if isinstance(doc, dict):
        doc = doc.get("picks") or []
    return normalize_picks(doc)
