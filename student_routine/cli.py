"""Command line preview of a student's routine."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List
from zoneinfo import ZoneInfoNotFoundError

from . import render, sources, util
from .errors import RoutineError
from .pipeline import compose_routine
from .resolver import CatalogIndex
from .slots import DEFAULT_SLOTS, SlotTable
from .temporal import Scope
from .timemodel import snapshot


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Student routine preview")
    parser.add_argument("--tz", default=util.default_timezone())
    parser.add_argument(
        "--data-dir",
        default=str(sources.DATA_DIR),
        help="Directory holding connect_raw.json and routine_picks.json",
    )
    parser.add_argument("--slots", help="JSON file with the slot table")
    parser.add_argument(
        "--scope", choices=[s.value for s in Scope], default=Scope.SINGLE_DAY.value
    )
    parser.add_argument("--view", choices=["grid", "list"], default="grid")
    parser.add_argument(
        "--only-labs", action="store_true", help="Show only lab meetings"
    )
    parser.add_argument("--now", help="ISO datetime to use instead of the clock")
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> List[str]:
    tz = util.parse_timezone(args.tz)
    slots = SlotTable.load(Path(args.slots)) if args.slots else DEFAULT_SLOTS
    data = sources.DataSource(args.data_dir)
    catalog = CatalogIndex(data.catalog())
    logging.debug("Loaded %d catalog sections", len(catalog))
    picks = data.picks()
    snap = snapshot(tz, util.parse_now(args.now))

    routine = compose_routine(
        picks, catalog.lookup, snap, slots=slots, only_labs=args.only_labs
    )
    lines = [render.banner_text(routine.notice)]
    if routine.clash_count:
        lines.append(f"{routine.clash_count} clashes")
        lines.extend(render.describe_pair(p) for p in routine.pairs)
    else:
        lines.append("No clashes")
    for missing in routine.skipped:
        lines.append(
            f"Not offered: {missing.pick.course_code}-{missing.pick.section_name}"
        )

    scope = Scope(args.scope)
    if scope is Scope.FULL_WEEK:
        days = render.today_first(routine.snapshot.day)
    else:
        days = routine.days(scope)
    if args.view == "list":
        lines.extend(render.list_lines(routine, days))
    else:
        lines.extend(render.grid_lines(routine, days))
        for item in routine.unaligned:
            lines.append("Not on the grid: " + render.block_line(item.block))
    return lines


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    util.configure_logging(args.verbose)
    try:
        lines = run(args)
    except (RoutineError, OSError, ValueError, ZoneInfoNotFoundError) as exc:
        logging.error("%s", exc)
        return 1
    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
