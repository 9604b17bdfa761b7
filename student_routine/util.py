"""Utility helpers."""

from __future__ import annotations

import logging
import os
from datetime import datetime
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "Asia/Dhaka"


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s:%(name)s:%(message)s")


def default_timezone() -> str:
    return os.getenv("ROUTINE_TIMEZONE") or DEFAULT_TIMEZONE


def parse_timezone(tz: str) -> ZoneInfo:
    return ZoneInfo(tz)


def parse_now(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None
