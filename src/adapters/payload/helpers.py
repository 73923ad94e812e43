"""Filters and tests available inside payload templates."""

from __future__ import annotations

import time
from datetime import datetime, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_DATETIME_LAYOUT = "%Y-%m-%d %H:%M:%S"

_FAILED_STATUSES = frozenset({"failure", "error", "killed"})


def uppercasefirst(value: object) -> str:
    text = "" if value is None else str(value)
    return text[:1].upper() + text[1:]


def format_seconds(seconds: int) -> str:
    """Render a number of seconds as `1h2m3s`, `1m30s`, `45s`."""

    sign = "-" if seconds < 0 else ""
    hours, rest = divmod(abs(int(seconds)), 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{sign}{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{sign}{minutes}m{secs}s"
    return f"{sign}{secs}s"


def duration(started: int | None, finished: int | None) -> str:
    """Elapsed time between two unix timestamps."""

    return format_seconds(int(finished or 0) - int(started or 0))


def since(started: int | None) -> str:
    return duration(started, int(time.time()))


def format_datetime(timestamp: int | None, layout: str = DEFAULT_DATETIME_LAYOUT, zone: str = "UTC") -> str:
    """Unix timestamp -> formatted date in `zone` (IANA name)."""

    tz: tzinfo = timezone.utc
    if zone and zone.upper() != "UTC":
        try:
            tz = ZoneInfo(zone)
        except (ZoneInfoNotFoundError, ValueError):
            tz = timezone.utc
    return datetime.fromtimestamp(int(timestamp or 0), tz=tz).strftime(layout)


def is_success(status: object) -> bool:
    return str(status) == "success"


def is_failure(status: object) -> bool:
    return str(status) in _FAILED_STATUSES


FILTERS = {
    "uppercasefirst": uppercasefirst,
    "duration": duration,
    "since": since,
    "datetime": format_datetime,
}

TESTS = {
    "success": is_success,
    "failure": is_failure,
}
