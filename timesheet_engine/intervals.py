"""Date/time primitives and period intersection.

All instants are timezone-aware and evaluated on the UTC calendar, so the
day a timestamp belongs to never depends on the host's local timezone.
"""

from __future__ import annotations

from datetime import datetime, time, timedelta, timezone
from typing import Optional

from timesheet_engine.errors import InvalidTimestamp
from timesheet_engine.schema import Period

WORK_START = time(8, 30)


def parse(text: str) -> datetime:
    """Parse an ISO-8601 string into an aware UTC datetime.

    Offset-less values are read as UTC. Fractional seconds may carry more
    than six digits (Python 3.11+ parser).
    """

    if not isinstance(text, str):
        raise InvalidTimestamp(f"Expected an ISO-8601 string, got {type(text).__name__}")

    value = text.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise InvalidTimestamp(f"Malformed timestamp '{text}'") from exc

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(ts: datetime) -> datetime:
    """Return the timestamp in UTC, reading naive values as UTC."""

    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


def date_start(ts: datetime) -> datetime:
    """Return UTC midnight of the timestamp's calendar day."""

    return datetime.combine(as_utc(ts).date(), time(0, 0), tzinfo=timezone.utc)


def work_anchor(ts: datetime) -> datetime:
    """Return the nominal working-day start (08:30 UTC) of the timestamp's day."""

    return datetime.combine(as_utc(ts).date(), WORK_START, tzinfo=timezone.utc)


def add_days(days: float, ts: datetime) -> datetime:
    return ts + timedelta(days=days)


def add_hours(hours: float, ts: datetime) -> datetime:
    return ts + timedelta(hours=hours)


def add_seconds(seconds: float, ts: datetime) -> datetime:
    return ts + timedelta(seconds=seconds)


def is_working_day(ts: datetime) -> bool:
    """Monday to Friday on the UTC calendar."""

    return as_utc(ts).weekday() < 5


def day_key(ts: datetime) -> str:
    """Grouping key of the timestamp's UTC calendar day, e.g. ``2020-03-02``."""

    return date_start(ts).date().isoformat()


def intersect(a: Period, b: Period) -> Optional[Period]:
    """Return the overlap of two periods, or ``None`` when they are disjoint."""

    if a.start <= b.end and b.start <= a.end:
        return Period(start=max(a.start, b.start), end=min(a.end, b.end))
    return None
