"""Split periods into calendar-day segments."""

from __future__ import annotations

from dataclasses import replace
from typing import TypeVar

from timesheet_engine.errors import InvalidPeriod
from timesheet_engine.intervals import add_days, add_seconds, date_start
from timesheet_engine.schema import Period

P = TypeVar("P", bound=Period)


def check_period(period: Period) -> None:
    if period.start > period.end:
        raise InvalidPeriod(f"Period starts after it ends: {period.start.isoformat()} > {period.end.isoformat()}")


def split_by_date(period: P) -> list[P]:
    """Partition a period into segments that each lie within one UTC day.

    A same-day period is returned as-is. Otherwise the first segment ends one
    second before the following midnight, every whole day in between becomes
    a full-day segment, and the last segment runs from the last midnight to
    ``period.end`` (a single instant when the period ends exactly at midnight).
    Segments keep the payload of the input through ``dataclasses.replace``.
    """

    check_period(period)
    start = date_start(period.start)
    end = date_start(period.end)
    if start == end:
        return [period]

    segments = [replace(period, end=add_seconds(-1, add_days(1, start)))]
    day = add_days(1, start)
    while day < end:
        segments.append(replace(period, start=day, end=add_seconds(-1, add_days(1, day))))
        day = add_days(1, day)
    segments.append(replace(period, start=end))
    return segments
