"""Per-day timesheet aggregation."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Callable, Sequence

from timesheet_engine import intervals as ts
from timesheet_engine.preparation import prepare
from timesheet_engine.schema import DayRecord, Hours, Meeting, Period, Task, Ticket

log = logging.getLogger(__name__)


def round_quarter(hours: float) -> float:
    """Round hours to the nearest quarter, halves rounding up."""

    return math.floor(hours * 4 + 0.5) / 4


def limit(hours: float, config: Hours) -> float:
    return min(config.working, hours)


def duration(interval: Period, config: Hours) -> float:
    """Billable hours of one interval: rounded, lunch deducted on long spans, capped."""

    hours = round_quarter((interval.end - interval.start).total_seconds() / 3600.0)
    threshold = config.working / 2 + config.lunch
    if hours >= threshold:
        hours -= config.lunch
    return limit(hours, config)


def _day_tasks(includes: Sequence[Ticket], window: Period, config: Hours) -> list[Task]:
    day = ts.date_start(window.start)
    tasks = []
    for ticket in includes:
        if ts.date_start(ticket.start) == day == ts.date_start(ticket.end):
            interval: Period | None = ticket
        else:
            interval = ts.intersect(ticket, window)
        if interval is None:
            continue
        tasks.append(
            Task(
                activity_id=ticket.activity_id,
                duration=duration(interval, config),
                start=interval.start,
                end=interval.end,
            )
        )
    return tasks


def compute(
    tickets: Sequence[Ticket],
    meetings: Sequence[Meeting],
    compute_days: int,
    hours: Hours = Hours(),
    clock: Callable[[], datetime] = ts.now,
) -> list[DayRecord]:
    """Build the timesheet for the last ``compute_days`` calendar days.

    Days are walked backward from today; weekends and days without any
    ticket activity are left out. The result is ordered most recent first.

    ``exclude`` models the interruption budget: whatever part of the included
    hours exceeds ``working - interrupts`` is excluded. The day's meetings are
    attached to the record but do not change the totals.
    """

    if compute_days <= 0:
        return []

    current = clock()
    since = ts.add_days(-(compute_days - 1), ts.date_start(current))
    ticket_buckets = prepare(tickets, since)
    meeting_buckets = prepare(meetings, since)

    work_start = ts.work_anchor(current)
    today = Period(start=work_start, end=ts.add_hours(hours.working + hours.lunch, work_start))
    log.debug("computing %d days since %s", compute_days, since.isoformat())

    timesheet = []
    for day in range(compute_days):
        window = Period(start=ts.add_days(-day, today.start), end=ts.add_days(-day, today.end))
        if not ts.is_working_day(window.start):
            log.debug("skipping non-working day %s", ts.day_key(window.start))
            continue

        key = ts.day_key(window.start)
        includes = ticket_buckets.get(key, [])
        excludes = meeting_buckets.get(key, [])
        tasks = _day_tasks(includes, window, hours)
        if not tasks:
            continue

        include = limit(round_quarter(sum(task.duration for task in tasks)), hours)
        exclude = max(0.0, include - (hours.working - hours.interrupts))
        record = DayRecord(
            date=window.start,
            total=include - exclude,
            include=include,
            exclude=exclude,
            tasks=tuple(tasks),
            meetings=tuple(excludes),
        )
        log.debug("%s: total=%.2f include=%.2f exclude=%.2f tasks=%d", key, record.total, include, exclude, len(tasks))
        timesheet.append(record)

    return timesheet
