"""Clip, split and bucket periods by calendar day."""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable, TypeVar

from timesheet_engine.intervals import as_utc, day_key
from timesheet_engine.schema import Period
from timesheet_engine.splitting import check_period, split_by_date

log = logging.getLogger(__name__)

P = TypeVar("P", bound=Period)


def _normalise(period: P) -> P:
    if period.start.tzinfo is timezone.utc and period.end.tzinfo is timezone.utc:
        return period
    return replace(period, start=as_utc(period.start), end=as_utc(period.end))


def prepare(periods: Iterable[P], since: datetime) -> dict[str, list[P]]:
    """Index periods by UTC day key for the lookback starting at ``since``.

    Naive bounds are read as UTC. Periods ending before ``since`` are
    dropped, periods straddling it are clipped to start at ``since``. The
    survivors are split into day-local segments, stably sorted by start and
    grouped by the day their segment starts on.
    """

    since = as_utc(since)
    items = [_normalise(period) for period in periods]
    for period in items:
        check_period(period)

    recent = [period for period in items if period.end >= since]
    clipped = [period if period.start >= since else replace(period, start=since) for period in recent]
    segments = [segment for period in clipped for segment in split_by_date(period)]

    buckets: dict[str, list[P]] = defaultdict(list)
    for segment in sorted(segments, key=lambda it: it.start):
        buckets[day_key(segment.start)].append(segment)

    log.debug(
        "prepared %d of %d periods into %d segments over %d days",
        len(clipped),
        len(items),
        len(segments),
        len(buckets),
    )
    return dict(buckets)
