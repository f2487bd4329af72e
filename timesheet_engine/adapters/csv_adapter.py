"""CSV adapter for tickets and meetings."""

from __future__ import annotations

import csv
from typing import Callable, TypeVar

from timesheet_engine.errors import InvalidPeriod, InvalidTimestamp
from timesheet_engine.intervals import parse as parse_timestamp
from timesheet_engine.schema import Meeting, Period, Ticket

P = TypeVar("P", bound=Period)


def _period_bounds(row: dict, row_number: int):
    missing = [field for field in ("from", "to") if not row.get(field)]
    if missing:
        raise ValueError(f"Row {row_number}: missing required fields {missing}")

    try:
        start = parse_timestamp(row["from"])
        end = parse_timestamp(row["to"])
    except InvalidTimestamp as exc:
        raise ValueError(f"Row {row_number}: malformed timestamp") from exc

    if start > end:
        raise InvalidPeriod(f"Row {row_number}: 'from' is after 'to'")
    return start, end


def _parse_ticket(row: dict, row_number: int) -> Ticket:
    activity_id = (row.get("issue") or row.get("activity_id") or "").strip()
    if not activity_id:
        raise ValueError(f"Row {row_number}: missing required fields ['issue']")
    start, end = _period_bounds(row, row_number)
    return Ticket(start=start, end=end, activity_id=activity_id)


def _parse_meeting(row: dict, row_number: int) -> Meeting:
    title = (row.get("title") or "").strip()
    if not title:
        raise ValueError(f"Row {row_number}: missing required fields ['title']")
    start, end = _period_bounds(row, row_number)
    return Meeting(start=start, end=end, title=title)


def _parse(file_path: str, parse_row: Callable[[dict, int], P]) -> list[P]:
    with open(file_path, newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        if not reader.fieldnames:
            return []
        return [parse_row(row, row_number) for row_number, row in enumerate(reader, start=2)]


def parse_tickets(file_path: str) -> list[Ticket]:
    """Parse a CSV file with ``issue,from,to`` columns."""

    return _parse(file_path, _parse_ticket)


def parse_meetings(file_path: str) -> list[Meeting]:
    """Parse a CSV file with ``title,from,to`` columns."""

    return _parse(file_path, _parse_meeting)
