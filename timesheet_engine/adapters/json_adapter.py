"""JSON adapter for tickets and meetings."""

from __future__ import annotations

import json

from timesheet_engine.errors import InvalidPeriod, InvalidTimestamp
from timesheet_engine.intervals import parse as parse_timestamp
from timesheet_engine.schema import Meeting, Ticket


def _period_bounds(item: dict, index: int):
    missing = [field for field in ("from", "to") if not item.get(field)]
    if missing:
        raise ValueError(f"Item {index}: missing required fields {missing}")

    try:
        start = parse_timestamp(str(item["from"]))
        end = parse_timestamp(str(item["to"]))
    except InvalidTimestamp as exc:
        raise ValueError(f"Item {index}: malformed timestamp") from exc

    if start > end:
        raise InvalidPeriod(f"Item {index}: 'from' is after 'to'")
    return start, end


def _parse_ticket(item: dict, index: int) -> Ticket:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")
    activity_id = item.get("issue") or item.get("activity_id")
    if not activity_id:
        raise ValueError(f"Item {index}: missing required fields ['issue']")
    start, end = _period_bounds(item, index)
    return Ticket(start=start, end=end, activity_id=str(activity_id).strip())


def _parse_meeting(item: dict, index: int) -> Meeting:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")
    title = str(item.get("title") or "").strip()
    if not title:
        raise ValueError(f"Item {index}: missing required fields ['title']")
    start, end = _period_bounds(item, index)
    return Meeting(start=start, end=end, title=title)


def _load(file_path: str) -> list:
    with open(file_path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")
    return payload


def parse_tickets(file_path: str) -> list[Ticket]:
    """Parse a JSON file of ``{issue, from, to}`` objects."""

    return [_parse_ticket(item, i) for i, item in enumerate(_load(file_path), start=1)]


def parse_meetings(file_path: str) -> list[Meeting]:
    """Parse a JSON file of ``{title, from, to}`` objects."""

    return [_parse_meeting(item, i) for i, item in enumerate(_load(file_path), start=1)]
