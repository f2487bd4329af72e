"""Rebuild ticket assignment/status intervals from a tracker changelog."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from functools import reduce
from typing import Iterable, Optional

from timesheet_engine.schema import Ticket

TRACKED_FIELDS = ("status", "assignee")


@dataclass(frozen=True)
class ChangeItem:
    field: str
    value: Optional[str]


@dataclass(frozen=True)
class HistoryEntry:
    """One changelog entry: the fields changed together at ``created``."""

    created: datetime
    items: tuple[ChangeItem, ...]


@dataclass(frozen=True)
class TicketState(Ticket):
    assignee: Optional[str] = None
    status: Optional[str] = None


def _apply(states: tuple[TicketState, ...], change: tuple[datetime, ChangeItem], horizon: datetime):
    created, item = change
    current = states[-1]
    if item.field not in TRACKED_FIELDS or getattr(current, item.field) == item.value:
        return states
    closed = replace(current, end=created)
    opened = replace(current, start=created, end=horizon, **{item.field: item.value})
    return states[:-1] + (closed, opened)


def reconstruct_states(
    activity_id: str,
    created: datetime,
    histories: Iterable[HistoryEntry],
    horizon: datetime,
) -> tuple[TicketState, ...]:
    """Fold a changelog into consecutive state snapshots of one ticket.

    The first snapshot starts when the ticket was created, without assignee or
    status. Every status or assignee change closes the running snapshot at the
    change time and opens a new one lasting until ``horizon``.
    """

    ordered = sorted(histories, key=lambda entry: entry.created)
    changes = [(entry.created, item) for entry in ordered for item in entry.items]
    initial = (TicketState(start=created, end=horizon, activity_id=activity_id),)
    return reduce(lambda states, change: _apply(states, change, horizon), changes, initial)


def work_intervals(
    states: Iterable[TicketState],
    account_id: str,
    statuses: Iterable[str] = ("In Progress",),
) -> list[Ticket]:
    """Return the periods a ticket was assigned to ``account_id`` in one of ``statuses``."""

    wanted = set(statuses)
    tickets = [
        Ticket(start=state.start, end=state.end, activity_id=state.activity_id)
        for state in states
        if state.assignee == account_id and state.status in wanted
    ]
    return sorted(tickets, key=lambda ticket: ticket.end, reverse=True)
