"""Core data schema for timesheet periods and day records."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Period:
    """Closed time range of aware UTC datetimes, start <= end."""

    start: datetime
    end: datetime


@dataclass(frozen=True)
class Ticket(Period):
    """Period spent on a tracked work item."""

    activity_id: str


@dataclass(frozen=True)
class Meeting(Period):
    """Period blocked by a calendar event."""

    title: str


@dataclass(frozen=True)
class Task:
    activity_id: str
    duration: float
    start: datetime
    end: datetime


@dataclass(frozen=True)
class DayRecord:
    """One working day of the timesheet."""

    date: datetime
    total: float
    include: float
    exclude: float
    tasks: tuple[Task, ...]
    meetings: tuple[Meeting, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Hours:
    """Working-day budget in hours."""

    working: float = 8.0
    lunch: float = 1.0
    interrupts: float = 2.0
