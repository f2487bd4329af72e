"""Working-hours configuration loaded from the environment."""

from __future__ import annotations

import os
from typing import Optional

from dotenv import load_dotenv

from timesheet_engine.schema import Hours

_ENV_FIELDS = {
    "working": "TIMESHEET_WORKING_HOURS",
    "lunch": "TIMESHEET_LUNCH_HOURS",
    "interrupts": "TIMESHEET_INTERRUPT_HOURS",
}


def _read_hours(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name}: expected a number of hours, got '{raw}'") from exc
    if value < 0:
        raise ValueError(f"{name}: hours must not be negative")
    return value


def load_hours(env_file: Optional[str] = None) -> Hours:
    """Build the working-hours budget from ``.env`` and the process environment.

    Variables already set in the environment take precedence over the file.
    """

    load_dotenv(env_file)
    defaults = Hours()
    return Hours(**{attr: _read_hours(name, getattr(defaults, attr)) for attr, name in _ENV_FIELDS.items()})
