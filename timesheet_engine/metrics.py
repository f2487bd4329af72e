"""Timesheet summary metrics."""

from __future__ import annotations

from collections import defaultdict

import numpy as np

from timesheet_engine.schema import DayRecord, Hours


def compute_metrics(timesheet: list[DayRecord], hours: Hours = Hours()) -> dict:
    """Compute totals, daily average, utilisation and hours per activity.

    ``hours_by_activity`` sums task durations before the daily ``include`` cap,
    so its total can exceed ``include_hours`` on capped days.
    """

    if not timesheet:
        return {
            "days": 0,
            "total_hours": 0.0,
            "include_hours": 0.0,
            "exclude_hours": 0.0,
            "avg_daily_hours": 0.0,
            "utilisation": 0.0,
            "hours_by_activity": {},
        }

    totals = np.array([record.total for record in timesheet], dtype=float)
    includes = np.array([record.include for record in timesheet], dtype=float)
    excludes = np.array([record.exclude for record in timesheet], dtype=float)

    by_activity: dict[str, float] = defaultdict(float)
    for record in timesheet:
        for task in record.tasks:
            by_activity[task.activity_id] += task.duration

    capacity = len(timesheet) * hours.working
    return {
        "days": len(timesheet),
        "total_hours": float(totals.sum()),
        "include_hours": float(includes.sum()),
        "exclude_hours": float(excludes.sum()),
        "avg_daily_hours": float(totals.mean()),
        "utilisation": float(totals.sum() / capacity) if capacity else 0.0,
        "hours_by_activity": {key: by_activity[key] for key in sorted(by_activity)},
    }
