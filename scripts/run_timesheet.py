"""Compute a timesheet from ticket and meeting files."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from timesheet_engine import intervals
from timesheet_engine.adapters import csv_adapter, json_adapter
from timesheet_engine.config import load_hours
from timesheet_engine.metrics import compute_metrics
from timesheet_engine.timesheet import compute

log = logging.getLogger("timesheet_engine.cli")


def _load(path: Path, kind: str):
    suffix = path.suffix.lower()
    if suffix == ".csv":
        adapter = csv_adapter
    elif suffix == ".json":
        adapter = json_adapter
    else:
        raise ValueError("Unsupported input format, expected .csv or .json")
    return adapter.parse_tickets(str(path)) if kind == "tickets" else adapter.parse_meetings(str(path))


def main() -> None:
    parser = argparse.ArgumentParser(description="Compute a per-day timesheet from tickets and meetings")
    parser.add_argument("--tickets", required=True, help="Path to CSV/JSON tickets file")
    parser.add_argument("--meetings", help="Path to CSV/JSON meetings file")
    parser.add_argument("--compute-days", type=int, default=10, help="Number of days to compute")
    parser.add_argument("--today", help="Reference instant (ISO-8601) instead of the current time")
    parser.add_argument("--env-file", help="Path to a .env file with working-hours overrides")
    parser.add_argument("--output", default="outputs/timesheet.json", help="Where to save the report")
    parser.add_argument("--debug", action="store_true", help="Log more details")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        hours = load_hours(args.env_file)
        tickets = _load(Path(args.tickets), "tickets")
        meetings = _load(Path(args.meetings), "meetings") if args.meetings else []
        clock = intervals.now
        if args.today:
            reference = intervals.parse(args.today)
            clock = lambda: reference  # noqa: E731
    except ValueError as exc:
        log.error("Input error: %s", exc)
        sys.exit(1)

    log.info("Loaded %d tickets and %d meetings", len(tickets), len(meetings))
    timesheet = compute(tickets, meetings, args.compute_days, hours=hours, clock=clock)
    report = {
        "timesheet": [asdict(record) for record in timesheet],
        "metrics": compute_metrics(timesheet, hours),
    }

    text = json.dumps(report, indent=2, default=str)
    print(text)

    out_path = Path(args.output)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(text, encoding="utf-8")
    log.info("Saved timesheet report to %s", out_path)


if __name__ == "__main__":
    main()
