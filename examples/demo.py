"""Demo script for timesheet-engine."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from timesheet_engine.adapters.csv_adapter import parse_tickets
from timesheet_engine.adapters.json_adapter import parse_meetings
from timesheet_engine.intervals import parse
from timesheet_engine.metrics import compute_metrics
from timesheet_engine.timesheet import compute

DEMO_TODAY = parse("2020-03-06T17:00:00Z")


def main() -> None:
    tickets = parse_tickets("examples/sample_tickets.csv")
    meetings = parse_meetings("examples/sample_meetings.json")
    timesheet = compute(tickets, meetings, compute_days=7, clock=lambda: DEMO_TODAY)
    for record in timesheet:
        tasks = ", ".join(f"{task.activity_id}={task.duration}h" for task in record.tasks)
        print(f"{record.date.date()}: total={record.total} include={record.include} exclude={record.exclude} [{tasks}]")
    print("Metrics:", compute_metrics(timesheet))


if __name__ == "__main__":
    main()
