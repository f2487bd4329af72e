"""Streamlit demo UI for timesheet-engine."""

from __future__ import annotations

import tempfile
from datetime import datetime, time, timezone
from pathlib import Path
from typing import Any

from timesheet_engine.adapters import csv_adapter, json_adapter
from timesheet_engine.metrics import compute_metrics
from timesheet_engine.schema import Hours
from timesheet_engine.timesheet import compute

DEMO_TICKETS = "examples/sample_tickets.csv"
DEMO_MEETINGS = "examples/sample_meetings.json"


def _adapter_for(file_path: str):
    suffix = Path(file_path).suffix.lower()
    if suffix == ".csv":
        return csv_adapter
    if suffix == ".json":
        return json_adapter
    raise ValueError("Unsupported file type. Please use .csv or .json")


def _save_uploaded(uploaded_file) -> str:
    suffix = Path(uploaded_file.name).suffix.lower()
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as handle:
        handle.write(uploaded_file.getbuffer())
        return handle.name


def _fmt_time(value: datetime) -> str:
    return value.strftime("%H:%M")


def run_engine(tickets: list, meetings: list, compute_days: int, hours: Hours, today: datetime) -> dict[str, Any]:
    """Run the engine and return a UI-friendly result payload."""

    timesheet = compute(tickets, meetings, compute_days, hours=hours, clock=lambda: today)
    days = [
        {
            "date": record.date.date().isoformat(),
            "total": record.total,
            "include": record.include,
            "exclude": record.exclude,
            "tasks": [
                {
                    "activity": task.activity_id,
                    "hours": task.duration,
                    "from": _fmt_time(task.start),
                    "to": _fmt_time(task.end),
                }
                for task in record.tasks
            ],
            "meetings": [
                {"title": meeting.title, "from": _fmt_time(meeting.start), "to": _fmt_time(meeting.end)}
                for meeting in record.meetings
            ],
        }
        for record in timesheet
    ]
    return {"days": days, "metrics": compute_metrics(timesheet, hours)}


def main() -> None:
    import streamlit as st

    st.set_page_config(page_title="Timesheet Engine Demo", layout="wide")
    st.title("Timesheet Engine: Streamlit Demo")

    with st.sidebar:
        st.header("Controls")
        uploaded_tickets = st.file_uploader("Upload tickets", type=["csv", "json"])
        uploaded_meetings = st.file_uploader("Upload meetings", type=["csv", "json"])
        use_demo = st.checkbox("Load demo dataset", value=True)
        compute_days = st.slider("Compute days", min_value=1, max_value=31, value=7)
        today_date = st.date_input("Today", value=datetime(2020, 3, 6).date())
        working = st.number_input("Working hours", min_value=1.0, max_value=24.0, value=8.0, step=0.5)
        lunch = st.number_input("Lunch hours", min_value=0.0, max_value=4.0, value=1.0, step=0.25)
        interrupts = st.number_input("Interrupt hours", min_value=0.0, max_value=8.0, value=2.0, step=0.5)
        run = st.button("Run engine", type="primary")

    if not run:
        st.info("Configure inputs in the sidebar and click **Run engine**.")
        return

    try:
        if use_demo:
            tickets = csv_adapter.parse_tickets(DEMO_TICKETS)
            meetings = json_adapter.parse_meetings(DEMO_MEETINGS)
            data_source = f"demo dataset ({DEMO_TICKETS}, {DEMO_MEETINGS})"
        elif uploaded_tickets is not None:
            tickets_path = _save_uploaded(uploaded_tickets)
            tickets = _adapter_for(tickets_path).parse_tickets(tickets_path)
            meetings = []
            if uploaded_meetings is not None:
                meetings_path = _save_uploaded(uploaded_meetings)
                meetings = _adapter_for(meetings_path).parse_meetings(meetings_path)
            data_source = f"uploaded file ({uploaded_tickets.name})"
        else:
            st.error("Please upload a tickets file or enable 'Load demo dataset'.")
            return

        if not tickets:
            st.error("No tickets were found in the selected input.")
            return

        hours = Hours(working=float(working), lunch=float(lunch), interrupts=float(interrupts))
        today = datetime.combine(today_date, time(23, 59), tzinfo=timezone.utc)
        result = run_engine(tickets, meetings, int(compute_days), hours, today)

        st.success(f"Loaded {len(tickets)} tickets and {len(meetings)} meetings from {data_source}.")

        st.subheader("A) Summary")
        metrics = result["metrics"]
        c1, c2, c3, c4 = st.columns(4)
        c1.metric("Days", metrics["days"])
        c2.metric("Total hours", f"{metrics['total_hours']:.2f}")
        c3.metric("Avg per day", f"{metrics['avg_daily_hours']:.2f}")
        c4.metric("Utilisation", f"{metrics['utilisation'] * 100:.1f}%")
        if metrics["hours_by_activity"]:
            st.table([metrics["hours_by_activity"]])

        st.subheader("B) Days")
        if not result["days"]:
            st.write("No working day with ticket activity in the selected window.")
        for day in result["days"]:
            st.write(f"**{day['date']}**: total {day['total']}h (include {day['include']}h, exclude {day['exclude']}h)")
            d1, d2 = st.columns(2)
            d1.table(day["tasks"])
            if day["meetings"]:
                d2.table(day["meetings"])

    except ValueError as exc:
        st.error(f"Input error: {exc}")


if __name__ == "__main__":
    main()
