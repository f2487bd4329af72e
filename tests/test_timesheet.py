from datetime import datetime

import pytest

from timesheet_engine.intervals import parse
from timesheet_engine.schema import Hours, Meeting, Period, Ticket
from timesheet_engine.timesheet import _day_tasks, compute, duration, round_quarter

FRIDAY = parse("2020-03-06T17:00:00Z")
MONDAY = parse("2020-03-09T12:00:00Z")


def ticket(issue, start, end):
    return Ticket(parse(start), parse(end), issue)


def clock(value):
    return lambda: value


def period_of(hours):
    start = parse("2020-03-02T08:00:00Z")
    return Period(start, start + (parse("2020-03-02T09:00:00Z") - start) * hours)


@pytest.mark.parametrize(
    "hours, expected",
    [(1.0, 1.0), (1.1, 1.0), (1.125, 1.25), (0.125, 0.25), (0.1, 0.0), (2.37, 2.25), (2.38, 2.5)],
)
def test_round_quarter(hours, expected):
    assert round_quarter(hours) == expected


def test_duration_deducts_lunch_for_full_day():
    assert duration(Period(parse("2020-03-02T09:00:00Z"), parse("2020-03-02T17:00:00Z")), Hours()) == 7.0


def test_duration_lunch_threshold():
    assert duration(period_of(4.75), Hours()) == 4.75
    assert duration(period_of(5), Hours()) == 4.0


def test_duration_is_capped_at_working_hours():
    assert duration(period_of(15), Hours()) == 8.0


def test_duration_bounds_and_granularity():
    start = parse("2020-03-02T00:00:00Z")
    for minutes in range(0, 24 * 60, 7):
        interval = Period(start, start + (parse("2020-03-02T00:01:00Z") - start) * minutes)
        value = duration(interval, Hours())
        assert 0.0 <= value <= 8.0
        assert (value * 4).is_integer()


def test_compute_single_full_day_ticket():
    result = compute([ticket("SHOP-1", "2020-03-02T09:00:00Z", "2020-03-02T17:00:00Z")], [], 5, clock=clock(FRIDAY))

    assert len(result) == 1
    record = result[0]
    assert record.date == parse("2020-03-02T08:30:00Z")
    assert [(task.activity_id, task.duration) for task in record.tasks] == [("SHOP-1", 7.0)]
    assert record.include == 7.0
    assert record.exclude == 1.0
    assert record.total == 6.0


def test_compute_orders_most_recent_first_and_omits_idle_days():
    tickets = [
        ticket("SHOP-1", "2020-03-02T09:00:00Z", "2020-03-02T11:00:00Z"),
        ticket("SHOP-2", "2020-03-05T13:00:00Z", "2020-03-05T15:30:00Z"),
    ]
    result = compute(tickets, [], 5, clock=clock(FRIDAY))
    assert [record.date.date().isoformat() for record in result] == ["2020-03-05", "2020-03-02"]
    assert [record.total for record in result] == [2.5, 2.0]


def test_compute_splits_multi_day_tickets_per_day():
    result = compute([ticket("SHOP-3", "2020-03-04T15:00:00Z", "2020-03-05T02:00:00Z")], [], 5, clock=clock(FRIDAY))
    assert [(record.date.date().isoformat(), record.tasks[0].duration) for record in result] == [
        ("2020-03-05", 2.0),
        ("2020-03-04", 8.0),
    ]
    assert result[1].tasks[0].end == parse("2020-03-04T23:59:59Z")


def test_compute_caps_daily_include():
    tickets = [
        ticket("A", "2020-03-02T08:00:00Z", "2020-03-02T11:00:00Z"),
        ticket("B", "2020-03-02T11:00:00Z", "2020-03-02T14:00:00Z"),
        ticket("C", "2020-03-02T14:00:00Z", "2020-03-02T17:00:00Z"),
    ]
    record = compute(tickets, [], 5, clock=clock(FRIDAY))[0]
    assert sum(task.duration for task in record.tasks) == 9.0
    assert record.include == 8.0
    assert record.exclude == 2.0
    assert record.total == 6.0


def test_compute_skips_weekends():
    tickets = [
        ticket("WEEKEND", "2020-03-07T10:00:00Z", "2020-03-07T12:00:00Z"),
        ticket("MONDAY", "2020-03-09T09:00:00Z", "2020-03-09T10:00:00Z"),
    ]
    result = compute(tickets, [], 3, clock=clock(MONDAY))
    assert [record.tasks[0].activity_id for record in result] == ["MONDAY"]


def test_compute_ignores_tickets_before_lookback():
    result = compute([ticket("SHOP-1", "2020-03-05T09:00:00Z", "2020-03-05T10:00:00Z")], [], 1, clock=clock(FRIDAY))
    assert result == []


def test_compute_uses_configured_hours():
    hours = Hours(working=6.0, lunch=0.5, interrupts=1.0)
    record = compute(
        [ticket("SHOP-1", "2020-03-02T09:00:00Z", "2020-03-02T13:00:00Z")], [], 5, hours=hours, clock=clock(FRIDAY)
    )[0]
    assert record.tasks[0].duration == 3.5
    assert record.include == 3.5
    assert record.exclude == 0.0


def test_compute_exclude_follows_interrupt_budget_not_meetings():
    """Meetings are attached to the day but exclude only tracks hours above working - interrupts.

    The alternative reading (exclude always zero) is intentionally not implemented.
    """

    tickets = [ticket("SHOP-1", "2020-03-03T09:00:00Z", "2020-03-03T13:00:00Z")]
    meetings = [Meeting(parse("2020-03-03T13:00:00Z"), parse("2020-03-03T17:00:00Z"), "Workshop")]

    with_meetings = compute(tickets, meetings, 5, clock=clock(FRIDAY))
    without_meetings = compute(tickets, [], 5, clock=clock(FRIDAY))

    assert with_meetings[0].meetings == tuple(meetings)
    assert with_meetings[0].exclude == 0.0
    assert (with_meetings[0].total, with_meetings[0].include) == (without_meetings[0].total, without_meetings[0].include)


def test_compute_meetings_alone_produce_no_records():
    meetings = [Meeting(parse("2020-03-03T09:00:00Z"), parse("2020-03-03T10:00:00Z"), "Stand-up")]
    assert compute([], meetings, 5, clock=clock(FRIDAY)) == []


@pytest.mark.parametrize("days", [0, -3])
def test_compute_non_positive_days_is_empty(days):
    assert compute([ticket("SHOP-1", "2020-03-06T09:00:00Z", "2020-03-06T10:00:00Z")], [], days, clock=clock(FRIDAY)) == []


def test_compute_is_deterministic():
    tickets = [ticket("SHOP-1", "2020-03-03T13:10:00Z", "2020-03-05T11:20:00Z")]
    first = compute(tickets, [], 5, clock=clock(FRIDAY))
    assert first == compute(tickets, [], 5, clock=clock(FRIDAY))
    assert tickets == [ticket("SHOP-1", "2020-03-03T13:10:00Z", "2020-03-05T11:20:00Z")]


def test_day_tasks_intersects_tickets_crossing_the_day():
    window = Period(parse("2020-03-06T08:30:00Z"), parse("2020-03-06T17:30:00Z"))
    includes = [
        ticket("CROSS", "2020-03-05T20:00:00Z", "2020-03-06T12:00:00Z"),
        ticket("EARLY", "2020-03-05T20:00:00Z", "2020-03-06T08:00:00Z"),
    ]
    tasks = _day_tasks(includes, window, Hours())
    assert [(task.activity_id, task.duration, task.start) for task in tasks] == [
        ("CROSS", 3.5, parse("2020-03-06T08:30:00Z"))
    ]


def test_compute_accepts_naive_ticket_bounds():
    naive = Ticket(datetime(2020, 3, 2, 9), datetime(2020, 3, 2, 17), "SHOP-1")
    result = compute([naive], [], 5, clock=clock(FRIDAY))
    assert [(record.date, record.total) for record in result] == [(parse("2020-03-02T08:30:00Z"), 6.0)]
