"""Errors raised by the timesheet engine."""


class TimesheetError(ValueError):
    """Base class for malformed timesheet input."""


class InvalidTimestamp(TimesheetError):
    """A value could not be parsed as an ISO-8601 date/time."""


class InvalidPeriod(TimesheetError):
    """A period starts after it ends."""
