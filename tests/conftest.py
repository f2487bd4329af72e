import os

import pytest


@pytest.fixture
def isolated_env(monkeypatch):
    """Keep variables loaded from .env files out of the real process environment."""

    monkeypatch.setattr(os, "environ", os.environ.copy())
    for name in ("TIMESHEET_WORKING_HOURS", "TIMESHEET_LUNCH_HOURS", "TIMESHEET_INTERRUPT_HOURS"):
        os.environ.pop(name, None)
    return os.environ
