from __future__ import annotations

from enum import Enum


class PunchType(str, Enum):
    """Kind of clock event stored in the punch ledger."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


class PunchState(str, Enum):
    """Current employee state, derived from the last punch of the day."""

    WORKING = "working"
    ON_BREAK = "on_break"
    CLOCKED_OUT = "clocked_out"


class TimesheetStatus(str, Enum):
    """Timesheet approval workflow status."""

    SUBMITTED = "submitted"
    APPROVED = "approved"
    REJECTED = "rejected"


class ReportPeriod(str, Enum):
    TODAY = "today"
    YESTERDAY = "yesterday"
    CURRENT_WEEK = "current_week"
    LAST_WEEK = "last_week"
