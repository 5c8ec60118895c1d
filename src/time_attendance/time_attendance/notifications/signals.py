"""Timesheet lifecycle events.

Every state transition is announced on a blinker signal carrying the full
Timesheet record. Delivery (email, SMS, chat) belongs to whoever subscribes;
the engine only publishes.
"""

from __future__ import annotations

import logging

from blinker import Namespace

from ..core.enums import TimesheetStatus

logger = logging.getLogger(__name__)

_signals = Namespace()

timesheet_submitted = _signals.signal("timesheet.submitted")
timesheet_approved = _signals.signal("timesheet.approved")
timesheet_rejected = _signals.signal("timesheet.rejected")

_BY_STATUS = {
    TimesheetStatus.SUBMITTED: timesheet_submitted,
    TimesheetStatus.APPROVED: timesheet_approved,
    TimesheetStatus.REJECTED: timesheet_rejected,
}


class TimesheetEventPublisher:
    def publish(self, timesheet) -> None:
        signal = _BY_STATUS[timesheet.status]
        signal.send(self, timesheet=timesheet)


def log_timesheet_event(sender, *, timesheet, **_):
    logger.info(
        "timesheet %s %s (employee=%s period=%s..%s)",
        timesheet.timesheet_id,
        timesheet.status.value,
        timesheet.employee_id,
        timesheet.period_start,
        timesheet.period_end,
    )


def connect_audit_log() -> None:
    for signal in _BY_STATUS.values():
        signal.connect(log_timesheet_event)
