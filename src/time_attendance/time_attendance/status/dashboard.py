from __future__ import annotations

from collections import Counter
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import now_local
from ..core.enums import PunchState, TimesheetStatus
from ..timesheets.service import TimesheetService
from .model import DashboardStats
from .monitor import LiveStatusMonitor


class DashboardService:
    """Quick stats for the manager overview."""

    def __init__(self, monitor: LiveStatusMonitor, timesheets: TimesheetService):
        self._monitor = monitor
        self._timesheets = timesheets

    def get_stats(self, *, business_id: str, now: Optional[datetime] = None) -> DashboardStats:
        now = now or now_local()
        states = Counter(s.status for s in self._monitor.get_currently_working(business_id=business_id, now=now))
        counts = self._timesheets.count_by_status(business_id=business_id)
        return DashboardStats(
            working=states[PunchState.WORKING],
            on_break=states[PunchState.ON_BREAK],
            clocked_out=states[PunchState.CLOCKED_OUT],
            hours_today=self._monitor.hours_worked_today(business_id=business_id, now=now),
            pending_timesheets=counts.get(TimesheetStatus.SUBMITTED, 0),
            approved_timesheets=counts.get(TimesheetStatus.APPROVED, 0),
            rejected_timesheets=counts.get(TimesheetStatus.REJECTED, 0),
        )
