from __future__ import annotations

import threading
from dataclasses import asdict, replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import TimesheetStatus
from ..core.exceptions import DuplicateSubmission
from .model import NewTimesheet, Timesheet
from .repository import TimesheetRepository


class InMemoryTimesheetRepository(TimesheetRepository):
    """Process-local store; the lock plays the role of the unique index."""

    def __init__(self):
        self._lock = threading.Lock()
        self._by_id: dict[int, Timesheet] = {}
        self._by_period: dict[tuple[str, date, date], int] = {}
        self._next_id = 1

    def create(self, new: NewTimesheet) -> Timesheet:
        key = (new.employee_id, new.period_start, new.period_end)
        with self._lock:
            if key in self._by_period:
                raise DuplicateSubmission(
                    f"Timesheet already submitted for {new.period_start}..{new.period_end}"
                )
            ts = Timesheet(timesheet_id=self._next_id, status=TimesheetStatus.SUBMITTED, **asdict(new))
            self._next_id += 1
            self._by_id[ts.timesheet_id] = ts
            self._by_period[key] = ts.timesheet_id
            return ts

    def get(self, timesheet_id: int) -> Optional[Timesheet]:
        with self._lock:
            return self._by_id.get(int(timesheet_id))

    def find_for_period(self, *, employee_id: str, period_start: date, period_end: date) -> Optional[Timesheet]:
        with self._lock:
            timesheet_id = self._by_period.get((employee_id, period_start, period_end))
            return self._by_id.get(timesheet_id) if timesheet_id else None

    def list_timesheets(
        self,
        *,
        business_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[TimesheetStatus] = None,
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
        limit: int = 200,
    ) -> Sequence[Timesheet]:
        with self._lock:
            items = list(self._by_id.values())

        def keep(ts: Timesheet) -> bool:
            if business_id is not None and ts.business_id != business_id:
                return False
            if employee_id is not None and ts.employee_id != employee_id:
                return False
            if status is not None and ts.status != status:
                return False
            if period_start is not None and ts.period_start < period_start:
                return False
            if period_end is not None and ts.period_end > period_end:
                return False
            return True

        items = [ts for ts in items if keep(ts)]
        items.sort(key=lambda ts: (ts.period_start, ts.timesheet_id), reverse=True)
        return items[: int(limit)]

    def _compare_and_set(self, timesheet_id: int, **changes) -> bool:
        with self._lock:
            current = self._by_id.get(int(timesheet_id))
            if not current or current.status != TimesheetStatus.SUBMITTED:
                return False
            self._by_id[current.timesheet_id] = replace(current, **changes)
            return True

    def mark_approved(self, *, timesheet_id: int, approver_id: str, decided_at: datetime) -> bool:
        return self._compare_and_set(
            timesheet_id,
            status=TimesheetStatus.APPROVED,
            approved_at=decided_at,
            approved_by=approver_id,
        )

    def mark_rejected(self, *, timesheet_id: int, approver_id: str, reason: str, decided_at: datetime) -> bool:
        return self._compare_and_set(
            timesheet_id,
            status=TimesheetStatus.REJECTED,
            rejected_at=decided_at,
            rejected_by=approver_id,
            rejection_reason=reason,
        )

    def count_by_status(self, *, business_id: str) -> dict[TimesheetStatus, int]:
        counts = {s: 0 for s in TimesheetStatus}
        with self._lock:
            for ts in self._by_id.values():
                if ts.business_id == business_id:
                    counts[ts.status] += 1
        return counts
