from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import TimesheetStatus
from .model import NewTimesheet, Timesheet


class TimesheetRepository(Protocol):
    def create(self, new: NewTimesheet) -> Timesheet:
        """Persist a submitted timesheet.

        Must raise DuplicateSubmission when (employee_id, period_start,
        period_end) already exists, atomically with the insert.
        """

        raise NotImplementedError

    def get(self, timesheet_id: int) -> Optional[Timesheet]:
        raise NotImplementedError

    def find_for_period(self, *, employee_id: str, period_start: date, period_end: date) -> Optional[Timesheet]:
        raise NotImplementedError

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
        """Newest period first."""

        raise NotImplementedError

    def mark_approved(self, *, timesheet_id: int, approver_id: str, decided_at: datetime) -> bool:
        """Compare-and-set from SUBMITTED; False when the row was not SUBMITTED."""

        raise NotImplementedError

    def mark_rejected(self, *, timesheet_id: int, approver_id: str, reason: str, decided_at: datetime) -> bool:
        """Compare-and-set from SUBMITTED; False when the row was not SUBMITTED."""

        raise NotImplementedError

    def count_by_status(self, *, business_id: str) -> dict[TimesheetStatus, int]:
        raise NotImplementedError
