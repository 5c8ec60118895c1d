from __future__ import annotations

import csv
import io
import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import now_local, require_period
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import TimesheetStatus
from ..core.exceptions import (
    DuplicateSubmission,
    InvalidTransition,
    MissingReason,
    NotFoundError,
    SelfApproval,
    ValidationError,
)
from ..memberships.repository import MembershipRepository
from ..notifications.signals import TimesheetEventPublisher
from ..payroll.model import WeeklySummary
from ..payroll.service import WeeklySummaryService
from .model import NewTimesheet, Timesheet
from .repository import TimesheetRepository

logger = logging.getLogger(__name__)

EXPORT_FIELDS = [
    "id",
    "employee_id",
    "period_start",
    "period_end",
    "regular_hours",
    "overtime_hours",
    "total_hours",
    "break_hours",
    "pay_rate",
    "total_pay",
    "status",
    "submitted_at",
    "approved_at",
    "approved_by",
    "rejected_by",
    "rejection_reason",
]


class TimesheetService:
    """Approval state machine: submitted → approved | rejected (both terminal).

    A period without a record is implicitly "not yet submitted"; there is no
    persisted draft state.
    """

    def __init__(
        self,
        timesheets: TimesheetRepository,
        summaries: WeeklySummaryService,
        memberships: MembershipRepository,
        *,
        publisher: Optional[TimesheetEventPublisher] = None,
    ):
        self._timesheets = timesheets
        self._summaries = summaries
        self._memberships = memberships
        self._publisher = publisher or TimesheetEventPublisher()

    # -------- Submission --------
    def submit(
        self,
        *,
        employee_id: str,
        business_id: str,
        period_start: date,
        period_end: date,
        summary: WeeklySummary,
        pay_rate: Optional[float],
    ) -> Timesheet:
        employee_id = require_non_empty(employee_id, "employee_id")
        business_id = require_non_empty(business_id, "business_id")
        require_period(period_start, period_end)

        existing = self._timesheets.find_for_period(
            employee_id=employee_id, period_start=period_start, period_end=period_end
        )
        if existing:
            logger.warning("duplicate submission: employee=%s period=%s..%s", employee_id, period_start, period_end)
            raise DuplicateSubmission(f"Timesheet already submitted for {period_start}..{period_end}")

        # create() raises DuplicateSubmission atomically for racing submits.
        ts = self._timesheets.create(
            NewTimesheet(
                employee_id=employee_id,
                business_id=business_id,
                period_start=period_start,
                period_end=period_end,
                regular_hours=summary.regular_hours,
                overtime_hours=summary.overtime_hours,
                total_hours=summary.total_hours,
                break_hours=summary.break_hours,
                pay_rate=float(pay_rate or 0),
                total_pay=summary.estimated_pay,
                submitted_at=now_local(),
            )
        )
        self._publisher.publish(ts)
        return ts

    def submit_for_period(self, *, employee_id: str, period_start: date, period_end: date) -> Timesheet:
        employee_id = require_non_empty(employee_id, "employee_id")
        membership = self._memberships.get_active_for_employee(employee_id)
        if not membership:
            raise ValidationError("Employee has no active business membership")

        summary = self._summaries.get_weekly_summary(
            employee_id=employee_id,
            period_start=period_start,
            period_end=period_end,
            pay_rate=membership.hourly_rate,
        )
        return self.submit(
            employee_id=employee_id,
            business_id=membership.business_id,
            period_start=period_start,
            period_end=period_end,
            summary=summary,
            pay_rate=membership.hourly_rate,
        )

    # -------- Decisions --------
    def _get_submitted(self, timesheet_id: int, approver_id: str) -> Timesheet:
        ts = self.get(timesheet_id)
        if ts.status != TimesheetStatus.SUBMITTED:
            raise InvalidTransition(f"Timesheet {ts.timesheet_id} is already {ts.status.value}")
        if ts.employee_id == approver_id:
            raise SelfApproval("Employees cannot decide on their own timesheet")
        return ts

    def approve(self, *, timesheet_id: int, approver_id: str) -> Timesheet:
        approver_id = require_non_empty(approver_id, "approver_id")
        ts = self._get_submitted(timesheet_id, approver_id)

        if not self._timesheets.mark_approved(
            timesheet_id=ts.timesheet_id, approver_id=approver_id, decided_at=now_local()
        ):
            logger.warning("lost decision race on timesheet %s", ts.timesheet_id)
            raise InvalidTransition(f"Timesheet {ts.timesheet_id} was decided concurrently")

        approved = self.get(ts.timesheet_id)
        self._publisher.publish(approved)
        return approved

    def reject(self, *, timesheet_id: int, approver_id: str, reason: str) -> Timesheet:
        if not reason or not str(reason).strip():
            raise MissingReason("A rejection reason is required")
        approver_id = require_non_empty(approver_id, "approver_id")
        ts = self._get_submitted(timesheet_id, approver_id)

        if not self._timesheets.mark_rejected(
            timesheet_id=ts.timesheet_id,
            approver_id=approver_id,
            reason=str(reason).strip(),
            decided_at=now_local(),
        ):
            logger.warning("lost decision race on timesheet %s", ts.timesheet_id)
            raise InvalidTransition(f"Timesheet {ts.timesheet_id} was decided concurrently")

        rejected = self.get(ts.timesheet_id)
        self._publisher.publish(rejected)
        return rejected

    # -------- Queries --------
    def get(self, timesheet_id: int) -> Timesheet:
        ts = self._timesheets.get(int(timesheet_id))
        if not ts:
            raise NotFoundError(f"Timesheet {timesheet_id} not found")
        return ts

    def list_timesheets(
        self,
        *,
        business_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[TimesheetStatus] = None,
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[Timesheet]:
        return self._timesheets.list_timesheets(
            business_id=business_id,
            employee_id=employee_id,
            status=status,
            period_start=period_start,
            period_end=period_end,
            limit=limit,
        )

    def count_by_status(self, *, business_id: str) -> dict[TimesheetStatus, int]:
        return self._timesheets.count_by_status(business_id=business_id)

    def export_csv(self, *, business_id: str, status: Optional[TimesheetStatus] = None) -> str:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_FIELDS, extrasaction="ignore")
        writer.writeheader()
        for ts in self.list_timesheets(business_id=business_id, status=status):
            writer.writerow(ts.to_dict())
        return out.getvalue()
