from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import TimesheetStatus


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class Timesheet:
    """Domain entity: the approvable record of one employee's period."""

    timesheet_id: int
    employee_id: str
    business_id: str
    period_start: date
    period_end: date
    regular_hours: float
    overtime_hours: float
    total_hours: float
    break_hours: float
    pay_rate: float
    total_pay: float
    status: TimesheetStatus
    submitted_at: datetime
    approved_at: Optional[datetime] = None
    approved_by: Optional[str] = None
    rejected_at: Optional[datetime] = None
    rejected_by: Optional[str] = None
    rejection_reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.timesheet_id,
            "employee_id": self.employee_id,
            "business_id": self.business_id,
            "period_start": self.period_start.strftime("%Y-%m-%d"),
            "period_end": self.period_end.strftime("%Y-%m-%d"),
            "regular_hours": round(self.regular_hours, 2),
            "overtime_hours": round(self.overtime_hours, 2),
            "total_hours": round(self.total_hours, 2),
            "break_hours": round(self.break_hours, 2),
            "pay_rate": self.pay_rate,
            "total_pay": self.total_pay,
            "status": self.status.value,
            "submitted_at": _iso(self.submitted_at),
            "approved_at": _iso(self.approved_at),
            "approved_by": self.approved_by,
            "rejected_at": _iso(self.rejected_at),
            "rejected_by": self.rejected_by,
            "rejection_reason": self.rejection_reason,
        }


@dataclass(frozen=True)
class NewTimesheet:
    employee_id: str
    business_id: str
    period_start: date
    period_end: date
    regular_hours: float
    overtime_hours: float
    total_hours: float
    break_hours: float
    pay_rate: float
    total_pay: float
    submitted_at: datetime
