from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import PunchState
from ..punches.model import PunchEvent


@dataclass(frozen=True)
class EmployeeStatus:
    employee_id: str
    status: PunchState
    last_punch_at: Optional[datetime] = None

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "status": self.status.value,
            "last_punch_at": self.last_punch_at.isoformat() if self.last_punch_at else None,
        }


@dataclass(frozen=True)
class RunningShift:
    """Today's shift tallied up to ``as_of`` (clock-out time, or now if still open)."""

    clock_in: datetime
    as_of: datetime
    worked_minutes: int
    break_minutes: int

    def to_dict(self) -> dict:
        return {
            "clock_in": self.clock_in.isoformat(),
            "as_of": self.as_of.isoformat(),
            "worked_hours": round(self.worked_minutes / 60, 2),
            "break_hours": round(self.break_minutes / 60, 2),
        }


@dataclass(frozen=True)
class EmployeeClockStatus:
    employee_id: str
    status: PunchState
    running_shift: Optional[RunningShift] = None
    punches: tuple[PunchEvent, ...] = field(default_factory=tuple)

    @property
    def is_clocked_in(self) -> bool:
        return self.status == PunchState.WORKING

    @property
    def is_on_break(self) -> bool:
        return self.status == PunchState.ON_BREAK

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "status": self.status.value,
            "is_clocked_in": self.is_clocked_in,
            "is_on_break": self.is_on_break,
            "running_shift": self.running_shift.to_dict() if self.running_shift else None,
            "punches": [p.to_dict() for p in self.punches],
        }


@dataclass(frozen=True)
class DashboardStats:
    working: int
    on_break: int
    clocked_out: int
    hours_today: float
    pending_timesheets: int
    approved_timesheets: int
    rejected_timesheets: int

    def to_dict(self) -> dict:
        return {
            "working": self.working,
            "on_break": self.on_break,
            "clocked_out": self.clocked_out,
            "hours_today": round(self.hours_today, 2),
            "pending_timesheets": self.pending_timesheets,
            "approved_timesheets": self.approved_timesheets,
            "rejected_timesheets": self.rejected_timesheets,
        }
