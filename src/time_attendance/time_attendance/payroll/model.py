from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..hours.model import DailyHours


@dataclass(frozen=True)
class WeeklySummary:
    regular_hours: float
    overtime_hours: float
    total_hours: float
    break_hours: float
    estimated_pay: float

    def to_dict(self) -> dict:
        return {
            "regular_hours": round(self.regular_hours, 2),
            "overtime_hours": round(self.overtime_hours, 2),
            "total_hours": round(self.total_hours, 2),
            "break_hours": round(self.break_hours, 2),
            "estimated_pay": self.estimated_pay,
        }


@dataclass(frozen=True)
class WeeklyReport:
    """WeeklySummary plus the context it was computed from."""

    employee_id: str
    period_start: date
    period_end: date
    pay_rate: Optional[float]
    summary: WeeklySummary
    days: tuple[DailyHours, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "period_start": self.period_start.strftime("%Y-%m-%d"),
            "period_end": self.period_end.strftime("%Y-%m-%d"),
            "pay_rate": self.pay_rate,
            "summary": self.summary.to_dict(),
            "days": [d.to_dict() for d in self.days],
        }
