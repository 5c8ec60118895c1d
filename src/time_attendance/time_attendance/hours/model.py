from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


def minutes_to_hours(minutes: int) -> float:
    return minutes / 60


@dataclass(frozen=True)
class DailyHours:
    """Read-model: one day of the period, for breakdown/report views."""

    work_date: date
    clock_in: Optional[datetime]
    clock_out: Optional[datetime]
    worked_minutes: int
    break_minutes: int
    is_open: bool

    def to_dict(self) -> dict:
        return {
            "work_date": self.work_date.strftime("%Y-%m-%d"),
            "clock_in": self.clock_in.strftime("%H:%M") if self.clock_in else "-",
            "clock_out": self.clock_out.strftime("%H:%M") if self.clock_out else "-",
            "worked_hours": round(minutes_to_hours(self.worked_minutes), 2),
            "break_hours": round(minutes_to_hours(self.break_minutes), 2),
            "is_open": self.is_open,
        }


@dataclass(frozen=True)
class HoursSummary:
    """Worked time over one period, split at the weekly overtime threshold.

    The split is done on whole minutes so regular + overtime always equals
    the total exactly.
    """

    period_start: date
    period_end: date
    worked_minutes: int
    break_minutes: int
    regular_minutes: int
    overtime_minutes: int
    days: tuple[DailyHours, ...] = field(default_factory=tuple)

    @property
    def total_hours(self) -> float:
        return minutes_to_hours(self.worked_minutes)

    @property
    def regular_hours(self) -> float:
        return minutes_to_hours(self.regular_minutes)

    @property
    def overtime_hours(self) -> float:
        return minutes_to_hours(self.overtime_minutes)

    @property
    def break_hours(self) -> float:
        return minutes_to_hours(self.break_minutes)
