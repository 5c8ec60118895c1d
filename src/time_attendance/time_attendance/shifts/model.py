from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


def whole_minutes(start: datetime, end: datetime) -> int:
    """Elapsed whole minutes between two instants, never negative."""
    return max(int((end - start).total_seconds() // 60), 0)


@dataclass(frozen=True)
class BreakInterval:
    start: datetime
    end: datetime

    @property
    def minutes(self) -> int:
        return whole_minutes(self.start, self.end)


@dataclass(frozen=True)
class Shift:
    """One employee's reconstructed working interval for one calendar day.

    Derived from the ledger, never persisted. A shift missing either boundary
    is "open" and contributes no worked or break minutes.
    """

    employee_id: str
    work_date: date
    clock_in: Optional[datetime] = None
    clock_out: Optional[datetime] = None
    breaks: tuple[BreakInterval, ...] = field(default_factory=tuple)

    @property
    def is_open(self) -> bool:
        return self.clock_in is None or self.clock_out is None

    @property
    def shift_minutes(self) -> int:
        if self.is_open:
            return 0
        return whole_minutes(self.clock_in, self.clock_out)

    @property
    def break_minutes(self) -> int:
        if self.is_open:
            return 0
        return sum(b.minutes for b in self.breaks)

    @property
    def worked_minutes(self) -> int:
        # Overlapping or oversized breaks must never yield negative hours.
        return max(self.shift_minutes - self.break_minutes, 0)
