from __future__ import annotations

from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import day_bounds, now_local
from ..core.enums import PunchState, PunchType
from ..punches.model import PunchEvent
from ..punches.repository import PunchRepository
from ..shifts.model import whole_minutes
from .model import EmployeeClockStatus, EmployeeStatus, RunningShift

_STATE_BY_TYPE = {
    PunchType.CLOCK_IN: PunchState.WORKING,
    PunchType.BREAK_END: PunchState.WORKING,
    PunchType.BREAK_START: PunchState.ON_BREAK,
    PunchType.CLOCK_OUT: PunchState.CLOCKED_OUT,
}


def state_after(punch: Optional[PunchEvent]) -> PunchState:
    if punch is None:
        return PunchState.CLOCKED_OUT
    return _STATE_BY_TYPE[punch.punch_type]


def latest_by_employee(punches: Iterable[PunchEvent]) -> dict[str, PunchEvent]:
    """Fold: the chronologically last punch per employee (stable on ties)."""
    return {p.employee_id: p for p in sorted(punches, key=lambda p: p.occurred_at)}


def running_shift(punches: Sequence[PunchEvent], *, now: datetime) -> Optional[RunningShift]:
    ordered = sorted(punches, key=lambda p: p.occurred_at)
    clock_in = next((p for p in ordered if p.punch_type == PunchType.CLOCK_IN), None)
    if clock_in is None:
        return None

    clock_out = next(
        (p for p in ordered if p.punch_type == PunchType.CLOCK_OUT and p.occurred_at > clock_in.occurred_at),
        None,
    )
    as_of = clock_out.occurred_at if clock_out else max(now, clock_in.occurred_at)

    break_minutes = 0
    break_start: Optional[datetime] = None
    for p in ordered:
        if not clock_in.occurred_at <= p.occurred_at <= as_of:
            continue
        if p.punch_type == PunchType.BREAK_START:
            break_start = p.occurred_at
        elif p.punch_type == PunchType.BREAK_END and break_start is not None:
            break_minutes += whole_minutes(break_start, p.occurred_at)
            break_start = None

    # ongoing break counts up to now; after clock_out an unmatched break_start is ignored
    if break_start is not None and clock_out is None:
        break_minutes += whole_minutes(break_start, as_of)

    elapsed = whole_minutes(clock_in.occurred_at, as_of)
    return RunningShift(
        clock_in=clock_in.occurred_at,
        as_of=as_of,
        worked_minutes=max(elapsed - break_minutes, 0),
        break_minutes=break_minutes,
    )


class LiveStatusMonitor:
    """Who is working right now, recomputed from today's punches on every read."""

    def __init__(self, punches: PunchRepository):
        self._punches = punches

    def _today_bounds(self, now: datetime) -> tuple[datetime, datetime]:
        today = now.date()
        return day_bounds(today, today)

    def get_currently_working(
        self,
        *,
        business_id: str,
        now: Optional[datetime] = None,
        only_active: bool = False,
    ) -> list[EmployeeStatus]:
        now = now or now_local()
        start, end = self._today_bounds(now)
        punches = self._punches.list_for_business(business_id=business_id, start=start, end=end)

        statuses = [
            EmployeeStatus(employee_id=employee_id, status=state_after(last), last_punch_at=last.occurred_at)
            for employee_id, last in sorted(latest_by_employee(punches).items())
        ]
        if only_active:
            statuses = [s for s in statuses if s.status != PunchState.CLOCKED_OUT]
        return statuses

    def get_employee_status(self, *, employee_id: str, now: Optional[datetime] = None) -> EmployeeClockStatus:
        now = now or now_local()
        start, end = self._today_bounds(now)
        punches = tuple(self._punches.list_for_employee(employee_id=employee_id, start=start, end=end))

        last = latest_by_employee(punches).get(employee_id)
        return EmployeeClockStatus(
            employee_id=employee_id,
            status=state_after(last),
            running_shift=running_shift(punches, now=now),
            punches=punches,
        )

    def hours_worked_today(self, *, business_id: str, now: Optional[datetime] = None) -> float:
        now = now or now_local()
        start, end = self._today_bounds(now)
        punches = self._punches.list_for_business(business_id=business_id, start=start, end=end)

        minutes = 0
        for employee_id in latest_by_employee(punches):
            shift = running_shift([p for p in punches if p.employee_id == employee_id], now=now)
            if shift:
                minutes += shift.worked_minutes
        return minutes / 60
