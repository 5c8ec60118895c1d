from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Optional, Sequence

from ..core.constants import OVERTIME_THRESHOLD_HOURS
from ..punches.model import PunchEvent
from ..shifts.reconstructor.base import ShiftReconstructor
from ..shifts.reconstructor.first_match import FirstMatchReconstructor
from .model import DailyHours, HoursSummary


class HoursAggregator:
    """Sum reconstructed daily shifts over a period.

    Flat weekly threshold: no daily overtime rule, no multi-week averaging.
    """

    def __init__(
        self,
        *,
        reconstructor: Optional[ShiftReconstructor] = None,
        overtime_threshold_hours: float = OVERTIME_THRESHOLD_HOURS,
    ):
        self._reconstructor = reconstructor or FirstMatchReconstructor()
        self._threshold_minutes = int(round(float(overtime_threshold_hours) * 60))

    def aggregate(
        self,
        *,
        employee_id: str,
        period_start: date,
        period_end: date,
        punches: Sequence[PunchEvent],
    ) -> HoursSummary:
        by_day: dict[date, list[PunchEvent]] = defaultdict(list)
        for p in punches:
            if p.employee_id != employee_id:
                continue
            if period_start <= p.work_date <= period_end:
                by_day[p.work_date].append(p)

        days: list[DailyHours] = []
        for work_date in sorted(by_day):
            shift = self._reconstructor.reconstruct(
                employee_id=employee_id,
                work_date=work_date,
                punches=by_day[work_date],
            )
            days.append(
                DailyHours(
                    work_date=work_date,
                    clock_in=shift.clock_in,
                    clock_out=shift.clock_out,
                    worked_minutes=shift.worked_minutes,
                    break_minutes=shift.break_minutes,
                    is_open=shift.is_open,
                )
            )

        worked = sum(d.worked_minutes for d in days)
        return HoursSummary(
            period_start=period_start,
            period_end=period_end,
            worked_minutes=worked,
            break_minutes=sum(d.break_minutes for d in days),
            regular_minutes=min(worked, self._threshold_minutes),
            overtime_minutes=max(worked - self._threshold_minutes, 0),
            days=tuple(days),
        )
