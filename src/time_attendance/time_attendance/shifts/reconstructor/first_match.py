from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ...core.enums import PunchType
from ...punches.model import PunchEvent
from ..model import BreakInterval, Shift
from .base import ShiftReconstructor

logger = logging.getLogger(__name__)


def _first(punches: Sequence[PunchEvent], punch_type: PunchType, *, after=None) -> Optional[PunchEvent]:
    for p in punches:
        if p.punch_type != punch_type:
            continue
        if after is not None and p.occurred_at <= after:
            continue
        return p
    return None


class FirstMatchReconstructor(ShiftReconstructor):
    """Earliest clock_in, then the earliest clock_out after it.

    Only one shift per day is recognised: punches of a second (split) shift
    on the same day are ignored for hour totals but stay in the ledger.
    """

    def reconstruct(self, *, employee_id: str, work_date: date, punches: Sequence[PunchEvent]) -> Shift:
        ordered = sorted(
            (p for p in punches if p.employee_id == employee_id and p.work_date == work_date),
            key=lambda p: p.occurred_at,
        )

        clock_in = _first(ordered, PunchType.CLOCK_IN)
        if clock_in is None:
            clock_out = _first(ordered, PunchType.CLOCK_OUT)
        else:
            clock_out = _first(ordered, PunchType.CLOCK_OUT, after=clock_in.occurred_at)

        if clock_in is None or clock_out is None:
            if ordered:
                logger.debug("open shift for employee=%s on %s (%d punches)", employee_id, work_date, len(ordered))
            return Shift(
                employee_id=employee_id,
                work_date=work_date,
                clock_in=clock_in.occurred_at if clock_in else None,
                clock_out=clock_out.occurred_at if clock_out else None,
            )

        start, end = clock_in.occurred_at, clock_out.occurred_at
        window = [p for p in ordered if start <= p.occurred_at <= end]

        breaks: list[BreakInterval] = []
        for current, following in zip(window, window[1:]):
            if current.punch_type != PunchType.BREAK_START or following.punch_type != PunchType.BREAK_END:
                continue
            if following.occurred_at <= current.occurred_at:
                continue
            breaks.append(BreakInterval(start=current.occurred_at, end=following.occurred_at))

        return Shift(
            employee_id=employee_id,
            work_date=work_date,
            clock_in=start,
            clock_out=end,
            breaks=tuple(breaks),
        )
