from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds, now_local, report_range, to_local_naive
from ..common.validators import optional_float, optional_text, require_enum, require_non_empty
from ..core.enums import PunchType, ReportPeriod
from ..core.exceptions import ValidationError
from .model import NewPunch, PunchEvent
from .repository import PunchRepository

logger = logging.getLogger(__name__)


class PunchLedgerService:
    """Append punches and read them back for audit views.

    Only the shape of a single event is validated here; sequencing problems
    (double clock-in, lone break_start, ...) are left to the derivations,
    which degrade gracefully.
    """

    def __init__(self, punches: PunchRepository):
        self._punches = punches

    def record_punch(
        self,
        *,
        employee_id: str,
        business_id: str,
        punch_type: str | PunchType,
        occurred_at: Optional[datetime] = None,
        is_manual: bool = False,
        notes: Optional[str] = None,
        manual_reason: Optional[str] = None,
        location_lat=None,
        location_lng=None,
    ) -> PunchEvent:
        if occurred_at is not None and not isinstance(occurred_at, datetime):
            raise ValidationError("occurred_at must be a datetime")

        punch = NewPunch(
            employee_id=require_non_empty(employee_id, "employee_id"),
            business_id=require_non_empty(business_id, "business_id"),
            punch_type=require_enum(PunchType, punch_type, "type"),
            occurred_at=to_local_naive(occurred_at) if occurred_at else now_local(),
            is_manual=bool(is_manual),
            notes=optional_text(notes),
            manual_reason=optional_text(manual_reason),
            location_lat=optional_float(location_lat, "location_lat"),
            location_lng=optional_float(location_lng, "location_lng"),
        )
        event = self._punches.append(punch)
        logger.info(
            "punch %s recorded: employee=%s type=%s at=%s manual=%s",
            event.punch_id,
            event.employee_id,
            event.punch_type.value,
            event.occurred_at.isoformat(),
            event.is_manual,
        )
        return event

    def list_for_employee(self, *, employee_id: str, start: date, end: date) -> Sequence[PunchEvent]:
        if end < start:
            raise ValidationError("end must be >= start")
        range_start, range_end = day_bounds(start, end)
        return self._punches.list_for_employee(employee_id=employee_id, start=range_start, end=range_end)

    def list_for_business(
        self,
        *,
        business_id: str,
        period: ReportPeriod = ReportPeriod.CURRENT_WEEK,
        today: Optional[date] = None,
    ) -> Sequence[PunchEvent]:
        start, end = report_range(period, today=today or now_local().date())
        range_start, range_end = day_bounds(start, end)
        return self._punches.list_for_business(business_id=business_id, start=range_start, end=range_end)
