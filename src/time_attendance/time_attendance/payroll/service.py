from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import day_bounds, require_period
from ..hours.aggregator import HoursAggregator
from ..memberships.repository import MembershipRepository
from ..punches.repository import PunchRepository
from .calculator.base import PayCalculator
from .calculator.standard_calculator import StandardPayCalculator
from .model import WeeklyReport, WeeklySummary


class WeeklySummaryService:
    """Ledger → shifts → hours → pay, for one employee and one period.

    Pure read path: nothing computed here is persisted.
    """

    def __init__(
        self,
        punches: PunchRepository,
        memberships: MembershipRepository,
        *,
        aggregator: Optional[HoursAggregator] = None,
        calculator: Optional[PayCalculator] = None,
    ):
        self._punches = punches
        self._memberships = memberships
        self._aggregator = aggregator or HoursAggregator()
        self._calculator = calculator or StandardPayCalculator()

    def resolve_pay_rate(self, employee_id: str) -> Optional[float]:
        membership = self._memberships.get_active_for_employee(employee_id)
        return membership.hourly_rate if membership else None

    def build_report(
        self,
        *,
        employee_id: str,
        period_start: date,
        period_end: date,
        pay_rate: Optional[float] = None,
    ) -> WeeklyReport:
        require_period(period_start, period_end)
        if pay_rate is None:
            pay_rate = self.resolve_pay_rate(employee_id)

        start, end = day_bounds(period_start, period_end)
        punches = self._punches.list_for_employee(employee_id=employee_id, start=start, end=end)
        hours = self._aggregator.aggregate(
            employee_id=employee_id,
            period_start=period_start,
            period_end=period_end,
            punches=punches,
        )
        summary = WeeklySummary(
            regular_hours=hours.regular_hours,
            overtime_hours=hours.overtime_hours,
            total_hours=hours.total_hours,
            break_hours=hours.break_hours,
            estimated_pay=self._calculator.estimated_pay(hours, pay_rate),
        )
        return WeeklyReport(
            employee_id=employee_id,
            period_start=period_start,
            period_end=period_end,
            pay_rate=pay_rate,
            summary=summary,
            days=hours.days,
        )

    def get_weekly_summary(
        self,
        *,
        employee_id: str,
        period_start: date,
        period_end: date,
        pay_rate: Optional[float] = None,
    ) -> WeeklySummary:
        return self.build_report(
            employee_id=employee_id,
            period_start=period_start,
            period_end=period_end,
            pay_rate=pay_rate,
        ).summary
