from datetime import date

import pytest

from src.time_attendance.time_attendance.core.exceptions import ValidationError
from src.time_attendance.time_attendance.hours.model import HoursSummary
from src.time_attendance.time_attendance.payroll.calculator.standard_calculator import StandardPayCalculator


def _hours(regular_minutes: int, overtime_minutes: int = 0) -> HoursSummary:
    return HoursSummary(
        period_start=date(2026, 2, 2),
        period_end=date(2026, 2, 8),
        worked_minutes=regular_minutes + overtime_minutes,
        break_minutes=0,
        regular_minutes=regular_minutes,
        overtime_minutes=overtime_minutes,
    )


def test_overtime_paid_at_time_and_a_half():
    calc = StandardPayCalculator()
    assert calc.estimated_pay(_hours(40 * 60, 5 * 60), 20.0) == 40 * 20 + 5 * 20 * 1.5


def test_regular_only():
    calc = StandardPayCalculator()
    assert calc.estimated_pay(_hours(int(37.5 * 60)), 18.0) == 675.0


@pytest.mark.parametrize("rate", [None, 0, 0.0])
def test_missing_rate_pays_nothing(rate):
    assert StandardPayCalculator().estimated_pay(_hours(40 * 60, 60), rate) == 0.0


def test_negative_rate_rejected():
    with pytest.raises(ValidationError):
        StandardPayCalculator().estimated_pay(_hours(60), -1)


def test_multiplier_is_configurable():
    calc = StandardPayCalculator(overtime_multiplier=2)
    assert calc.estimated_pay(_hours(40 * 60, 60), 10) == 400 + 20


def test_pay_rounded_to_cents():
    # 20 minutes at 10/h = 3.333...
    assert StandardPayCalculator().estimated_pay(_hours(20), 10) == 3.33
