from __future__ import annotations

from typing import Optional

from ...core.constants import OVERTIME_MULTIPLIER
from ...core.exceptions import ValidationError
from ...hours.model import HoursSummary
from .base import PayCalculator


class StandardPayCalculator(PayCalculator):
    """Standard rule: regular × rate + overtime × rate × multiplier (1.5 by default)."""

    def __init__(self, *, overtime_multiplier: float = OVERTIME_MULTIPLIER):
        self._multiplier = float(overtime_multiplier)

    def estimated_pay(self, hours: HoursSummary, pay_rate: Optional[float]) -> float:
        if not pay_rate:
            return 0.0
        rate = float(pay_rate)
        if rate < 0:
            raise ValidationError("pay_rate must not be negative")
        pay = hours.regular_hours * rate + hours.overtime_hours * rate * self._multiplier
        return round(pay, 2)
