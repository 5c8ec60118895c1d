from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...hours.model import HoursSummary


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for pay)."""

    @abstractmethod
    def estimated_pay(self, hours: HoursSummary, pay_rate: Optional[float]) -> float:
        raise NotImplementedError
