from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date
from typing import Sequence

from ...punches.model import PunchEvent
from ..model import Shift


class ShiftReconstructor(ABC):
    """Strategy Pattern: how a day's punches are folded into a shift."""

    @abstractmethod
    def reconstruct(self, *, employee_id: str, work_date: date, punches: Sequence[PunchEvent]) -> Shift:
        raise NotImplementedError
