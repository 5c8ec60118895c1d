from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import NewPunch, PunchEvent


class PunchRepository(Protocol):
    """Append-only ledger. There is deliberately no update/delete."""

    def append(self, punch: NewPunch) -> PunchEvent:
        raise NotImplementedError

    def list_for_employee(self, *, employee_id: str, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        """Punches with ``start <= occurred_at < end``, ascending by time."""

        raise NotImplementedError

    def list_for_business(self, *, business_id: str, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        """Punches with ``start <= occurred_at < end``, ascending by time."""

        raise NotImplementedError
