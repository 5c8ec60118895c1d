from __future__ import annotations

import threading
from dataclasses import asdict
from datetime import datetime
from typing import Callable, Sequence

from ..common.datetime_utils import now_local
from .model import NewPunch, PunchEvent
from .repository import PunchRepository


class InMemoryPunchRepository(PunchRepository):
    """Ledger kept in process memory (development/testing backend)."""

    def __init__(self, *, clock: Callable[[], datetime] = now_local):
        self._lock = threading.Lock()
        self._punches: list[PunchEvent] = []
        self._clock = clock

    def append(self, punch: NewPunch) -> PunchEvent:
        with self._lock:
            event = PunchEvent(punch_id=len(self._punches) + 1, created_at=self._clock(), **asdict(punch))
            self._punches.append(event)
            return event

    def _select(self, predicate) -> list[PunchEvent]:
        with self._lock:
            rows = [p for p in self._punches if predicate(p)]
        rows.sort(key=lambda p: (p.occurred_at, p.punch_id))
        return rows

    def list_for_employee(self, *, employee_id: str, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        return self._select(lambda p: p.employee_id == employee_id and start <= p.occurred_at < end)

    def list_for_business(self, *, business_id: str, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        return self._select(lambda p: p.business_id == business_id and start <= p.occurred_at < end)
