from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import PunchType


@dataclass(frozen=True)
class PunchEvent:
    """Domain entity: one immutable clock event in the ledger."""

    punch_id: int
    employee_id: str
    business_id: str
    punch_type: PunchType
    occurred_at: datetime
    is_manual: bool = False
    notes: Optional[str] = None
    manual_reason: Optional[str] = None
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    created_at: Optional[datetime] = None

    @property
    def work_date(self) -> date:
        return self.occurred_at.date()

    def to_dict(self) -> dict:
        return {
            "id": self.punch_id,
            "employee_id": self.employee_id,
            "business_id": self.business_id,
            "type": self.punch_type.value,
            "occurred_at": self.occurred_at.isoformat(),
            "is_manual": self.is_manual,
            "notes": self.notes,
            "manual_reason": self.manual_reason,
        }


@dataclass(frozen=True)
class NewPunch:
    """Validated input for appending to the ledger (no id yet)."""

    employee_id: str
    business_id: str
    punch_type: PunchType
    occurred_at: datetime
    is_manual: bool = False
    notes: Optional[str] = None
    manual_reason: Optional[str] = None
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
