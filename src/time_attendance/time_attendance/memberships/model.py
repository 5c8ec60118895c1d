from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Membership:
    """Employee ↔ business link owned by the employee directory (read-only here)."""

    employee_id: str
    business_id: str
    hourly_rate: Optional[float] = None
    is_active: bool = True
