from __future__ import annotations

from typing import Optional, Protocol

from .model import Membership


class MembershipRepository(Protocol):
    def get_active_for_employee(self, employee_id: str) -> Optional[Membership]:
        raise NotImplementedError
