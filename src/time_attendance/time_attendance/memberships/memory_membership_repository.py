from __future__ import annotations

from typing import Iterable, Optional

from .model import Membership
from .repository import MembershipRepository


class InMemoryMembershipRepository(MembershipRepository):
    def __init__(self, memberships: Iterable[Membership] = ()):
        self._by_employee: dict[str, Membership] = {}
        for m in memberships:
            self.add(m)

    def add(self, membership: Membership) -> None:
        self._by_employee[membership.employee_id] = membership

    def get_active_for_employee(self, employee_id: str) -> Optional[Membership]:
        m = self._by_employee.get(employee_id)
        if m and m.is_active:
            return m
        return None
