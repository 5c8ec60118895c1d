from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, to_bool, to_float
from .model import Membership
from .repository import MembershipRepository


class MySQLMembershipRepository(MembershipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_for_employee(self, employee_id: str) -> Optional[Membership]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, business_id, hourly_rate, is_active
                FROM user_business_memberships
                WHERE employee_id=%s AND is_active=1
                ORDER BY membership_id DESC
                LIMIT 1
                """,
                (employee_id,),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Membership(
                employee_id=str(r["employee_id"]),
                business_id=str(r["business_id"]),
                hourly_rate=to_float(r.get("hourly_rate")),
                is_active=to_bool(r.get("is_active")),
            )
