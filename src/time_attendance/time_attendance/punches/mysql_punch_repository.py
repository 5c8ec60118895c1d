from __future__ import annotations

from datetime import datetime
from typing import Sequence

from ..core.enums import PunchType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_bool, to_float
from .model import NewPunch, PunchEvent
from .repository import PunchRepository

_COLUMNS = """
    punch_id, employee_id, business_id, punch_type, occurred_at, is_manual,
    notes, manual_reason, location_lat, location_lng, created_at
"""


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_model(r: dict) -> PunchEvent:
        return PunchEvent(
            punch_id=int(r["punch_id"]),
            employee_id=str(r["employee_id"]),
            business_id=str(r["business_id"]),
            punch_type=PunchType(r["punch_type"]),
            occurred_at=r["occurred_at"],
            is_manual=to_bool(r.get("is_manual")),
            notes=r.get("notes"),
            manual_reason=r.get("manual_reason"),
            location_lat=to_float(r.get("location_lat")),
            location_lng=to_float(r.get("location_lng")),
            created_at=r.get("created_at"),
        )

    def append(self, punch: NewPunch) -> PunchEvent:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO time_punches(
                    employee_id, business_id, punch_type, occurred_at, is_manual,
                    notes, manual_reason, location_lat, location_lng
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    punch.employee_id,
                    punch.business_id,
                    punch.punch_type.value,
                    punch.occurred_at,
                    int(punch.is_manual),
                    punch.notes,
                    punch.manual_reason,
                    punch.location_lat,
                    punch.location_lng,
                ),
            )
            punch_id = int(cur.lastrowid)
            cur.execute(f"SELECT {_COLUMNS} FROM time_punches WHERE punch_id=%s", (punch_id,))
            return self._to_model(fetchone(cur))

    def list_for_employee(self, *, employee_id: str, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_punches
                WHERE employee_id=%s AND occurred_at >= %s AND occurred_at < %s
                ORDER BY occurred_at ASC, punch_id ASC
                """,
                (employee_id, start, end),
            )
            return [self._to_model(r) for r in fetchall(cur)]

    def list_for_business(self, *, business_id: str, start: datetime, end: datetime) -> Sequence[PunchEvent]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM time_punches
                WHERE business_id=%s AND occurred_at >= %s AND occurred_at < %s
                ORDER BY occurred_at ASC, punch_id ASC
                """,
                (business_id, start, end),
            )
            return [self._to_model(r) for r in fetchall(cur)]
