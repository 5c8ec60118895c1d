from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import TimesheetStatus
from ..core.exceptions import DuplicateSubmission
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key, to_float
from .model import NewTimesheet, Timesheet
from .repository import TimesheetRepository

_COLUMNS = """
    timesheet_id, employee_id, business_id, period_start, period_end,
    regular_hours, overtime_hours, total_hours, break_hours, pay_rate, total_pay,
    status, submitted_at, approved_at, approved_by, rejected_at, rejected_by, rejection_reason
"""


class MySQLTimesheetRepository(TimesheetRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_model(r: dict) -> Timesheet:
        return Timesheet(
            timesheet_id=int(r["timesheet_id"]),
            employee_id=str(r["employee_id"]),
            business_id=str(r["business_id"]),
            period_start=r["period_start"],
            period_end=r["period_end"],
            regular_hours=to_float(r["regular_hours"]),
            overtime_hours=to_float(r["overtime_hours"]),
            total_hours=to_float(r["total_hours"]),
            break_hours=to_float(r["break_hours"]),
            pay_rate=to_float(r["pay_rate"]),
            total_pay=to_float(r["total_pay"]),
            status=TimesheetStatus(r["status"]),
            submitted_at=r["submitted_at"],
            approved_at=r.get("approved_at"),
            approved_by=r.get("approved_by"),
            rejected_at=r.get("rejected_at"),
            rejected_by=r.get("rejected_by"),
            rejection_reason=r.get("rejection_reason"),
        )

    def create(self, new: NewTimesheet) -> Timesheet:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO timesheets(
                        employee_id, business_id, period_start, period_end,
                        regular_hours, overtime_hours, total_hours, break_hours,
                        pay_rate, total_pay, status, submitted_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        new.employee_id,
                        new.business_id,
                        new.period_start,
                        new.period_end,
                        new.regular_hours,
                        new.overtime_hours,
                        new.total_hours,
                        new.break_hours,
                        new.pay_rate,
                        new.total_pay,
                        TimesheetStatus.SUBMITTED.value,
                        new.submitted_at,
                    ),
                )
                timesheet_id = int(cur.lastrowid)
                cur.execute(f"SELECT {_COLUMNS} FROM timesheets WHERE timesheet_id=%s", (timesheet_id,))
                return self._to_model(fetchone(cur))
        except IntegrityError as e:
            if is_duplicate_key(e):
                raise DuplicateSubmission(
                    f"Timesheet already submitted for {new.period_start}..{new.period_end}"
                ) from e
            raise

    def get(self, timesheet_id: int) -> Optional[Timesheet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM timesheets WHERE timesheet_id=%s", (int(timesheet_id),))
            r = fetchone(cur)
            return self._to_model(r) if r else None

    def find_for_period(self, *, employee_id: str, period_start: date, period_end: date) -> Optional[Timesheet]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM timesheets
                WHERE employee_id=%s AND period_start=%s AND period_end=%s
                """,
                (employee_id, period_start, period_end),
            )
            r = fetchone(cur)
            return self._to_model(r) if r else None

    def list_timesheets(
        self,
        *,
        business_id: Optional[str] = None,
        employee_id: Optional[str] = None,
        status: Optional[TimesheetStatus] = None,
        period_start: Optional[date] = None,
        period_end: Optional[date] = None,
        limit: int = 200,
    ) -> Sequence[Timesheet]:
        clauses = ["1=1"]
        params: list[object] = []

        if business_id is not None:
            clauses.append("business_id=%s")
            params.append(business_id)
        if employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(employee_id)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if period_start is not None:
            clauses.append("period_start>=%s")
            params.append(period_start)
        if period_end is not None:
            clauses.append("period_end<=%s")
            params.append(period_end)

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM timesheets
                WHERE {where}
                ORDER BY period_start DESC, timesheet_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [self._to_model(r) for r in fetchall(cur)]

    def mark_approved(self, *, timesheet_id: int, approver_id: str, decided_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE timesheets
                SET status=%s, approved_at=%s, approved_by=%s
                WHERE timesheet_id=%s AND status=%s
                """,
                (
                    TimesheetStatus.APPROVED.value,
                    decided_at,
                    approver_id,
                    int(timesheet_id),
                    TimesheetStatus.SUBMITTED.value,
                ),
            )
            return cur.rowcount > 0

    def mark_rejected(self, *, timesheet_id: int, approver_id: str, reason: str, decided_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE timesheets
                SET status=%s, rejected_at=%s, rejected_by=%s, rejection_reason=%s
                WHERE timesheet_id=%s AND status=%s
                """,
                (
                    TimesheetStatus.REJECTED.value,
                    decided_at,
                    approver_id,
                    reason,
                    int(timesheet_id),
                    TimesheetStatus.SUBMITTED.value,
                ),
            )
            return cur.rowcount > 0

    def count_by_status(self, *, business_id: str) -> dict[TimesheetStatus, int]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT status, COUNT(*) AS n
                FROM timesheets
                WHERE business_id=%s
                GROUP BY status
                """,
                (business_id,),
            )
            counts = {s: 0 for s in TimesheetStatus}
            for r in fetchall(cur):
                counts[TimesheetStatus(r["status"])] = int(r["n"])
            return counts
