"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

from datetime import date, datetime, time, timedelta

from src.time_attendance.time_attendance.container import BACKEND_MEMORY, build_container
from src.time_attendance.time_attendance.memberships.model import Membership


def main():
    container = build_container(
        backend=BACKEND_MEMORY,
        memberships=[Membership(employee_id="emp-1", business_id="biz-1", hourly_rate=20.0)],
    )
    ledger = container.punch_service

    monday = date(2026, 2, 2)
    for offset in range(5):
        day = monday + timedelta(days=offset)
        for punch_type, hour, minute in (
            ("clock_in", 9, 0),
            ("break_start", 12, 0),
            ("break_end", 12, 30),
            ("clock_out", 17, 0),
        ):
            ledger.record_punch(
                employee_id="emp-1",
                business_id="biz-1",
                punch_type=punch_type,
                occurred_at=datetime.combine(day, time(hour, minute)),
            )

    sunday = monday + timedelta(days=6)
    print(container.summary_service.get_weekly_summary(employee_id="emp-1", period_start=monday, period_end=sunday))

    ts = container.timesheet_service.submit_for_period(employee_id="emp-1", period_start=monday, period_end=sunday)
    ts = container.timesheet_service.approve(timesheet_id=ts.timesheet_id, approver_id="mgr-1")
    print(ts.to_dict())


if __name__ == "__main__":
    main()
