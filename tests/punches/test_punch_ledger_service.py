from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.time_attendance.time_attendance.core.enums import PunchType, ReportPeriod
from src.time_attendance.time_attendance.core.exceptions import ValidationError
from src.time_attendance.time_attendance.memberships.memory_membership_repository import InMemoryMembershipRepository
from src.time_attendance.time_attendance.payroll.service import WeeklySummaryService
from src.time_attendance.time_attendance.punches import service as punch_service_module
from src.time_attendance.time_attendance.punches.memory_punch_repository import InMemoryPunchRepository
from src.time_attendance.time_attendance.punches.service import PunchLedgerService


@pytest.fixture()
def ledger():
    return PunchLedgerService(InMemoryPunchRepository(clock=lambda: datetime(2026, 2, 4, 12, 0)))


def test_record_punch_appends_to_ledger(ledger):
    event = ledger.record_punch(
        employee_id=" emp-1 ",
        business_id="biz-1",
        punch_type="clock_in",
        occurred_at=datetime(2026, 2, 2, 9, 0),
        notes="  ",
    )

    assert event.punch_id == 1
    assert event.employee_id == "emp-1"
    assert event.punch_type == PunchType.CLOCK_IN
    assert event.notes is None
    assert event.created_at == datetime(2026, 2, 4, 12, 0)


def test_manual_punch_keeps_reason_and_location(ledger):
    event = ledger.record_punch(
        employee_id="emp-1",
        business_id="biz-1",
        punch_type=PunchType.CLOCK_OUT,
        occurred_at=datetime(2026, 2, 2, 17, 0),
        is_manual=True,
        manual_reason="forgot to clock out",
        location_lat="10.5",
        location_lng=106.7,
    )

    assert event.is_manual is True
    assert event.manual_reason == "forgot to clock out"
    assert (event.location_lat, event.location_lng) == (10.5, 106.7)
    assert event.to_dict()["type"] == "clock_out"


def test_occurred_at_defaults_to_now(ledger, monkeypatch):
    monkeypatch.setattr(punch_service_module, "now_local", lambda: datetime(2026, 2, 3, 8, 59))

    event = ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_in")

    assert event.occurred_at == datetime(2026, 2, 3, 8, 59)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"employee_id": "", "business_id": "biz-1", "punch_type": "clock_in"},
        {"employee_id": "emp-1", "business_id": " ", "punch_type": "clock_in"},
        {"employee_id": "emp-1", "business_id": "biz-1", "punch_type": "lunch"},
        {"employee_id": "emp-1", "business_id": "biz-1", "punch_type": "clock_in", "occurred_at": "09:00"},
        {"employee_id": "emp-1", "business_id": "biz-1", "punch_type": "clock_in", "location_lat": "north"},
    ],
)
def test_malformed_punch_rejected(ledger, kwargs):
    with pytest.raises(ValidationError):
        ledger.record_punch(**kwargs)


def test_out_of_order_punches_are_accepted(ledger):
    # sequencing is not validated at write time
    ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_out", occurred_at=datetime(2026, 2, 2, 8, 0))
    ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_out", occurred_at=datetime(2026, 2, 2, 9, 0))

    punches = ledger.list_for_employee(employee_id="emp-1", start=date(2026, 2, 2), end=date(2026, 2, 2))

    assert [p.punch_type for p in punches] == [PunchType.CLOCK_OUT, PunchType.CLOCK_OUT]


def test_list_for_employee_is_chronological_and_inclusive(ledger):
    ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_out", occurred_at=datetime(2026, 2, 3, 23, 59))
    ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_in", occurred_at=datetime(2026, 2, 2, 0, 0))
    ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_in", occurred_at=datetime(2026, 2, 4, 0, 0))
    ledger.record_punch(employee_id="emp-2", business_id="biz-1", punch_type="clock_in", occurred_at=datetime(2026, 2, 2, 9, 0))

    punches = ledger.list_for_employee(employee_id="emp-1", start=date(2026, 2, 2), end=date(2026, 2, 3))

    assert [p.occurred_at for p in punches] == [datetime(2026, 2, 2, 0, 0), datetime(2026, 2, 3, 23, 59)]


def test_list_for_employee_rejects_inverted_range(ledger):
    with pytest.raises(ValidationError):
        ledger.list_for_employee(employee_id="emp-1", start=date(2026, 2, 3), end=date(2026, 2, 2))


@pytest.mark.parametrize(
    "period, expected_days",
    [
        (ReportPeriod.TODAY, [4]),
        (ReportPeriod.YESTERDAY, [3]),
        (ReportPeriod.CURRENT_WEEK, [2, 3, 4]),
        (ReportPeriod.LAST_WEEK, [1]),
    ],
)
def test_list_for_business_by_report_period(ledger, period, expected_days):
    # 2026-02-04 is a Wednesday; 2026-02-01 is the Sunday before
    for day in (1, 2, 3, 4):
        ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_in", occurred_at=datetime(2026, 2, day, 9, 0))
    ledger.record_punch(employee_id="emp-9", business_id="biz-2", punch_type="clock_in", occurred_at=datetime(2026, 2, 4, 9, 0))

    punches = ledger.list_for_business(business_id="biz-1", period=period, today=date(2026, 2, 4))

    assert [p.occurred_at.day for p in punches] == expected_days


def test_offset_timestamps_are_stored_as_local_wall_clock(ledger):
    utc = datetime(2026, 2, 4, 12, 0, tzinfo=timezone.utc)
    ist = datetime(2026, 2, 4, 18, 30, tzinfo=timezone(timedelta(hours=5, minutes=30)))

    first = ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_in", occurred_at=utc)
    second = ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_out", occurred_at=ist)
    ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="break_start", occurred_at=datetime(2026, 2, 4, 8, 0))

    assert first.occurred_at.tzinfo is None
    assert first.occurred_at == utc.astimezone().replace(tzinfo=None)
    assert second.occurred_at == first.occurred_at + timedelta(hours=1)
    punches = ledger.list_for_employee(employee_id="emp-1", start=date(2026, 2, 3), end=date(2026, 2, 5))
    assert len(punches) == 3


def test_offset_punches_do_not_break_weekly_summary():
    punches_repo = InMemoryPunchRepository()
    ledger = PunchLedgerService(punches_repo)
    summaries = WeeklySummaryService(punches_repo, InMemoryMembershipRepository())
    ledger.record_punch(
        employee_id="emp-1",
        business_id="biz-1",
        punch_type="clock_in",
        occurred_at=datetime(2026, 2, 4, 12, 0, tzinfo=timezone.utc),
    )
    ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_out", occurred_at=datetime(2026, 2, 4, 23, 0))

    summary = summaries.get_weekly_summary(employee_id="emp-1", period_start=date(2026, 2, 2), period_end=date(2026, 2, 8))

    assert 0 <= summary.total_hours <= 24
