from __future__ import annotations

import threading
from datetime import date, datetime, timedelta

import pytest

from src.time_attendance.time_attendance.core.enums import TimesheetStatus
from src.time_attendance.time_attendance.core.exceptions import (
    DuplicateSubmission,
    InvalidTransition,
    MissingReason,
    NotFoundError,
    SelfApproval,
    ValidationError,
)
from src.time_attendance.time_attendance.memberships.memory_membership_repository import InMemoryMembershipRepository
from src.time_attendance.time_attendance.memberships.model import Membership
from src.time_attendance.time_attendance.notifications.signals import (
    timesheet_approved,
    timesheet_rejected,
    timesheet_submitted,
)
from src.time_attendance.time_attendance.payroll.model import WeeklySummary
from src.time_attendance.time_attendance.payroll.service import WeeklySummaryService
from src.time_attendance.time_attendance.punches.memory_punch_repository import InMemoryPunchRepository
from src.time_attendance.time_attendance.punches.service import PunchLedgerService
from src.time_attendance.time_attendance.timesheets.memory_timesheet_repository import InMemoryTimesheetRepository
from src.time_attendance.time_attendance.timesheets.service import TimesheetService

MONDAY = date(2026, 2, 2)
SUNDAY = MONDAY + timedelta(days=6)

SUMMARY = WeeklySummary(
    regular_hours=40,
    overtime_hours=5,
    total_hours=45,
    break_hours=2.5,
    estimated_pay=950.0,
)


class LosingRaceRepo(InMemoryTimesheetRepository):
    """Another approver always gets there first."""

    def mark_approved(self, **kwargs) -> bool:
        return False

    def mark_rejected(self, **kwargs) -> bool:
        return False


class NoPrecheckRepo(InMemoryTimesheetRepository):
    """Hides existing rows from the read check so only create() can catch duplicates."""

    def find_for_period(self, **kwargs):
        return None


def _service(repo=None, punches_repo=None):
    punches_repo = punches_repo or InMemoryPunchRepository()
    memberships = InMemoryMembershipRepository(
        [
            Membership(employee_id="emp-1", business_id="biz-1", hourly_rate=20.0),
            Membership(employee_id="mgr-1", business_id="biz-1", hourly_rate=35.0),
        ]
    )
    summaries = WeeklySummaryService(punches_repo, memberships)
    return TimesheetService(repo or InMemoryTimesheetRepository(), summaries, memberships)


def _submit(service: TimesheetService, employee_id: str = "emp-1", period_start: date = MONDAY):
    return service.submit(
        employee_id=employee_id,
        business_id="biz-1",
        period_start=period_start,
        period_end=period_start + timedelta(days=6),
        summary=SUMMARY,
        pay_rate=20.0,
    )


def test_submit_snapshots_the_summary():
    ts = _submit(_service())

    assert ts.status == TimesheetStatus.SUBMITTED
    assert (ts.regular_hours, ts.overtime_hours, ts.total_hours) == (40, 5, 45)
    assert ts.total_pay == 950.0
    assert ts.pay_rate == 20.0
    assert ts.submitted_at is not None
    assert ts.approved_by is None and ts.rejection_reason is None


def test_submit_for_period_computes_from_ledger():
    punches_repo = InMemoryPunchRepository()
    ledger = PunchLedgerService(punches_repo)
    for offset in range(5):
        day = MONDAY + timedelta(days=offset)
        ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_in", occurred_at=datetime(2026, 2, day.day, 8))
        ledger.record_punch(employee_id="emp-1", business_id="biz-1", punch_type="clock_out", occurred_at=datetime(2026, 2, day.day, 17))

    ts = _service(punches_repo=punches_repo).submit_for_period(employee_id="emp-1", period_start=MONDAY, period_end=SUNDAY)

    assert ts.business_id == "biz-1"
    assert ts.total_hours == 45
    assert ts.overtime_hours == 5
    assert ts.total_pay == 950.0


def test_zero_hour_week_can_be_submitted():
    ts = _service().submit_for_period(employee_id="emp-1", period_start=MONDAY, period_end=SUNDAY)

    assert ts.total_hours == 0
    assert ts.total_pay == 0


def test_submit_for_period_requires_membership():
    with pytest.raises(ValidationError):
        _service().submit_for_period(employee_id="stranger", period_start=MONDAY, period_end=SUNDAY)


def test_submit_requires_seven_day_period():
    with pytest.raises(ValidationError):
        _service().submit(
            employee_id="emp-1",
            business_id="biz-1",
            period_start=MONDAY,
            period_end=MONDAY + timedelta(days=13),
            summary=SUMMARY,
            pay_rate=20.0,
        )


def test_second_submission_for_same_period_is_refused():
    service = _service()
    _submit(service)

    with pytest.raises(DuplicateSubmission):
        _submit(service)

    assert len(service.list_timesheets(employee_id="emp-1")) == 1


def test_resubmission_refused_even_after_rejection():
    service = _service()
    ts = _submit(service)
    service.reject(timesheet_id=ts.timesheet_id, approver_id="mgr-1", reason="missing Friday")

    with pytest.raises(DuplicateSubmission):
        _submit(service)


def test_other_periods_and_employees_are_independent():
    service = _service()
    _submit(service)
    _submit(service, period_start=MONDAY + timedelta(days=7))
    _submit(service, employee_id="emp-2")

    assert len(service.list_timesheets()) == 3


def test_store_constraint_catches_duplicates_missed_by_precheck():
    service = _service(NoPrecheckRepo())
    _submit(service)

    with pytest.raises(DuplicateSubmission):
        _submit(service)


def test_concurrent_submissions_persist_exactly_one():
    repo = NoPrecheckRepo()
    service = _service(repo)
    barrier = threading.Barrier(8)
    results: list[str] = []

    def worker():
        barrier.wait()
        try:
            _submit(service)
            results.append("ok")
        except DuplicateSubmission:
            results.append("duplicate")

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert results.count("ok") == 1
    assert results.count("duplicate") == 7
    assert len(repo.list_timesheets(employee_id="emp-1")) == 1


def test_approve_records_approver():
    service = _service()
    ts = _submit(service)

    approved = service.approve(timesheet_id=ts.timesheet_id, approver_id="mgr-1")

    assert approved.status == TimesheetStatus.APPROVED
    assert approved.approved_by == "mgr-1"
    assert approved.approved_at is not None
    assert service.get(ts.timesheet_id).status == TimesheetStatus.APPROVED


def test_reject_records_reason():
    service = _service()
    ts = _submit(service)

    rejected = service.reject(timesheet_id=ts.timesheet_id, approver_id="mgr-1", reason="  missing Friday ")

    assert rejected.status == TimesheetStatus.REJECTED
    assert rejected.rejected_by == "mgr-1"
    assert rejected.rejection_reason == "missing Friday"
    assert rejected.approved_by is None


@pytest.mark.parametrize("first", ["approve", "reject"])
@pytest.mark.parametrize("second", ["approve", "reject"])
def test_decided_timesheets_are_terminal(first, second):
    service = _service()
    ts = _submit(service)

    def decide(action):
        if action == "approve":
            return service.approve(timesheet_id=ts.timesheet_id, approver_id="mgr-1")
        return service.reject(timesheet_id=ts.timesheet_id, approver_id="mgr-1", reason="no")

    decided = decide(first)
    with pytest.raises(InvalidTransition):
        decide(second)

    assert service.get(ts.timesheet_id) == decided


def test_employee_cannot_approve_own_timesheet():
    service = _service()
    ts = _submit(service)

    with pytest.raises(SelfApproval):
        service.approve(timesheet_id=ts.timesheet_id, approver_id="emp-1")

    assert service.get(ts.timesheet_id).status == TimesheetStatus.SUBMITTED


def test_employee_cannot_reject_own_timesheet():
    service = _service()
    ts = _submit(service)

    with pytest.raises(SelfApproval):
        service.reject(timesheet_id=ts.timesheet_id, approver_id="emp-1", reason="oops")


@pytest.mark.parametrize("reason", ["", "   ", None])
def test_reject_requires_reason(reason):
    service = _service()
    ts = _submit(service)

    with pytest.raises(MissingReason):
        service.reject(timesheet_id=ts.timesheet_id, approver_id="mgr-1", reason=reason)

    assert service.get(ts.timesheet_id).status == TimesheetStatus.SUBMITTED


def test_unknown_timesheet_not_found():
    service = _service()

    with pytest.raises(NotFoundError):
        service.approve(timesheet_id=404, approver_id="mgr-1")
    with pytest.raises(NotFoundError):
        service.get(404)


def test_lost_decision_race_is_invalid_transition():
    service = _service(LosingRaceRepo())
    ts = _submit(service)

    with pytest.raises(InvalidTransition):
        service.approve(timesheet_id=ts.timesheet_id, approver_id="mgr-1")
    with pytest.raises(InvalidTransition):
        service.reject(timesheet_id=ts.timesheet_id, approver_id="mgr-1", reason="late")


def test_lifecycle_signals_are_sent():
    service = _service()
    received = []

    def receiver(sender, *, timesheet, **_):
        received.append((timesheet.status, timesheet.timesheet_id))

    with timesheet_submitted.connected_to(receiver), timesheet_approved.connected_to(receiver), timesheet_rejected.connected_to(receiver):
        first = _submit(service)
        second = _submit(service, period_start=MONDAY + timedelta(days=7))
        service.approve(timesheet_id=first.timesheet_id, approver_id="mgr-1")
        service.reject(timesheet_id=second.timesheet_id, approver_id="mgr-1", reason="typo")

    assert received == [
        (TimesheetStatus.SUBMITTED, first.timesheet_id),
        (TimesheetStatus.SUBMITTED, second.timesheet_id),
        (TimesheetStatus.APPROVED, first.timesheet_id),
        (TimesheetStatus.REJECTED, second.timesheet_id),
    ]


def test_failed_decision_sends_no_signal():
    service = _service()
    ts = _submit(service)
    received = []

    with timesheet_approved.connected_to(lambda sender, **kw: received.append(kw)):
        with pytest.raises(SelfApproval):
            service.approve(timesheet_id=ts.timesheet_id, approver_id="emp-1")

    assert received == []


def test_list_filters_and_counts():
    service = _service()
    a = _submit(service)
    b = _submit(service, period_start=MONDAY + timedelta(days=7))
    _submit(service, employee_id="emp-2")
    service.approve(timesheet_id=a.timesheet_id, approver_id="mgr-1")
    service.reject(timesheet_id=b.timesheet_id, approver_id="mgr-1", reason="typo")

    pending = service.list_timesheets(business_id="biz-1", status=TimesheetStatus.SUBMITTED)
    emp1 = service.list_timesheets(employee_id="emp-1")

    assert [ts.employee_id for ts in pending] == ["emp-2"]
    assert [ts.period_start for ts in emp1] == [MONDAY + timedelta(days=7), MONDAY]
    assert service.count_by_status(business_id="biz-1") == {
        TimesheetStatus.SUBMITTED: 1,
        TimesheetStatus.APPROVED: 1,
        TimesheetStatus.REJECTED: 1,
    }


def test_export_csv_has_header_and_rows():
    service = _service()
    ts = _submit(service)
    service.approve(timesheet_id=ts.timesheet_id, approver_id="mgr-1")

    lines = service.export_csv(business_id="biz-1").splitlines()

    assert lines[0].split(",")[:4] == ["id", "employee_id", "period_start", "period_end"]
    assert len(lines) == 2
    assert lines[1].startswith(f"{ts.timesheet_id},emp-1,2026-02-02,2026-02-08,")
    assert ",approved," in lines[1]
    assert service.export_csv(business_id="biz-1", status=TimesheetStatus.REJECTED).splitlines()[1:] == []
