from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from .core.constants import OVERTIME_MULTIPLIER, OVERTIME_THRESHOLD_HOURS
from .database.connection import DatabaseConnection, DBConfig
from .hours.aggregator import HoursAggregator
from .memberships.memory_membership_repository import InMemoryMembershipRepository
from .memberships.model import Membership
from .memberships.mysql_membership_repository import MySQLMembershipRepository
from .memberships.repository import MembershipRepository
from .notifications.signals import TimesheetEventPublisher
from .payroll.calculator.standard_calculator import StandardPayCalculator
from .payroll.service import WeeklySummaryService
from .punches.memory_punch_repository import InMemoryPunchRepository
from .punches.mysql_punch_repository import MySQLPunchRepository
from .punches.repository import PunchRepository
from .punches.service import PunchLedgerService
from .status.dashboard import DashboardService
from .status.monitor import LiveStatusMonitor
from .timesheets.memory_timesheet_repository import InMemoryTimesheetRepository
from .timesheets.mysql_timesheet_repository import MySQLTimesheetRepository
from .timesheets.repository import TimesheetRepository
from .timesheets.service import TimesheetService

BACKEND_MYSQL = "mysql"
BACKEND_MEMORY = "memory"


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    punches_repo: PunchRepository
    memberships_repo: MembershipRepository
    timesheets_repo: TimesheetRepository

    punch_service: PunchLedgerService
    summary_service: WeeklySummaryService
    timesheet_service: TimesheetService
    status_monitor: LiveStatusMonitor
    dashboard_service: DashboardService


def build_container(
    *,
    db_config: Optional[dict] = None,
    backend: str = BACKEND_MYSQL,
    overtime_threshold_hours: float = OVERTIME_THRESHOLD_HOURS,
    overtime_multiplier: float = OVERTIME_MULTIPLIER,
    memberships: Iterable[Membership] = (),
) -> Container:
    if backend == BACKEND_MYSQL:
        if not db_config:
            raise ValueError("db_config is required for the mysql backend")
        conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        punches_repo = MySQLPunchRepository(conn)
        memberships_repo = MySQLMembershipRepository(conn)
        timesheets_repo = MySQLTimesheetRepository(conn)
    elif backend == BACKEND_MEMORY:
        conn = None
        punches_repo = InMemoryPunchRepository()
        memberships_repo = InMemoryMembershipRepository(memberships)
        timesheets_repo = InMemoryTimesheetRepository()
    else:
        raise ValueError(f"Unknown storage backend: {backend!r}")

    punch_service = PunchLedgerService(punches_repo)
    summary_service = WeeklySummaryService(
        punches_repo,
        memberships_repo,
        aggregator=HoursAggregator(overtime_threshold_hours=overtime_threshold_hours),
        calculator=StandardPayCalculator(overtime_multiplier=overtime_multiplier),
    )
    timesheet_service = TimesheetService(
        timesheets_repo,
        summary_service,
        memberships_repo,
        publisher=TimesheetEventPublisher(),
    )
    status_monitor = LiveStatusMonitor(punches_repo)
    dashboard_service = DashboardService(status_monitor, timesheet_service)

    return Container(
        conn=conn,
        punches_repo=punches_repo,
        memberships_repo=memberships_repo,
        timesheets_repo=timesheets_repo,
        punch_service=punch_service,
        summary_service=summary_service,
        timesheet_service=timesheet_service,
        status_monitor=status_monitor,
        dashboard_service=dashboard_service,
    )
