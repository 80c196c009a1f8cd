from __future__ import annotations

from dataclasses import dataclass

from .activity.mysql_activity_repository import MySQLActivityLogRepository
from .activity.repository import ActivityLogRepository
from .activity.service import ActivityLogger
from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceApprovalService, AttendanceRecorder
from .database.connection import DatabaseConnection, DBConfig
from .payroll.aggregator import PeriodAggregator
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollBatchRunner
from .settings.mysql_config_repository import MySQLConfigRepository
from .settings.repository import ConfigRepository
from .settings.service import ConfigService
from .users.mysql_position_repository import MySQLPositionRepository
from .users.mysql_user_repository import MySQLUserRepository
from .users.position_repository import PositionRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    positions_repo: PositionRepository
    attendance_repo: AttendanceRepository
    payroll_repo: PayrollRepository
    config_repo: ConfigRepository
    activity_repo: ActivityLogRepository

    config_service: ConfigService
    activity_logger: ActivityLogger
    attendance_recorder: AttendanceRecorder
    attendance_approval: AttendanceApprovalService
    payroll_runner: PayrollBatchRunner


def wire(
    *,
    users_repo: UserRepository,
    positions_repo: PositionRepository,
    attendance_repo: AttendanceRepository,
    payroll_repo: PayrollRepository,
    config_repo: ConfigRepository,
    activity_repo: ActivityLogRepository,
) -> Container:
    """Build the services on top of any set of repositories."""

    config_service = ConfigService(config_repo)
    activity_logger = ActivityLogger(activity_repo)
    attendance_recorder = AttendanceRecorder(
        attendance_repo,
        users_repo,
        config_service,
        activity_logger,
        strategy_factory=AttendanceStrategyFactory(),
    )
    payroll_runner = PayrollBatchRunner(
        payroll_repo,
        users_repo,
        positions_repo,
        config_service,
        PeriodAggregator(attendance_repo),
        calculator=StandardPayrollCalculator(),
    )

    return Container(
        users_repo=users_repo,
        positions_repo=positions_repo,
        attendance_repo=attendance_repo,
        payroll_repo=payroll_repo,
        config_repo=config_repo,
        activity_repo=activity_repo,
        config_service=config_service,
        activity_logger=activity_logger,
        attendance_recorder=attendance_recorder,
        attendance_approval=AttendanceApprovalService(attendance_repo),
        payroll_runner=payroll_runner,
    )


def build_container(*, db_config: dict) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return wire(
        users_repo=MySQLUserRepository(conn),
        positions_repo=MySQLPositionRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
        config_repo=MySQLConfigRepository(conn),
        activity_repo=MySQLActivityLogRepository(conn),
    )
