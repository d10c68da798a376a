from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import (
    DEFAULT_NOTICE_DAYS,
    HALF_DAY_THRESHOLD_MINUTES,
    VACATION_NOTICE_DAYS,
    WORKING_DAYS_PER_MONTH,
    WORKING_HOURS_PER_DAY,
)
from .database.connection import DBConfig, DatabaseConnection
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .notifications.notifier import Notifier, build_notifier
from .payroll.calculator.standard_calculator import StandardSalaryCalculator
from .payroll.service import SalaryService
from .projects.mysql_project_repository import MySQLProjectRepository
from .projects.service import ProjectService
from .reports.service import AttendanceReportService
from .users.mysql_user_repository import MySQLUserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    notifier: Notifier

    users_repo: MySQLUserRepository
    attendance_repo: MySQLAttendanceRepository
    leaves_repo: MySQLLeaveRepository
    projects_repo: MySQLProjectRepository

    auth_service: AuthService
    user_service: UserService
    attendance_service: AttendanceService
    leave_service: LeaveService
    salary_service: SalaryService
    report_service: AttendanceReportService
    project_service: ProjectService


def build_container(*, db_config: dict, settings: Optional[dict] = None) -> Container:
    settings = settings or {}
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    notifier = build_notifier(settings)
    frontend_url = settings.get("FRONTEND_URL") or "http://localhost:3000"

    users_repo = MySQLUserRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    projects_repo = MySQLProjectRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        users_repo,
        strategy_factory=AttendanceStrategyFactory(),
        half_day_threshold_minutes=int(settings.get("HALF_DAY_THRESHOLD_MINUTES", HALF_DAY_THRESHOLD_MINUTES)),
    )
    leave_service = LeaveService(
        leaves_repo,
        users_repo,
        attendance_service,
        notifier=notifier,
        frontend_url=frontend_url,
        vacation_notice_days=int(settings.get("VACATION_NOTICE_DAYS", VACATION_NOTICE_DAYS)),
        default_notice_days=int(settings.get("DEFAULT_NOTICE_DAYS", DEFAULT_NOTICE_DAYS)),
    )
    salary_service = SalaryService(
        users_repo,
        attendance_repo,
        leaves_repo,
        calculator=StandardSalaryCalculator(
            working_days_per_month=int(settings.get("WORKING_DAYS_PER_MONTH", WORKING_DAYS_PER_MONTH)),
            working_hours_per_day=int(settings.get("WORKING_HOURS_PER_DAY", WORKING_HOURS_PER_DAY)),
        ),
    )

    return Container(
        conn=conn,
        notifier=notifier,
        users_repo=users_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        projects_repo=projects_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(
            users_repo,
            attendance_repo,
            leaves_repo,
            projects_repo,
            notifier=notifier,
            frontend_url=frontend_url,
        ),
        attendance_service=attendance_service,
        leave_service=leave_service,
        salary_service=salary_service,
        report_service=AttendanceReportService(attendance_repo, users_repo),
        project_service=ProjectService(projects_repo, users_repo),
    )
