from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Iterable, List, Optional, Sequence

from ..common.datetime_utils import minutes_between
from ..core.constants import DEFAULT_HISTORY_LIMIT, HALF_DAY_THRESHOLD_MINUTES
from ..core.enums import AttendanceStatus, LeaveType, Role
from ..core.exceptions import (
    AlreadyPunchedIn,
    AlreadyPunchedOut,
    AuthorizationError,
    InvalidRange,
    LunchAlreadyEnded,
    LunchAlreadyStarted,
    LunchNotStarted,
    NotFoundError,
    NotPunchedIn,
)
from ..users.repository import UserRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Time Ledger: punch events in, one record per employee per day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        half_day_threshold_minutes: int = HALF_DAY_THRESHOLD_MINUTES,
    ):
        self._attendance = attendance
        self._users = users
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._half_day_threshold = int(half_day_threshold_minutes)

    def _require_employee(self, *, current_role: Role, user_id: int) -> None:
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can record attendance")
        if not self._users.get_by_id(int(user_id)):
            raise NotFoundError("Employee not found")

    @staticmethod
    def _require_self_or_admin(*, current_role: Role, caller_id: int, user_id: int) -> None:
        if current_role != Role.ADMIN and int(caller_id) != int(user_id):
            raise AuthorizationError("You can only view your own attendance")

    def _today_record(self, user_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_user_and_date(int(user_id), today)

    def _save(self, record: AttendanceRecord) -> AttendanceRecord:
        self._attendance.update_record(record)
        return record

    def punch_in(self, *, current_role: Role, user_id: int, now: datetime | None = None) -> AttendanceRecord:
        now = now or datetime.now()
        today = now.date()
        self._require_employee(current_role=current_role, user_id=user_id)

        existing = self._today_record(user_id, today)
        if existing and existing.punch_in is not None:
            raise AlreadyPunchedIn("Already punched in for today")

        decision = self._factory.for_punch_in().decide_punch_in(now=now)
        if existing:
            record = self._save(replace(existing, punch_in=now, status=decision.status))
        else:
            attendance_id = self._attendance.create_punch_in(
                user_id=int(user_id),
                work_date=today,
                punch_in=now,
                status=decision.status,
            )
            record = AttendanceRecord(
                attendance_id=attendance_id,
                user_id=int(user_id),
                work_date=today,
                punch_in=now,
                status=decision.status,
            )
        logger.info("Employee %s punched in at %s", user_id, now.isoformat())
        return record

    def lunch_start(self, *, current_role: Role, user_id: int, now: datetime | None = None) -> AttendanceRecord:
        now = now or datetime.now()
        self._require_employee(current_role=current_role, user_id=user_id)

        record = self._today_record(user_id, now.date())
        if not record or record.punch_in is None:
            raise NotPunchedIn("Must punch in first")
        if record.lunch_start is not None:
            raise LunchAlreadyStarted("Lunch break already started")

        return self._save(replace(record, lunch_start=now))

    def lunch_end(self, *, current_role: Role, user_id: int, now: datetime | None = None) -> AttendanceRecord:
        now = now or datetime.now()
        self._require_employee(current_role=current_role, user_id=user_id)

        record = self._today_record(user_id, now.date())
        if not record or record.lunch_start is None:
            raise LunchNotStarted("Lunch break has not started")
        if record.lunch_end is not None:
            raise LunchAlreadyEnded("Lunch break already ended")

        return self._save(self._close_lunch(record, now))

    @staticmethod
    def _close_lunch(record: AttendanceRecord, now: datetime) -> AttendanceRecord:
        accrued = minutes_between(record.lunch_start, now)
        return replace(record, lunch_end=now, total_break_minutes=record.total_break_minutes + accrued)

    def punch_out(self, *, current_role: Role, user_id: int, now: datetime | None = None) -> AttendanceRecord:
        now = now or datetime.now()
        self._require_employee(current_role=current_role, user_id=user_id)

        record = self._today_record(user_id, now.date())
        if not record or record.punch_in is None:
            raise NotPunchedIn("Must punch in first")
        if record.punch_out is not None:
            raise AlreadyPunchedOut("Already punched out for today")

        if record.lunch_open:
            record = self._close_lunch(record, now)

        work_minutes = minutes_between(record.punch_in, now) - record.total_break_minutes
        strategy = self._factory.for_punch_out(work_minutes=work_minutes, half_day_threshold=self._half_day_threshold)
        decision = strategy.decide_punch_out(work_minutes=work_minutes, half_day_threshold=self._half_day_threshold)

        record = self._save(
            replace(record, punch_out=now, total_work_minutes=work_minutes, status=decision.status)
        )
        logger.info(
            "Employee %s punched out: %s minutes, %s%s",
            user_id,
            work_minutes,
            decision.status.value,
            f" ({decision.note})" if decision.note else "",
        )
        return record

    def mark_leave_days(self, *, user_id: int, days: Iterable[date], leave_type: LeaveType) -> int:
        """Ensure every given day is marked Leave for the employee (idempotent)."""
        return self._attendance.upsert_leave_days(user_id=int(user_id), work_dates=list(days), leave_type=leave_type)

    def mark_leave_day(self, *, user_id: int, day: date, leave_type: LeaveType) -> int:
        return self.mark_leave_days(user_id=user_id, days=[day], leave_type=leave_type)

    def get_day(self, *, current_role: Role, caller_id: int, user_id: int, day: date) -> Optional[AttendanceRecord]:
        self._require_self_or_admin(current_role=current_role, caller_id=caller_id, user_id=user_id)
        return self._attendance.get_for_user_and_date(int(user_id), day)

    def get_today(self, *, user_id: int, now: datetime | None = None) -> Optional[AttendanceRecord]:
        now = now or datetime.now()
        return self._attendance.get_for_user_and_date(int(user_id), now.date())

    def history(self, *, user_id: int, limit: int = DEFAULT_HISTORY_LIMIT) -> List[AttendanceRecord]:
        rows = self._attendance.get_recent_for_user(int(user_id), max(int(limit), 1))
        return sorted(rows, key=lambda r: r.work_date, reverse=True)

    def range_query(
        self,
        *,
        start_date: date,
        end_date: date,
        user_ids: Optional[Sequence[int]] = None,
    ) -> List[AttendanceRecord]:
        if start_date > end_date:
            raise InvalidRange("Start date must be on or before end date")
        return list(self._attendance.list_range(start_date=start_date, end_date=end_date, user_ids=user_ids))
