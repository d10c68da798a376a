from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, LeaveType
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_punch_in(
        self,
        *,
        user_id: int,
        work_date: date,
        punch_in: datetime,
        status: AttendanceStatus,
    ) -> int:
        raise NotImplementedError

    def update_record(self, record: AttendanceRecord) -> bool:
        """Persist punch fields, totals and status of an existing record."""

        raise NotImplementedError

    def upsert_leave_days(self, *, user_id: int, work_dates: Iterable[date], leave_type: LeaveType) -> int:
        """Mark each day as Leave, creating missing records.

        Keyed by (user_id, work_date); punch fields of existing records are
        left untouched, so re-running it is harmless.
        """

        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records with start_date <= work_date <= end_date, most recent first."""

        raise NotImplementedError

    def delete_for_user(self, user_id: int) -> int:
        raise NotImplementedError
