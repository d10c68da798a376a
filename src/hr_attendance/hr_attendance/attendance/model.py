from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, LeaveType


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one employee's attendance for one calendar day.

    At most one record exists per (user_id, work_date). Once `punch_out` is
    set the record is closed.
    """

    attendance_id: int
    user_id: int
    work_date: date
    punch_in: Optional[datetime] = None
    lunch_start: Optional[datetime] = None
    lunch_end: Optional[datetime] = None
    punch_out: Optional[datetime] = None
    total_break_minutes: int = 0
    total_work_minutes: int = 0
    status: AttendanceStatus = AttendanceStatus.ABSENT
    leave_type: Optional[LeaveType] = None

    @property
    def is_closed(self) -> bool:
        return self.punch_out is not None

    @property
    def lunch_open(self) -> bool:
        return self.lunch_start is not None and self.lunch_end is None

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "user_id": self.user_id,
            "date": self.work_date.isoformat(),
            "punch_in": _iso(self.punch_in),
            "lunch_start": _iso(self.lunch_start),
            "lunch_end": _iso(self.lunch_end),
            "punch_out": _iso(self.punch_out),
            "total_break_minutes": self.total_break_minutes,
            "total_work_minutes": self.total_work_minutes,
            "status": self.status.value,
            "leave_type": self.leave_type.value if self.leave_type else None,
        }
