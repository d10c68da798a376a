from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional

from ..common.datetime_utils import inclusive_day_count, iter_days
from ..core.enums import LeaveType, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    """A leave request over an inclusive date range.

    `status` moves once from PENDING to APPROVED or REJECTED; `is_paid_leave`
    is fixed at creation.
    """

    request_id: int
    user_id: int
    start_date: date
    end_date: date
    leave_type: LeaveType
    is_paid_leave: bool
    reason: str
    status: RequestStatus
    created_at: datetime
    decided_by: Optional[int] = None
    decided_at: Optional[datetime] = None
    admin_note: Optional[str] = None

    @property
    def is_pending(self) -> bool:
        return self.status == RequestStatus.PENDING

    @property
    def is_approved(self) -> bool:
        return self.status == RequestStatus.APPROVED

    @property
    def day_count(self) -> int:
        return inclusive_day_count(self.start_date, self.end_date)

    def days(self) -> List[date]:
        return list(iter_days(self.start_date, self.end_date))

    def to_dict(self) -> dict:
        return {
            "request_id": self.request_id,
            "user_id": self.user_id,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "leave_type": self.leave_type.value,
            "is_paid_leave": self.is_paid_leave,
            "days": self.day_count,
            "reason": self.reason,
            "status": self.status.value,
            "admin_note": self.admin_note,
            "decided_by": self.decided_by,
            "decided_at": self.decided_at.isoformat() if self.decided_at else None,
            "created_at": self.created_at.isoformat(),
        }
