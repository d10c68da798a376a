from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveType, RequestStatus
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create_request(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        leave_type: LeaveType,
        is_paid_leave: bool,
        reason: str,
        created_at: datetime,
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        """Most recently created first."""

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        decided_at: datetime,
        admin_note: Optional[str] = None,
    ) -> bool:
        """Move a PENDING request to `status`. False if it was no longer pending."""

        raise NotImplementedError

    def list_approved_paid(
        self,
        *,
        start_date: date,
        end_date: date,
        user_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[LeaveRequest]:
        """Approved paid requests whose range overlaps [start_date, end_date]."""

        raise NotImplementedError

    def delete_for_user(self, user_id: int) -> int:
        raise NotImplementedError
