from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import List, Optional

from ..attendance.service import AttendanceService
from ..common.datetime_utils import inclusive_day_count
from ..common.validators import parse_enum, require_non_empty
from ..core.constants import DEFAULT_NOTICE_DAYS, MONTHLY_PAID_LEAVE_GRANT, VACATION_NOTICE_DAYS
from ..core.enums import LeaveAction, LeaveType, RequestStatus, Role
from ..core.exceptions import (
    AlreadyProcessed,
    AuthorizationError,
    InsufficientNotice,
    InsufficientPaidLeave,
    InvalidRange,
    NotFoundError,
    StateConflictError,
)
from ..notifications.messages import leave_request_message, leave_response_message
from ..notifications.notifier import Notifier, send_quietly
from ..users.model import User
from ..users.repository import UserRepository
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)

_LONG_NOTICE_TYPES = {LeaveType.VACATION, LeaveType.PERSONAL}


class LeaveService:
    """Leave Ledger: requests, the admin decision, and the paid-leave balance.

    Approval writes the leave days through to the Time Ledger; notifications
    are best effort and never undo a state change.
    """

    def __init__(
        self,
        leaves: LeaveRepository,
        users: UserRepository,
        attendance: AttendanceService,
        *,
        notifier: Notifier | None = None,
        frontend_url: str = "http://localhost:3000",
        vacation_notice_days: int = VACATION_NOTICE_DAYS,
        default_notice_days: int = DEFAULT_NOTICE_DAYS,
    ):
        self._leaves = leaves
        self._users = users
        self._attendance = attendance
        self._notifier = notifier
        self._frontend_url = frontend_url
        self._vacation_notice_days = int(vacation_notice_days)
        self._default_notice_days = int(default_notice_days)

    def _get_user(self, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Employee not found")
        return user

    def _required_notice(self, leave_type: LeaveType) -> int:
        if leave_type in _LONG_NOTICE_TYPES:
            return self._vacation_notice_days
        return self._default_notice_days

    def submit_request(
        self,
        *,
        current_role: Role,
        user_id: int,
        start_date: date,
        end_date: date,
        leave_type,
        reason: str,
        use_paid_leave: bool = False,
        now: datetime | None = None,
    ) -> LeaveRequest:
        now = now or datetime.now()
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can request leave")

        employee = self._get_user(user_id)
        reason = require_non_empty(reason, "Reason")
        leave_type = parse_enum(LeaveType, leave_type, "Leave type")

        if start_date > end_date:
            raise InvalidRange("End date must be on or after start date")

        required = self._required_notice(leave_type)
        days_until_start = (start_date - now.date()).days
        if days_until_start < required:
            if leave_type in _LONG_NOTICE_TYPES:
                message = (
                    f"{leave_type.value} leave must be requested at least {required} days in advance. "
                    f"Days until start: {days_until_start}"
                )
            else:
                message = f"Leave must be requested at least {required} day(s) in advance"
            raise InsufficientNotice(message, required_days=required, days_until_start=days_until_start)

        is_paid = False
        if use_paid_leave:
            days = inclusive_day_count(start_date, end_date)
            if employee.paid_leave_balance < days:
                raise InsufficientPaidLeave(available=employee.paid_leave_balance, requested=days)
            is_paid = True

        request_id = self._leaves.create_request(
            user_id=employee.user_id,
            start_date=start_date,
            end_date=end_date,
            leave_type=leave_type,
            is_paid_leave=is_paid,
            reason=reason,
            created_at=now,
        )
        req = LeaveRequest(
            request_id=request_id,
            user_id=employee.user_id,
            start_date=start_date,
            end_date=end_date,
            leave_type=leave_type,
            is_paid_leave=is_paid,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=now,
        )
        logger.info("Leave request %s submitted by employee %s (%s days)", request_id, user_id, req.day_count)

        message = leave_request_message(req, employee, frontend_url=self._frontend_url)
        for admin in self._users.list_by_role(Role.ADMIN):
            send_quietly(self._notifier, to=admin.email, subject=message.subject, content=message.content)
        return req

    def respond(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        request_id: int,
        action,
        note: str = "",
        now: datetime | None = None,
    ) -> LeaveRequest:
        now = now or datetime.now()
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can respond to leave requests")

        action = parse_enum(LeaveAction, action, "Action")
        req = self._leaves.get_by_id(int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if not req.is_pending:
            raise AlreadyProcessed("Leave request has already been processed")

        status = RequestStatus.APPROVED if action == LeaveAction.APPROVE else RequestStatus.REJECTED
        admin_note = (note or "").strip() or None
        decided = self._leaves.decide(
            request_id=req.request_id,
            status=status,
            decided_by=int(admin_user_id),
            decided_at=now,
            admin_note=admin_note,
        )
        if not decided:
            raise AlreadyProcessed("Leave request has already been processed")

        req = replace(req, status=status, decided_by=int(admin_user_id), decided_at=now, admin_note=admin_note)
        logger.info("Leave request %s %s by admin %s", req.request_id, status.value.lower(), admin_user_id)

        if req.is_approved:
            if req.is_paid_leave:
                self._users.deduct_paid_leave(user_id=req.user_id, days=req.day_count)
            self._write_through(req)

        employee = self._users.get_by_id(req.user_id)
        if employee:
            message = leave_response_message(req, employee, frontend_url=self._frontend_url)
            send_quietly(self._notifier, to=employee.email, subject=message.subject, content=message.content)
        return req

    def approve(self, *, current_role: Role, admin_user_id: int, request_id: int, note: str = "", now: datetime | None = None) -> LeaveRequest:
        return self.respond(
            current_role=current_role,
            admin_user_id=admin_user_id,
            request_id=request_id,
            action=LeaveAction.APPROVE,
            note=note,
            now=now,
        )

    def reject(self, *, current_role: Role, admin_user_id: int, request_id: int, note: str = "", now: datetime | None = None) -> LeaveRequest:
        return self.respond(
            current_role=current_role,
            admin_user_id=admin_user_id,
            request_id=request_id,
            action=LeaveAction.REJECT,
            note=note,
            now=now,
        )

    def _write_through(self, req: LeaveRequest) -> int:
        return self._attendance.mark_leave_days(user_id=req.user_id, days=req.days(), leave_type=req.leave_type)

    def reapply_leave_days(self, *, current_role: Role, request_id: int) -> int:
        """Mark the days of an approved request as Leave again.

        Used to repair a range left partially marked; the balance is not touched.
        """
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can re-apply leave days")

        req = self._leaves.get_by_id(int(request_id))
        if not req:
            raise NotFoundError("Leave request not found")
        if not req.is_approved:
            raise StateConflictError("Only approved leave requests can be re-applied")

        marked = self._write_through(req)
        logger.info("Re-applied %s leave day(s) for request %s", marked, req.request_id)
        return marked

    def monthly_reset(self, *, current_role: Role, now: datetime | None = None) -> int:
        now = now or datetime.now()
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can reset paid leaves")

        updated = self._users.grant_paid_leave(role=Role.EMPLOYEE, amount=MONTHLY_PAID_LEAVE_GRANT, granted_at=now)
        logger.info("Monthly paid leave reset: %s employee(s) credited", updated)
        return updated

    def list_my_requests(self, *, user_id: int) -> List[LeaveRequest]:
        return list(self._leaves.list_requests(user_id=int(user_id)))

    def list_pending(self, *, current_role: Role) -> List[dict]:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can view pending requests")

        out: List[dict] = []
        for req in self._leaves.list_requests(status=RequestStatus.PENDING, limit=500):
            employee = self._users.get_by_id(req.user_id)
            row = req.to_dict()
            row["employee"] = employee.summary() if employee else None
            out.append(row)
        return out

    def paid_leave_balance(self, *, user_id: int) -> dict:
        employee = self._get_user(user_id)
        last_reset: Optional[datetime] = employee.last_paid_leave_reset
        return {
            "paid_leave_balance": employee.paid_leave_balance,
            "last_reset": last_reset.isoformat() if last_reset else None,
        }
