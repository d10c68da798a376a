from __future__ import annotations

from datetime import datetime

import pytest

from src.hr_attendance.hr_attendance.attendance.service import AttendanceService
from src.hr_attendance.hr_attendance.core.enums import LeaveType, RequestStatus, Role
from src.hr_attendance.hr_attendance.leaves.model import LeaveRequest
from src.hr_attendance.hr_attendance.leaves.service import LeaveService
from tests.fakes import (
    ADMIN_ID,
    EMPLOYEE_ID,
    InMemoryAttendance,
    InMemoryLeaves,
    InMemoryProjects,
    InMemoryUsers,
    RecordingNotifier,
    make_user,
)


@pytest.fixture
def fixed_now() -> datetime:
    # a Monday
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def users() -> InMemoryUsers:
    return InMemoryUsers(
        make_user(ADMIN_ID, role=Role.ADMIN, salary=0, email="admin@example.com", employee_code="ADM-001"),
        make_user(EMPLOYEE_ID, full_name="Jane Doe", email="jane@example.com"),
    )


@pytest.fixture
def attendance_repo() -> InMemoryAttendance:
    return InMemoryAttendance()


@pytest.fixture
def leaves_repo() -> InMemoryLeaves:
    return InMemoryLeaves()


@pytest.fixture
def projects_repo() -> InMemoryProjects:
    return InMemoryProjects()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def attendance_service(attendance_repo, users) -> AttendanceService:
    return AttendanceService(attendance_repo, users)


@pytest.fixture
def leave_service(leaves_repo, users, attendance_service, notifier) -> LeaveService:
    return LeaveService(leaves_repo, users, attendance_service, notifier=notifier)


@pytest.fixture
def leave_request_factory(leaves_repo, fixed_now):
    def _make(*, user_id=EMPLOYEE_ID, start, end, status=RequestStatus.PENDING, paid=False, leave_type=LeaveType.SICK):
        rid = leaves_repo._next_id
        return leaves_repo.add(
            LeaveRequest(
                request_id=rid,
                user_id=user_id,
                start_date=start,
                end_date=end,
                leave_type=leave_type,
                is_paid_leave=paid,
                reason="family",
                status=status,
                created_at=fixed_now,
            )
        )

    return _make
