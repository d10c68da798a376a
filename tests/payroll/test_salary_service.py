from datetime import date, timedelta

import pytest

from src.hr_attendance.hr_attendance.attendance.model import AttendanceRecord
from src.hr_attendance.hr_attendance.core.enums import AttendanceStatus, LeaveType, RequestStatus, Role
from src.hr_attendance.hr_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hr_attendance.hr_attendance.payroll.service import SalaryService
from tests.fakes import ADMIN_ID, EMPLOYEE_ID, make_user


@pytest.fixture
def salary_service(users, attendance_repo, leaves_repo):
    return SalaryService(users, attendance_repo, leaves_repo)


@pytest.fixture
def march(users, attendance_repo, leave_request_factory):
    users.add(make_user(3, full_name="John Roe", salary=44000))
    rid = 1
    for uid in (EMPLOYEE_ID, 3):
        for i in range(10):
            day = date(2026, 3, 2) + timedelta(days=i)
            status = AttendanceStatus.PRESENT
            if i == 3:
                status = AttendanceStatus.LEAVE
            elif i == 5 and uid == 3:
                status = AttendanceStatus.HALF_DAY
            attendance_repo.add(
                AttendanceRecord(
                    attendance_id=rid,
                    user_id=uid,
                    work_date=day,
                    status=status,
                    total_work_minutes={AttendanceStatus.PRESENT: 480, AttendanceStatus.HALF_DAY: 240}.get(status, 0),
                    leave_type=LeaveType.SICK if status == AttendanceStatus.LEAVE else None,
                )
            )
            rid += 1
    # Jane's leave day was paid, John's was not
    leave_request_factory(start=date(2026, 3, 5), end=date(2026, 3, 5), status=RequestStatus.APPROVED, paid=True)


def test_bulk_matches_single_employee(salary_service, march):
    bulk = salary_service.monthly_salaries(current_role=Role.ADMIN, year=2026, month=3)

    assert bulk["month"] == 3 and bulk["year"] == 2026
    assert [row["employee"]["user_id"] for row in bulk["salaries"]] == [EMPLOYEE_ID, 3]
    for row in bulk["salaries"]:
        uid = row["employee"]["user_id"]
        single = salary_service.salary_for_employee(
            current_role=Role.ADMIN, caller_id=ADMIN_ID, user_id=uid, year=2026, month=3
        )
        for key in ("base_salary", "calculated_salary", "deductions", "breakdown"):
            assert row[key] == single[key]


def test_paid_and_unpaid_leave_figures(salary_service, march):
    jane = salary_service.salary_for_employee(
        current_role=Role.EMPLOYEE, caller_id=EMPLOYEE_ID, user_id=EMPLOYEE_ID, year=2026, month=3
    )
    john = salary_service.salary_for_employee(
        current_role=Role.ADMIN, caller_id=ADMIN_ID, user_id=3, year=2026, month=3
    )

    assert jane["calculated_salary"] == 22000
    assert jane["breakdown"]["paid_leave_days"] == 1
    assert john["breakdown"]["unpaid_leave_days"] == 1
    assert john["breakdown"]["half_days"] == 1
    # daily rate 2000: one unpaid day plus half a day
    assert john["calculated_salary"] == 41000


def test_other_month_is_empty(salary_service, march):
    result = salary_service.salary_for_employee(
        current_role=Role.ADMIN, caller_id=ADMIN_ID, user_id=EMPLOYEE_ID, year=2026, month=4
    )

    assert result["calculated_salary"] == 22000
    assert result["breakdown"]["present_days"] == 0


def test_employee_cannot_see_other_salary(salary_service):
    with pytest.raises(AuthorizationError):
        salary_service.salary_for_employee(current_role=Role.EMPLOYEE, caller_id=EMPLOYEE_ID, user_id=3)
    with pytest.raises(AuthorizationError):
        salary_service.monthly_salaries(current_role=Role.EMPLOYEE)


def test_admin_accounts_have_no_salary(salary_service):
    with pytest.raises(NotFoundError):
        salary_service.salary_for_employee(current_role=Role.ADMIN, caller_id=ADMIN_ID, user_id=ADMIN_ID)


def test_month_must_be_valid(salary_service):
    with pytest.raises(ValidationError):
        salary_service.monthly_salaries(current_role=Role.ADMIN, year=2026, month=13)
