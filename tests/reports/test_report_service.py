from datetime import date, datetime, timedelta

import pytest

from src.hr_attendance.hr_attendance.attendance.model import AttendanceRecord
from src.hr_attendance.hr_attendance.core.enums import AttendanceStatus, LeaveType, Role
from src.hr_attendance.hr_attendance.core.exceptions import AuthorizationError, InvalidRange, NotFoundError
from src.hr_attendance.hr_attendance.reports.service import AttendanceReportService
from tests.fakes import ADMIN_ID, EMPLOYEE_ID, make_user

DAY = date(2026, 3, 10)


@pytest.fixture
def reports(users, attendance_repo):
    users.add(make_user(3, full_name="John Roe"))
    users.add(make_user(4, full_name="Ann Poe"))
    return AttendanceReportService(attendance_repo, users)


def put(repo, rid, uid, day, status=AttendanceStatus.PRESENT, minutes=480, **kw):
    return repo.add(
        AttendanceRecord(
            attendance_id=rid,
            user_id=uid,
            work_date=day,
            status=status,
            total_work_minutes=minutes,
            **kw,
        )
    )


def test_daily_summary_counts_missing_records_as_absent(reports, attendance_repo):
    put(attendance_repo, 1, EMPLOYEE_ID, DAY, punch_in=datetime(2026, 3, 10, 9, 0))
    put(attendance_repo, 2, 3, DAY, AttendanceStatus.LEAVE, 0, leave_type=LeaveType.CASUAL)
    # orphan and admin rows are ignored
    put(attendance_repo, 3, 99, DAY)
    put(attendance_repo, 4, ADMIN_ID, DAY)

    result = reports.daily_summary(current_role=Role.ADMIN, day=DAY)

    assert result == {
        "date": "2026-03-10",
        "total_employees": 3,
        "summary": {"present": 1, "on_leave": 1, "half_day": 0, "absent": 1},
    }


def test_on_leave_and_present_lists(reports, attendance_repo):
    put(attendance_repo, 1, EMPLOYEE_ID, DAY, punch_in=datetime(2026, 3, 10, 9, 0))
    put(attendance_repo, 2, 3, DAY, AttendanceStatus.LEAVE, 0, leave_type=LeaveType.CASUAL)

    on_leave = reports.employees_on_leave(current_role=Role.ADMIN, day=DAY)
    present = reports.present_employees(current_role=Role.ADMIN, day=DAY)

    assert [(r["full_name"], r["leave_type"]) for r in on_leave] == [("John Roe", "Casual")]
    assert present[0]["employee"]["full_name"] == "Jane Doe"
    assert present[0]["punch_in"].startswith("2026-03-10T09:00")


def test_trends_rate_and_weeks(reports, attendance_repo):
    for i in range(5):
        put(attendance_repo, i + 1, EMPLOYEE_ID, DAY - timedelta(days=i))
    put(attendance_repo, 10, 3, DAY, AttendanceStatus.HALF_DAY, 240)
    # outside the window
    put(attendance_repo, 11, 3, DAY - timedelta(days=40))

    result = reports.trends(current_role=Role.ADMIN, range_days=10, today=DAY)

    assert result["total_employees"] == 3
    assert result["attendance_rate"] == round(5 / 30 * 100, 2)
    assert sum(row["count"] for row in result["daily_trends"]) == 6
    # 2026-03-08 is a Sunday, so 03-06 and 03-07 fall in the previous week
    weeks = {(row["week"], row["status"]): row["count"] for row in result["weekly_summary"]}
    assert weeks[(10, "Present")] == 3
    assert weeks[(9, "Present")] == 2
    assert weeks[(10, "Half Day")] == 1


def test_range_report_caps_detail(reports, attendance_repo):
    start = date(2025, 10, 1)
    for i in range(120):
        put(attendance_repo, i + 1, EMPLOYEE_ID, start + timedelta(days=i))

    result = reports.range_report(current_role=Role.ADMIN, start_date=start, end_date=start + timedelta(days=200))

    assert result["summary"] == [{"status": "Present", "count": 120, "total_work_minutes": 120 * 480}]
    assert len(result["detailed_report"]) == 100
    assert result["detailed_report"][0]["date"] == (start + timedelta(days=119)).isoformat()


def test_range_report_for_one_employee(reports, attendance_repo):
    put(attendance_repo, 1, EMPLOYEE_ID, DAY)
    put(attendance_repo, 2, 3, DAY)

    result = reports.range_report(current_role=Role.ADMIN, start_date=DAY, end_date=DAY, user_id=3)

    assert [r["employee"]["user_id"] for r in result["detailed_report"]] == [3]

    empty = reports.range_report(current_role=Role.ADMIN, start_date=DAY, end_date=DAY, user_id=99)
    assert empty == {"summary": [], "detailed_report": []}


def test_range_report_rejects_inverted_range(reports):
    with pytest.raises(InvalidRange):
        reports.range_report(current_role=Role.ADMIN, start_date=DAY, end_date=DAY - timedelta(days=1))


def test_employee_stats(reports, attendance_repo):
    put(attendance_repo, 1, EMPLOYEE_ID, date(2026, 3, 2))
    put(attendance_repo, 2, EMPLOYEE_ID, date(2026, 3, 3), AttendanceStatus.HALF_DAY, 180)
    put(attendance_repo, 3, EMPLOYEE_ID, date(2026, 3, 4), AttendanceStatus.ABSENT, 0)
    put(attendance_repo, 4, EMPLOYEE_ID, date(2026, 4, 1))

    stats = reports.employee_stats(current_role=Role.ADMIN, user_id=EMPLOYEE_ID, year=2026, month=3)

    assert stats["total_days"] == 3
    assert (stats["present"], stats["half_day"], stats["absent"], stats["leave"]) == (1, 1, 1, 0)
    assert stats["total_work_hours"] == 11
    assert stats["average_work_hours"] == 3.7

    with pytest.raises(NotFoundError):
        reports.employee_stats(current_role=Role.ADMIN, user_id=ADMIN_ID, year=2026, month=3)


def test_reports_are_admin_only(reports):
    with pytest.raises(AuthorizationError):
        reports.daily_summary(current_role=Role.EMPLOYEE, day=DAY)
