from __future__ import annotations

from collections import Counter
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, sunday_week_number
from ..common.numbers import round_half_up
from ..core.constants import DEFAULT_TREND_DAYS, REPORT_DETAIL_LIMIT
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, InvalidRange, NotFoundError, ValidationError
from ..users.model import User
from ..users.repository import UserRepository


class AttendanceReportService:
    """Read-side rollups over the Time Ledger.

    Every query is restricted to records of accounts that currently exist
    with the Employee role.
    """

    def __init__(self, attendance: AttendanceRepository, users: UserRepository):
        self._attendance = attendance
        self._users = users

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can view attendance reports")

    def _employees(self) -> Dict[int, User]:
        return {u.user_id: u for u in self._users.list_by_role(Role.EMPLOYEE)}

    def _records(self, employees: Dict[int, User], start: date, end: date):
        if not employees:
            return []
        rows = self._attendance.list_range(start_date=start, end_date=end, user_ids=list(employees))
        return [r for r in rows if r.user_id in employees]

    def daily_summary(self, *, current_role: Role, day: Optional[date] = None) -> dict:
        self._require_admin(current_role)
        day = day or datetime.now().date()
        employees = self._employees()
        counts = Counter(r.status for r in self._records(employees, day, day))

        present = counts[AttendanceStatus.PRESENT]
        on_leave = counts[AttendanceStatus.LEAVE]
        half_day = counts[AttendanceStatus.HALF_DAY]
        marked_absent = counts[AttendanceStatus.ABSENT]
        with_records = present + on_leave + half_day + marked_absent

        return {
            "date": day.isoformat(),
            "total_employees": len(employees),
            "summary": {
                "present": present,
                "on_leave": on_leave,
                "half_day": half_day,
                "absent": max(0, len(employees) - with_records) + marked_absent,
            },
        }

    def employees_on_leave(self, *, current_role: Role, day: Optional[date] = None) -> List[dict]:
        self._require_admin(current_role)
        day = day or datetime.now().date()
        employees = self._employees()
        return [
            dict(employees[r.user_id].summary(), leave_type=r.leave_type.value if r.leave_type else None)
            for r in self._records(employees, day, day)
            if r.status == AttendanceStatus.LEAVE
        ]

    def present_employees(self, *, current_role: Role, day: Optional[date] = None) -> List[dict]:
        self._require_admin(current_role)
        day = day or datetime.now().date()
        employees = self._employees()
        out = []
        for r in self._records(employees, day, day):
            if r.status != AttendanceStatus.PRESENT:
                continue
            row = r.to_dict()
            out.append(
                {
                    "employee": employees[r.user_id].summary(),
                    "punch_in": row["punch_in"],
                    "lunch_start": row["lunch_start"],
                    "lunch_end": row["lunch_end"],
                    "punch_out": row["punch_out"],
                }
            )
        return out

    def trends(self, *, current_role: Role, range_days: int = DEFAULT_TREND_DAYS, today: Optional[date] = None) -> dict:
        self._require_admin(current_role)
        if int(range_days) <= 0:
            raise ValidationError("Range must be a positive number of days")
        range_days = int(range_days)
        today = today or datetime.now().date()
        start = today - timedelta(days=range_days)

        employees = self._employees()
        records = self._records(employees, start, today)

        daily = Counter((r.work_date, r.status) for r in records)
        weekly = Counter(
            (sunday_week_number(r.work_date), r.work_date.year, r.status) for r in records
        )

        daily_trends = [
            {"date": d.isoformat(), "status": s.value, "count": c}
            for (d, s), c in sorted(daily.items(), key=lambda kv: (kv[0][0], kv[0][1].value))
        ]
        weekly_summary = [
            {"week": w, "year": y, "status": s.value, "count": c}
            for (w, y, s), c in sorted(weekly.items(), key=lambda kv: (kv[0][1], kv[0][0], kv[0][2].value))
        ]

        total_present = sum(1 for r in records if r.status == AttendanceStatus.PRESENT)
        possible = len(employees) * range_days
        rate = round_half_up(total_present / possible * 100, 2) if possible > 0 else 0

        return {
            "daily_trends": daily_trends,
            "weekly_summary": weekly_summary,
            "attendance_rate": rate,
            "total_employees": len(employees),
        }

    def range_report(
        self,
        *,
        current_role: Role,
        start_date: date,
        end_date: date,
        user_id: Optional[int] = None,
    ) -> dict:
        self._require_admin(current_role)
        if start_date > end_date:
            raise InvalidRange("Start date must be on or before end date")

        employees = self._employees()
        if user_id is not None:
            employees = {k: v for k, v in employees.items() if k == int(user_id)}
        records = self._records(employees, start_date, end_date)

        summary: Dict[str, dict] = {}
        for r in records:
            s = summary.setdefault(r.status.value, {"status": r.status.value, "count": 0, "total_work_minutes": 0})
            s["count"] += 1
            s["total_work_minutes"] += int(r.total_work_minutes or 0)

        detailed = sorted(records, key=lambda r: (r.work_date, -r.user_id), reverse=True)[:REPORT_DETAIL_LIMIT]
        return {
            "summary": list(summary.values()),
            "detailed_report": [dict(r.to_dict(), employee=employees[r.user_id].summary()) for r in detailed],
        }

    def employee_stats(
        self,
        *,
        current_role: Role,
        user_id: int,
        year: Optional[int] = None,
        month: Optional[int] = None,
        now: datetime | None = None,
    ) -> dict:
        self._require_admin(current_role)
        now = now or datetime.now()
        year = int(year) if year else now.year
        month = int(month) if month else now.month
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")

        employees = self._employees()
        if int(user_id) not in employees:
            raise NotFoundError("Employee not found")

        start, end = month_bounds(year, month)
        records = self._records({int(user_id): employees[int(user_id)]}, start, end)
        counts = Counter(r.status for r in records)
        total_hours = sum(int(r.total_work_minutes or 0) for r in records) / 60

        return {
            "month": month,
            "year": year,
            "total_days": len(records),
            "present": counts[AttendanceStatus.PRESENT],
            "absent": counts[AttendanceStatus.ABSENT],
            "leave": counts[AttendanceStatus.LEAVE],
            "half_day": counts[AttendanceStatus.HALF_DAY],
            "total_work_hours": int(round_half_up(total_hours, 0)),
            "average_work_hours": round_half_up(total_hours / len(records), 1) if records else 0,
        }
