from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..leaves.model import LeaveRequest
from ..leaves.repository import LeaveRepository
from ..users.model import User
from ..users.repository import UserRepository
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator, paid_leave_dates
from .model import SalaryBreakdown


class SalaryService:
    """Loads one month of ledger snapshots and hands them to the calculator.

    The single-employee and bulk paths both end in `_compute`, so a bulk run
    gives the same figures as asking for each employee separately.
    """

    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        *,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._users = users
        self._attendance = attendance
        self._leaves = leaves
        self._calculator = calculator or StandardSalaryCalculator()

    @staticmethod
    def _resolve_month(year: Optional[int], month: Optional[int], now: Optional[datetime]) -> Tuple[int, int]:
        now = now or datetime.now()
        year = int(year) if year else now.year
        month = int(month) if month else now.month
        if not 1 <= month <= 12:
            raise ValidationError("Month must be between 1 and 12")
        return year, month

    def _compute(
        self,
        employee: User,
        records: Sequence[AttendanceRecord],
        requests: Sequence[LeaveRequest],
    ) -> SalaryBreakdown:
        return self._calculator.calculate(
            base_salary=employee.salary,
            records=records,
            paid_leave_dates=paid_leave_dates(requests),
        )

    def salary_for_employee(
        self,
        *,
        current_role: Role,
        caller_id: int,
        user_id: int,
        year: Optional[int] = None,
        month: Optional[int] = None,
        now: datetime | None = None,
    ) -> dict:
        if current_role != Role.ADMIN and int(caller_id) != int(user_id):
            raise AuthorizationError("You can only view your own salary")

        year, month = self._resolve_month(year, month, now)
        employee = self._users.get_by_id(int(user_id))
        if not employee or employee.role != Role.EMPLOYEE:
            raise NotFoundError("Employee not found")

        start, end = month_bounds(year, month)
        records = self._attendance.list_range(start_date=start, end_date=end, user_ids=[employee.user_id])
        requests = self._leaves.list_approved_paid(start_date=start, end_date=end, user_ids=[employee.user_id])

        out = self._compute(employee, records, requests).to_dict()
        out.update({"month": month, "year": year})
        return out

    def monthly_salaries(
        self,
        *,
        current_role: Role,
        year: Optional[int] = None,
        month: Optional[int] = None,
        now: datetime | None = None,
    ) -> dict:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can view all salaries")

        year, month = self._resolve_month(year, month, now)
        employees = list(self._users.list_by_role(Role.EMPLOYEE))
        ids = [e.user_id for e in employees]
        start, end = month_bounds(year, month)

        records_by_user: Dict[int, List[AttendanceRecord]] = defaultdict(list)
        for r in self._attendance.list_range(start_date=start, end_date=end, user_ids=ids):
            records_by_user[r.user_id].append(r)

        requests_by_user: Dict[int, List[LeaveRequest]] = defaultdict(list)
        for req in self._leaves.list_approved_paid(start_date=start, end_date=end, user_ids=ids):
            requests_by_user[req.user_id].append(req)

        salaries = []
        for employee in employees:
            row = self._compute(employee, records_by_user[employee.user_id], requests_by_user[employee.user_id]).to_dict()
            row["employee"] = employee.summary()
            row["paid_leave_balance"] = employee.paid_leave_balance
            salaries.append(row)

        return {"month": month, "year": year, "salaries": salaries}
