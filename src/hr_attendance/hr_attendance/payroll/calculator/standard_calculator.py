from __future__ import annotations

from typing import AbstractSet, Iterable, Set

from ...attendance.model import AttendanceRecord
from ...common.numbers import round_half_up
from ...core.constants import WORKING_DAYS_PER_MONTH, WORKING_HOURS_PER_DAY
from ...core.enums import AttendanceStatus
from ...leaves.model import LeaveRequest
from ..model import SalaryBreakdown
from .base import SalaryCalculator


def paid_leave_dates(requests: Iterable[LeaveRequest]) -> Set[str]:
    """ISO dates covered by approved paid requests (ranges are inclusive)."""
    out: Set[str] = set()
    for req in requests:
        if req.is_approved and req.is_paid_leave:
            out.update(d.isoformat() for d in req.days())
    return out


class StandardSalaryCalculator(SalaryCalculator):
    """Fixed month of `working_days_per_month` days of `working_hours_per_day` hours.

    salary = base - unpaid * daily - half * daily / 2, minus the shortfall
    between expected and worked hours at the hourly rate; never below 0.
    """

    def __init__(
        self,
        *,
        working_days_per_month: int = WORKING_DAYS_PER_MONTH,
        working_hours_per_day: int = WORKING_HOURS_PER_DAY,
    ):
        self._days = int(working_days_per_month)
        self._hours = int(working_hours_per_day)

    def calculate(
        self,
        *,
        base_salary: float,
        records: Iterable[AttendanceRecord],
        paid_leave_dates: AbstractSet[str],
    ) -> SalaryBreakdown:
        base = float(base_salary)
        daily = base / self._days
        hourly = daily / self._hours

        present = half = leave = unpaid = 0
        work_minutes = 0
        for r in records:
            work_minutes += int(r.total_work_minutes or 0)
            if r.status == AttendanceStatus.PRESENT:
                present += 1
            elif r.status == AttendanceStatus.HALF_DAY:
                half += 1
            elif r.status == AttendanceStatus.LEAVE:
                leave += 1
                if r.work_date.isoformat() not in paid_leave_dates:
                    unpaid += 1

        salary = base - unpaid * daily - half * (daily / 2)

        expected_hours = present * self._hours + half * (self._hours / 2)
        actual_hours = work_minutes / 60
        if expected_hours > actual_hours:
            salary -= (expected_hours - actual_hours) * hourly

        salary = max(0.0, salary)

        return SalaryBreakdown(
            base_salary=base,
            calculated_salary=round_half_up(salary, 2),
            deductions=round_half_up(base - salary, 2),
            working_days=self._days,
            present_days=present,
            paid_leave_days=leave - unpaid,
            unpaid_leave_days=unpaid,
            half_days=half,
            total_work_hours=round_half_up(actual_hours, 1),
            expected_work_hours=round_half_up(expected_hours, 1),
        )
