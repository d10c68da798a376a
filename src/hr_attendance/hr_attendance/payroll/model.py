from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SalaryBreakdown:
    """Result of one monthly salary computation. Amounts are already rounded."""

    base_salary: float
    calculated_salary: float
    deductions: float
    working_days: int
    present_days: int
    paid_leave_days: int
    unpaid_leave_days: int
    half_days: int
    total_work_hours: float
    expected_work_hours: float

    def to_dict(self) -> dict:
        return {
            "base_salary": self.base_salary,
            "calculated_salary": self.calculated_salary,
            "deductions": self.deductions,
            "breakdown": {
                "working_days": self.working_days,
                "present_days": self.present_days,
                "paid_leave_days": self.paid_leave_days,
                "unpaid_leave_days": self.unpaid_leave_days,
                "half_days": self.half_days,
                "total_work_hours": self.total_work_hours,
                "expected_work_hours": self.expected_work_hours,
            },
        }
