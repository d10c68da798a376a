from __future__ import annotations

from abc import ABC, abstractmethod
from typing import AbstractSet, Iterable

from ...attendance.model import AttendanceRecord
from ..model import SalaryBreakdown


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(
        self,
        *,
        base_salary: float,
        records: Iterable[AttendanceRecord],
        paid_leave_dates: AbstractSet[str],
    ) -> SalaryBreakdown:
        raise NotImplementedError
