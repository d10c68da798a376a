from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Designation, Role


@dataclass(frozen=True)
class User:
    """Domain entity: an admin or employee account.

    Note: Plain data object (no DB access). The attendance core only reads
    `salary` and changes `paid_leave_balance`.
    """

    user_id: int
    full_name: str
    email: str
    employee_code: str
    password_hash: str
    role: Role
    designation: Designation
    salary: float
    paid_leave_balance: int = 0
    last_paid_leave_reset: Optional[datetime] = None
    is_active: bool = True

    def public_profile(self) -> dict:
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "email": self.email,
            "employee_code": self.employee_code,
            "role": self.role.value,
            "designation": self.designation.value,
            "salary": self.salary,
            "paid_leave_balance": self.paid_leave_balance,
            "last_paid_leave_reset": (
                self.last_paid_leave_reset.isoformat() if self.last_paid_leave_reset else None
            ),
        }

    def summary(self) -> dict:
        """Short form embedded in reports and leave/project listings."""
        return {
            "user_id": self.user_id,
            "full_name": self.full_name,
            "employee_code": self.employee_code,
            "designation": self.designation.value,
            "email": self.email,
        }
