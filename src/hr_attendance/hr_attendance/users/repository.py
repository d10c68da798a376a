from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import Designation, Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User (the employee directory).

    Note (DIP): services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def get_by_employee_code(self, employee_code: str) -> Optional[User]:
        raise NotImplementedError

    def create_user(
        self,
        *,
        full_name: str,
        email: str,
        employee_code: str,
        password_hash: str,
        role: Role,
        designation: Designation,
        salary: float,
        paid_leave_balance: int,
        last_paid_leave_reset: Optional[datetime],
    ) -> int:
        raise NotImplementedError

    def update_profile(
        self,
        *,
        user_id: int,
        full_name: str,
        email: str,
        employee_code: str,
        designation: Designation,
        salary: float,
    ) -> bool:
        raise NotImplementedError

    def delete_by_id(self, user_id: int) -> bool:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError

    def deduct_paid_leave(self, *, user_id: int, days: int) -> bool:
        """Subtract `days` from the balance, never going below 0."""

        raise NotImplementedError

    def grant_paid_leave(self, *, role: Role, amount: int, granted_at: datetime) -> int:
        """Add `amount` to every account of `role`. Returns the number of accounts updated."""

        raise NotImplementedError
