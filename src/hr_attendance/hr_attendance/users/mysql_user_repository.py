from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import Designation, Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import User
from .repository import UserRepository

_COLUMNS = """
    user_id, full_name, email, employee_code, password_hash, role, designation,
    salary, paid_leave_balance, last_paid_leave_reset, is_active
"""


def _to_user(row: Dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        full_name=row["full_name"],
        email=row["email"],
        employee_code=row["employee_code"],
        password_hash=row["password_hash"],
        role=Role(row["role"]),
        designation=Designation(row["designation"]),
        salary=float(row["salary"] or 0),
        paid_leave_balance=int(row.get("paid_leave_balance") or 0),
        last_paid_leave_reset=row.get("last_paid_leave_reset"),
        is_active=bool(row.get("is_active", True)),
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _get_one(self, column: str, value) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM users WHERE {column}=%s", (value,))
            row = fetchone(cur)
            return _to_user(row) if row else None

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._get_one("user_id", int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return self._get_one("email", email)

    def get_by_employee_code(self, employee_code: str) -> Optional[User]:
        return self._get_one("employee_code", employee_code)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO users(full_name, email, employee_code, password_hash, role, designation,
                                  salary, paid_leave_balance, last_paid_leave_reset, is_active)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,1)
                """,
                (
                    full_name,
                    email,
                    employee_code,
                    password_hash,
                    role.value,
                    designation.value,
                    salary,
                    int(paid_leave_balance),
                    last_paid_leave_reset,
                ),
            )
            return int(cur.lastrowid)

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET full_name=%s, email=%s, employee_code=%s, designation=%s, salary=%s
                WHERE user_id=%s
                """,
                (full_name, email, employee_code, designation.value, salary, int(user_id)),
            )
            # rowcount is 0 when the values did not change; existence is checked by the caller
            return True

    def delete_by_id(self, user_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM users WHERE user_id=%s", (int(user_id),))
            return cur.rowcount > 0

    def list_by_role(self, role: Role) -> Sequence[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM users WHERE role=%s ORDER BY user_id",
                (role.value,),
            )
            return [_to_user(r) for r in fetchall(cur)]

    def deduct_paid_leave(self, *, user_id: int, days: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET paid_leave_balance = GREATEST(paid_leave_balance - %s, 0)
                WHERE user_id=%s
                """,
                (int(days), int(user_id)),
            )
            return cur.rowcount > 0

    def grant_paid_leave(self, *, role: Role, amount: int, granted_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE users
                SET paid_leave_balance = paid_leave_balance + %s, last_paid_leave_reset=%s
                WHERE role=%s
                """,
                (int(amount), granted_at, role.value),
            )
            return int(cur.rowcount)
