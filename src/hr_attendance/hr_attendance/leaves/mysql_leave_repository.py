from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import LeaveType, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = """
    request_id, user_id, start_date, end_date, leave_type, is_paid_leave, reason,
    status, created_at, decided_by, decided_at, admin_note
"""


def _to_request(r: Dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        user_id=int(r["user_id"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        leave_type=LeaveType(r["leave_type"]),
        is_paid_leave=bool(r["is_paid_leave"]),
        reason=r["reason"],
        status=RequestStatus(r["status"]),
        created_at=r["created_at"],
        decided_by=int(r["decided_by"]) if r.get("decided_by") is not None else None,
        decided_at=r.get("decided_at"),
        admin_note=r.get("admin_note"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create_request(
        self,
        *,
        user_id: int,
        start_date: date,
        end_date: date,
        leave_type: LeaveType,
        is_paid_leave: bool,
        reason: str,
        created_at: datetime,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(user_id, start_date, end_date, leave_type, is_paid_leave,
                                           reason, status, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(user_id),
                    start_date,
                    end_date,
                    leave_type.value,
                    1 if is_paid_leave else 0,
                    reason,
                    RequestStatus.PENDING.value,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_requests(
        self,
        *,
        status: Optional[RequestStatus] = None,
        user_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if user_id is not None:
            clauses.append("user_id=%s")
            params.append(int(user_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC, request_id DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: int,
        decided_at: datetime,
        admin_note: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_by=%s, decided_at=%s, admin_note=%s
                WHERE request_id=%s AND status=%s
                """,
                (
                    status.value,
                    int(decided_by),
                    decided_at,
                    admin_note,
                    int(request_id),
                    RequestStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def list_approved_paid(
        self,
        *,
        start_date: date,
        end_date: date,
        user_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[LeaveRequest]:
        if user_ids is not None and not user_ids:
            return []

        sql = f"""
            SELECT {_COLUMNS}
            FROM leave_requests
            WHERE status=%s AND is_paid_leave=1 AND start_date <= %s AND end_date >= %s
        """
        params: list[object] = [RequestStatus.APPROVED.value, end_date, start_date]
        if user_ids is not None:
            sql += f" AND user_id IN ({in_clause(user_ids)})"
            params.extend(int(u) for u in user_ids)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_request(r) for r in fetchall(cur)]

    def delete_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM leave_requests WHERE user_id=%s", (int(user_id),))
            return int(cur.rowcount)
