from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Iterable, Optional, Sequence

from ..core.enums import AttendanceStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, user_id, work_date, punch_in, lunch_start, lunch_end, punch_out,
    total_break_minutes, total_work_minutes, status, leave_type
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=int(r["user_id"]),
        work_date=r["work_date"],
        punch_in=r.get("punch_in"),
        lunch_start=r.get("lunch_start"),
        lunch_end=r.get("lunch_end"),
        punch_out=r.get("punch_out"),
        total_break_minutes=int(r.get("total_break_minutes") or 0),
        total_work_minutes=int(r.get("total_work_minutes") or 0),
        status=AttendanceStatus(r["status"]),
        leave_type=LeaveType(r["leave_type"]) if r.get("leave_type") else None,
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_recent_for_user(self, user_id: int, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE user_id=%s
                ORDER BY work_date DESC
                LIMIT %s
                """,
                (int(user_id), int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE user_id=%s AND work_date=%s",
                (int(user_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_punch_in(
        self,
        *,
        user_id: int,
        work_date: date,
        punch_in: datetime,
        status: AttendanceStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(user_id, work_date, punch_in, status)
                VALUES(%s,%s,%s,%s)
                """,
                (int(user_id), work_date, punch_in, status.value),
            )
            return int(cur.lastrowid)

    def update_record(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET punch_in=%s, lunch_start=%s, lunch_end=%s, punch_out=%s,
                    total_break_minutes=%s, total_work_minutes=%s, status=%s, leave_type=%s
                WHERE attendance_id=%s
                """,
                (
                    record.punch_in,
                    record.lunch_start,
                    record.lunch_end,
                    record.punch_out,
                    int(record.total_break_minutes),
                    int(record.total_work_minutes),
                    record.status.value,
                    record.leave_type.value if record.leave_type else None,
                    int(record.attendance_id),
                ),
            )
            return cur.rowcount > 0

    def upsert_leave_days(self, *, user_id: int, work_dates: Iterable[date], leave_type: LeaveType) -> int:
        rows = [(int(user_id), d, AttendanceStatus.LEAVE.value, leave_type.value) for d in work_dates]
        if not rows:
            return 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO attendance_records(user_id, work_date, status, leave_type)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE status=VALUES(status), leave_type=VALUES(leave_type)
                """,
                rows,
            )
            return len(rows)

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        user_ids: Optional[Sequence[int]] = None,
    ) -> Sequence[AttendanceRecord]:
        if user_ids is not None and not user_ids:
            return []

        sql = f"SELECT {_COLUMNS} FROM attendance_records WHERE work_date BETWEEN %s AND %s"
        params: list = [start_date, end_date]
        if user_ids is not None:
            sql += f" AND user_id IN ({in_clause(user_ids)})"
            params.extend(int(u) for u in user_ids)
        sql += " ORDER BY work_date DESC, user_id"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def delete_for_user(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE user_id=%s", (int(user_id),))
            return int(cur.rowcount)
