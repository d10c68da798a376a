"""In-memory repository fakes shared by the test modules."""

from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from src.hr_attendance.hr_attendance.attendance.model import AttendanceRecord
from src.hr_attendance.hr_attendance.core.enums import (
    AttendanceStatus,
    Designation,
    LeaveType,
    RequestStatus,
    Role,
)
from src.hr_attendance.hr_attendance.leaves.model import LeaveRequest
from src.hr_attendance.hr_attendance.projects.model import Project
from src.hr_attendance.hr_attendance.users.model import User


def make_user(user_id: int, *, role: Role = Role.EMPLOYEE, salary: float = 22000, paid_leave_balance: int = 1, **kw) -> User:
    return User(
        user_id=user_id,
        full_name=kw.pop("full_name", f"User {user_id}"),
        email=kw.pop("email", f"user{user_id}@example.com"),
        employee_code=kw.pop("employee_code", f"EMP-{user_id:03d}"),
        password_hash=kw.pop("password_hash", "x"),
        role=role,
        designation=kw.pop("designation", Designation.DEVELOPER),
        salary=salary,
        paid_leave_balance=paid_leave_balance,
        **kw,
    )


class InMemoryUsers:
    def __init__(self, *users: User):
        self.by_id: dict[int, User] = {u.user_id: u for u in users}
        self._next_id = max(self.by_id, default=0) + 1

    def add(self, user: User) -> User:
        self.by_id[user.user_id] = user
        self._next_id = max(self._next_id, user.user_id + 1)
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email), None)

    def get_by_employee_code(self, employee_code: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.employee_code == employee_code), None)

    def create_user(self, *, full_name, email, employee_code, password_hash, role, designation, salary, paid_leave_balance, last_paid_leave_reset) -> int:
        uid = self._next_id
        self._next_id += 1
        self.by_id[uid] = User(
            user_id=uid,
            full_name=full_name,
            email=email,
            employee_code=employee_code,
            password_hash=password_hash,
            role=role,
            designation=designation,
            salary=salary,
            paid_leave_balance=paid_leave_balance,
            last_paid_leave_reset=last_paid_leave_reset,
        )
        return uid

    def update_profile(self, *, user_id, full_name, email, employee_code, designation, salary) -> bool:
        u = self.by_id[int(user_id)]
        self.by_id[u.user_id] = replace(
            u, full_name=full_name, email=email, employee_code=employee_code, designation=designation, salary=salary
        )
        return True

    def delete_by_id(self, user_id: int) -> bool:
        return self.by_id.pop(int(user_id), None) is not None

    def list_by_role(self, role: Role):
        return [u for u in sorted(self.by_id.values(), key=lambda u: u.user_id) if u.role == role]

    def deduct_paid_leave(self, *, user_id: int, days: int) -> bool:
        u = self.by_id.get(int(user_id))
        if not u:
            return False
        self.by_id[u.user_id] = replace(u, paid_leave_balance=max(u.paid_leave_balance - days, 0))
        return True

    def grant_paid_leave(self, *, role: Role, amount: int, granted_at: datetime) -> int:
        count = 0
        for u in list(self.by_id.values()):
            if u.role == role:
                self.by_id[u.user_id] = replace(
                    u, paid_leave_balance=u.paid_leave_balance + amount, last_paid_leave_reset=granted_at
                )
                count += 1
        return count


class InMemoryAttendance:
    def __init__(self):
        self.by_key: dict[tuple[int, date], AttendanceRecord] = {}
        self._next_id = 1
        self.upsert_calls = 0

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self.by_key[(record.user_id, record.work_date)] = record
        self._next_id = max(self._next_id, record.attendance_id + 1)
        return record

    def get_recent_for_user(self, user_id: int, limit: int):
        items = [r for r in self.by_key.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items[:limit]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self.by_key.get((int(user_id), work_date))

    def create_punch_in(self, *, user_id, work_date, punch_in, status) -> int:
        rid = self._next_id
        self._next_id += 1
        self.by_key[(int(user_id), work_date)] = AttendanceRecord(
            attendance_id=rid, user_id=int(user_id), work_date=work_date, punch_in=punch_in, status=status
        )
        return rid

    def update_record(self, record: AttendanceRecord) -> bool:
        self.by_key[(record.user_id, record.work_date)] = record
        return True

    def upsert_leave_days(self, *, user_id, work_dates, leave_type) -> int:
        self.upsert_calls += 1
        count = 0
        for d in work_dates:
            existing = self.by_key.get((int(user_id), d))
            if existing:
                self.by_key[(int(user_id), d)] = replace(existing, status=AttendanceStatus.LEAVE, leave_type=leave_type)
            else:
                rid = self._next_id
                self._next_id += 1
                self.by_key[(int(user_id), d)] = AttendanceRecord(
                    attendance_id=rid,
                    user_id=int(user_id),
                    work_date=d,
                    status=AttendanceStatus.LEAVE,
                    leave_type=leave_type,
                )
            count += 1
        return count

    def list_range(self, *, start_date, end_date, user_ids=None):
        rows = [
            r
            for r in self.by_key.values()
            if start_date <= r.work_date <= end_date and (user_ids is None or r.user_id in user_ids)
        ]
        rows.sort(key=lambda r: (r.work_date, -r.user_id), reverse=True)
        return rows

    def delete_for_user(self, user_id: int) -> int:
        keys = [k for k in self.by_key if k[0] == int(user_id)]
        for k in keys:
            del self.by_key[k]
        return len(keys)


class InMemoryLeaves:
    def __init__(self):
        self.by_id: dict[int, LeaveRequest] = {}
        self._next_id = 1
        self.lose_next_decide = False

    def add(self, req: LeaveRequest) -> LeaveRequest:
        self.by_id[req.request_id] = req
        self._next_id = max(self._next_id, req.request_id + 1)
        return req

    def create_request(self, *, user_id, start_date, end_date, leave_type, is_paid_leave, reason, created_at) -> int:
        rid = self._next_id
        self._next_id += 1
        self.by_id[rid] = LeaveRequest(
            request_id=rid,
            user_id=int(user_id),
            start_date=start_date,
            end_date=end_date,
            leave_type=leave_type,
            is_paid_leave=is_paid_leave,
            reason=reason,
            status=RequestStatus.PENDING,
            created_at=created_at,
        )
        return rid

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        return self.by_id.get(int(request_id))

    def list_requests(self, *, status=None, user_id=None, limit=200):
        rows = [
            r
            for r in self.by_id.values()
            if (status is None or r.status == status) and (user_id is None or r.user_id == int(user_id))
        ]
        rows.sort(key=lambda r: (r.created_at, r.request_id), reverse=True)
        return rows[:limit]

    def decide(self, *, request_id, status, decided_by, decided_at, admin_note=None) -> bool:
        req = self.by_id.get(int(request_id))
        if self.lose_next_decide:
            # another admin got there first
            self.lose_next_decide = False
            self.by_id[req.request_id] = replace(req, status=RequestStatus.REJECTED)
            return False
        if not req or req.status != RequestStatus.PENDING:
            return False
        self.by_id[req.request_id] = replace(
            req, status=status, decided_by=decided_by, decided_at=decided_at, admin_note=admin_note
        )
        return True

    def list_approved_paid(self, *, start_date, end_date, user_ids=None):
        return [
            r
            for r in self.by_id.values()
            if r.status == RequestStatus.APPROVED
            and r.is_paid_leave
            and r.start_date <= end_date
            and r.end_date >= start_date
            and (user_ids is None or r.user_id in user_ids)
        ]

    def delete_for_user(self, user_id: int) -> int:
        ids = [rid for rid, r in self.by_id.items() if r.user_id == int(user_id)]
        for rid in ids:
            del self.by_id[rid]
        return len(ids)


class InMemoryProjects:
    def __init__(self):
        self.by_id: dict[int, Project] = {}
        self._next_id = 1

    def create_project(self, *, name, description, status, start_date, due_date, employee_ids) -> int:
        pid = self._next_id
        self._next_id += 1
        self.by_id[pid] = Project(
            project_id=pid,
            name=name,
            description=description,
            status=status,
            start_date=start_date,
            due_date=due_date,
            employee_ids=tuple(employee_ids),
        )
        return pid

    def get_by_id(self, project_id: int) -> Optional[Project]:
        return self.by_id.get(int(project_id))

    def get_by_name(self, name: str) -> Optional[Project]:
        return next((p for p in self.by_id.values() if p.name == name), None)

    def list_projects(self):
        return list(self.by_id.values())

    def list_for_employee(self, user_id: int):
        return [p for p in self.by_id.values() if int(user_id) in p.employee_ids]

    def replace_employees(self, *, project_id, employee_ids) -> bool:
        p = self.by_id.get(int(project_id))
        if not p:
            return False
        self.by_id[p.project_id] = replace(p, employee_ids=tuple(employee_ids))
        return True

    def remove_employee(self, user_id: int) -> int:
        touched = 0
        for p in list(self.by_id.values()):
            if int(user_id) in p.employee_ids:
                self.by_id[p.project_id] = replace(p, employee_ids=tuple(u for u in p.employee_ids if u != int(user_id)))
                touched += 1
        return touched


class RecordingNotifier:
    def __init__(self):
        self.sent: list[dict] = []

    def send(self, *, to: str, subject: str, content: str) -> None:
        self.sent.append({"to": to, "subject": subject, "content": content})


class GatedNotifier:
    """Blocks every send until `release` is set, like an SMTP server that hangs."""

    def __init__(self):
        self.release = threading.Event()
        self.sent: list[dict] = []

    def send(self, *, to: str, subject: str, content: str) -> None:
        if not self.release.wait(timeout=5):
            raise TimeoutError("smtp hung")
        self.sent.append({"to": to, "subject": subject, "content": content})


class FailingNotifier:
    def send(self, *, to: str, subject: str, content: str) -> None:
        raise ConnectionError("smtp down")


ADMIN_ID = 1
EMPLOYEE_ID = 2
