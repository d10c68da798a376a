from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import datetime
from typing import List

from werkzeug.security import check_password_hash, generate_password_hash

from ..attendance.repository import AttendanceRepository
from ..common.validators import parse_enum, require_min_length, require_non_empty, require_non_negative
from ..core.constants import INITIAL_PAID_LEAVES
from ..core.enums import Designation, Role
from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    ValidationError,
)
from ..leaves.repository import LeaveRepository
from ..notifications.messages import update_message, welcome_message
from ..notifications.notifier import Notifier, send_quietly
from ..projects.repository import ProjectRepository
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    full_name: str
    email: str
    role: Role


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, email: str, password: str) -> SessionUser:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not user.is_active:
            raise AuthenticationError("Invalid email or password")

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hash values
            ok = False

        if not ok:
            raise AuthenticationError("Invalid email or password")

        return SessionUser(user_id=user.user_id, full_name=user.full_name, email=user.email, role=user.role)


class UserService:
    """Use case: manage employee accounts (admin)."""

    def __init__(
        self,
        users: UserRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        projects: ProjectRepository,
        *,
        notifier: Notifier | None = None,
        frontend_url: str = "http://localhost:3000",
    ):
        self._users = users
        self._attendance = attendance
        self._leaves = leaves
        self._projects = projects
        self._notifier = notifier
        self._frontend_url = frontend_url

    def create_account(
        self,
        *,
        current_role: Role,
        full_name: str,
        email: str,
        employee_code: str,
        password: str,
        designation,
        salary,
        role=Role.EMPLOYEE,
        now: datetime | None = None,
    ) -> int:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can create accounts")

        full_name = require_non_empty(full_name, "Name")
        email = require_non_empty(email, "Email").lower()
        employee_code = require_non_empty(employee_code, "Employee code")
        require_min_length(password, "Password", 6)
        designation = parse_enum(Designation, designation, "Designation")
        role = parse_enum(Role, role, "Role")
        salary = require_non_negative(salary, "Salary")

        if "@" not in email:
            raise ValidationError("Email is not valid")
        if self._users.get_by_email(email):
            raise ValidationError("Employee with this email already exists")
        if self._users.get_by_employee_code(employee_code):
            raise ValidationError("Employee with this employee code already exists")

        now = now or datetime.now()
        user_id = self._users.create_user(
            full_name=full_name,
            email=email,
            employee_code=employee_code,
            password_hash=generate_password_hash(password),
            role=role,
            designation=designation,
            salary=salary,
            paid_leave_balance=INITIAL_PAID_LEAVES,
            last_paid_leave_reset=now,
        )
        logger.info("Created %s account %s (%s)", role.value, user_id, employee_code)

        created = self._users.get_by_id(user_id)
        if created:
            message = welcome_message(created, frontend_url=self._frontend_url)
            send_quietly(self._notifier, to=created.email, subject=message.subject, content=message.content)
        return user_id

    def list_employees(self) -> List[User]:
        return list(self._users.list_by_role(Role.EMPLOYEE))

    def get_profile(self, *, user_id: int) -> User:
        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Employee not found")
        return user

    def delete_employee(self, *, current_role: Role, user_id: int) -> None:
        """Delete an employee and everything that references them.

        The cascade is not transactional; report queries ignore records of
        accounts that no longer exist.
        """
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can delete employees")

        user = self._users.get_by_id(int(user_id))
        if not user:
            raise NotFoundError("Employee not found")
        if user.role == Role.ADMIN:
            raise ValidationError("Admin accounts cannot be deleted")

        self._attendance.delete_for_user(user.user_id)
        self._leaves.delete_for_user(user.user_id)
        self._projects.remove_employee(user.user_id)

        if not self._users.delete_by_id(user.user_id):
            raise NotFoundError("Employee not found")
        logger.info("Deleted employee %s and related records", user.user_id)

    def update_employee(
        self,
        *,
        current_role: Role,
        admin_user_id: int,
        user_id: int,
        full_name: str | None = None,
        email: str | None = None,
        employee_code: str | None = None,
        designation=None,
        salary=None,
    ) -> User:
        """Partial update: fields left as None keep their stored value."""
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can update employees")

        user = self.get_profile(user_id=user_id)
        if user.role == Role.ADMIN and user.user_id != int(admin_user_id):
            raise ValidationError("Cannot modify other admin accounts")

        new_email = require_non_empty(email, "Email").lower() if email is not None else user.email
        new_code = require_non_empty(employee_code, "Employee code") if employee_code is not None else user.employee_code
        if new_email != user.email:
            other = self._users.get_by_email(new_email)
            if other and other.user_id != user.user_id:
                raise ValidationError("Employee with this email already exists")
        if new_code != user.employee_code:
            other = self._users.get_by_employee_code(new_code)
            if other and other.user_id != user.user_id:
                raise ValidationError("Employee with this employee code already exists")

        updated = replace(
            user,
            full_name=require_non_empty(full_name, "Name") if full_name is not None else user.full_name,
            email=new_email,
            employee_code=new_code,
            designation=parse_enum(Designation, designation, "Designation") if designation is not None else user.designation,
            salary=require_non_negative(salary, "Salary") if salary is not None else user.salary,
        )
        self._users.update_profile(
            user_id=updated.user_id,
            full_name=updated.full_name,
            email=updated.email,
            employee_code=updated.employee_code,
            designation=updated.designation,
            salary=updated.salary,
        )
        logger.info("Updated employee %s", updated.user_id)

        message = update_message(updated, frontend_url=self._frontend_url)
        send_quietly(self._notifier, to=updated.email, subject=message.subject, content=message.content)
        return updated

    def update_own_profile(
        self,
        *,
        current_role: Role,
        user_id: int,
        full_name: str | None = None,
        email: str | None = None,
    ) -> User:
        """Employee self-service: only name and email; role, salary, code and designation stay."""
        if current_role != Role.EMPLOYEE:
            raise AuthorizationError("Only employees can update their own profile here")

        user = self.get_profile(user_id=user_id)
        new_email = require_non_empty(email, "Email").lower() if email else user.email
        if "@" not in new_email:
            raise ValidationError("Email is not valid")
        if new_email != user.email:
            other = self._users.get_by_email(new_email)
            if other and other.user_id != user.user_id:
                raise ValidationError("Email already exists")

        updated = replace(
            user,
            full_name=require_non_empty(full_name, "Name") if full_name else user.full_name,
            email=new_email,
        )
        self._users.update_profile(
            user_id=updated.user_id,
            full_name=updated.full_name,
            email=updated.email,
            employee_code=updated.employee_code,
            designation=updated.designation,
            salary=updated.salary,
        )
        logger.info("Employee %s updated own profile", updated.user_id)
        return updated
