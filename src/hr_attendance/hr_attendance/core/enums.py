from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role used for access checks."""

    ADMIN = "Admin"
    EMPLOYEE = "Employee"


class Designation(str, Enum):
    DEVELOPER = "Developer"
    DESIGNER = "Designer"
    HR = "HR"
    MANAGER = "Manager"
    OTHER = "Other"


class AttendanceStatus(str, Enum):
    """Daily attendance status as stored in the database."""

    PRESENT = "Present"
    ABSENT = "Absent"
    LEAVE = "Leave"
    HALF_DAY = "Half Day"


class LeaveType(str, Enum):
    SICK = "Sick"
    CASUAL = "Casual"
    VACATION = "Vacation"
    PERSONAL = "Personal"
    OTHER = "Other"


class RequestStatus(str, Enum):
    """Leave request workflow state (one-way from PENDING)."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class LeaveAction(str, Enum):
    APPROVE = "approve"
    REJECT = "reject"


class ProjectStatus(str, Enum):
    RUNNING = "Running"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"
