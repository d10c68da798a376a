from __future__ import annotations

from dataclasses import dataclass
from html import escape

from ..leaves.model import LeaveRequest
from ..users.model import User

_LAYOUT = """
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
    <h2 style="color: {color};">{title}</h2>
    {body}
    <a href="{url}" style="display: inline-block; background: #10b981; color: white; padding: 12px 24px; text-decoration: none; border-radius: 5px; margin: 20px 0;">
        {button}
    </a>
</div>
"""

_DETAILS = '<div style="background: #f5f5f5; padding: 15px; border-radius: 5px; margin: 20px 0;">{rows}</div>'


@dataclass(frozen=True)
class EmailMessage:
    subject: str
    content: str


def _details(**rows: str) -> str:
    return _DETAILS.format(
        rows="".join(f"<p><strong>{escape(k)}:</strong> {escape(str(v))}</p>" for k, v in rows.items())
    )


def leave_request_message(req: LeaveRequest, employee: User, *, frontend_url: str) -> EmailMessage:
    """Sent to every admin when an employee submits a request."""
    body = (
        "<p>Dear Admin,</p><p>A new leave request has been submitted:</p>"
        + _details(
            **{
                "Employee": f"{employee.full_name} ({employee.employee_code})",
                "Leave Type": req.leave_type.value,
                "Start Date": req.start_date.isoformat(),
                "End Date": req.end_date.isoformat(),
                "Paid Leave": "Yes" if req.is_paid_leave else "No",
                "Reason": req.reason,
            }
        )
        + "<p>Please review and respond to this request.</p>"
    )
    return EmailMessage(
        subject=f"Leave Request from {employee.full_name}",
        content=_LAYOUT.format(color="#333", title="New Leave Request", body=body, url=frontend_url, button="View Request"),
    )


def leave_response_message(req: LeaveRequest, employee: User, *, frontend_url: str) -> EmailMessage:
    approved = req.is_approved
    rows = {
        "Leave Type": req.leave_type.value,
        "Start Date": req.start_date.isoformat(),
        "End Date": req.end_date.isoformat(),
    }
    if req.admin_note:
        rows["Admin Response"] = req.admin_note
    body = (
        f"<p>Dear {escape(employee.full_name)},</p>"
        f"<p>Your leave request has been <strong>{req.status.value.lower()}</strong>.</p>"
        + _details(**rows)
    )
    return EmailMessage(
        subject=f"Leave Request {req.status.value}",
        content=_LAYOUT.format(
            color="#10b981" if approved else "#ef4444",
            title=f"Leave Request {req.status.value}",
            body=body,
            url=frontend_url,
            button="View Details",
        ),
    )


def welcome_message(employee: User, *, frontend_url: str) -> EmailMessage:
    body = (
        f"<p>Dear {escape(employee.full_name)},</p>"
        "<p>Your employee account has been created. You can now sign in with:</p>"
        + _details(
            **{
                "Email": employee.email,
                "Employee ID": employee.employee_code,
                "Designation": employee.designation.value,
            }
        )
        + "<p><strong>Note:</strong> Please change your password after first login.</p>"
    )
    return EmailMessage(
        subject="Welcome - Your Account Has Been Created",
        content=_LAYOUT.format(color="#333", title="Welcome!", body=body, url=frontend_url, button="Access Dashboard"),
    )


def update_message(employee: User, *, frontend_url: str) -> EmailMessage:
    """Sent after an admin edits an employee's record."""
    body = (
        f"<p>Dear {escape(employee.full_name)},</p>"
        "<p>Your employee profile has been updated by the administrator. "
        "Please review your updated information.</p>"
        + _details(
            **{
                "Email": employee.email,
                "Employee ID": employee.employee_code,
                "Designation": employee.designation.value,
            }
        )
    )
    return EmailMessage(
        subject="Your Employee Profile Has Been Updated",
        content=_LAYOUT.format(color="#333", title="Profile Updated", body=body, url=frontend_url, button="Access Dashboard"),
    )
