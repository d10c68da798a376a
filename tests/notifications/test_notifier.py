from datetime import date, datetime

from src.hr_attendance.hr_attendance.core.enums import LeaveType, RequestStatus
from src.hr_attendance.hr_attendance.leaves.model import LeaveRequest
from src.hr_attendance.hr_attendance.notifications.messages import (
    leave_request_message,
    leave_response_message,
    update_message,
    welcome_message,
)
from src.hr_attendance.hr_attendance.notifications.notifier import (
    BackgroundNotifier,
    LoggingNotifier,
    build_notifier,
    send_quietly,
)
from tests.fakes import FailingNotifier, GatedNotifier, RecordingNotifier, make_user


def _request(status=RequestStatus.PENDING, note=None):
    return LeaveRequest(
        request_id=1,
        user_id=2,
        start_date=date(2026, 3, 5),
        end_date=date(2026, 3, 6),
        leave_type=LeaveType.CASUAL,
        is_paid_leave=True,
        reason="<b>moving</b>",
        status=status,
        created_at=datetime(2026, 3, 2, 9, 0),
        admin_note=note,
    )


def test_send_quietly_swallows_failures(caplog):
    assert send_quietly(FailingNotifier(), to="a@example.com", subject="s", content="c") is False
    assert "Notification to a@example.com failed" in caplog.text


def test_send_quietly_skips_missing_notifier_or_address():
    notifier = RecordingNotifier()

    assert send_quietly(None, to="a@example.com", subject="s", content="c") is False
    assert send_quietly(notifier, to="", subject="s", content="c") is False
    assert send_quietly(notifier, to="a@example.com", subject="s", content="c") is True
    assert len(notifier.sent) == 1


def test_build_notifier_picks_logging_or_background_smtp():
    assert isinstance(build_notifier({}), LoggingNotifier)
    assert isinstance(build_notifier({"SMTP_HOST": "smtp.example.com", "SMTP_USER": ""}), LoggingNotifier)
    notifier = build_notifier({"SMTP_HOST": "smtp.example.com", "SMTP_USER": "hr"})
    try:
        assert isinstance(notifier, BackgroundNotifier)
    finally:
        notifier.shutdown()


def test_leave_request_message_escapes_reason():
    msg = leave_request_message(_request(), make_user(2, full_name="Jane Doe"), frontend_url="http://hr.local")

    assert msg.subject == "Leave Request from Jane Doe"
    assert "&lt;b&gt;moving&lt;/b&gt;" in msg.content
    assert "http://hr.local" in msg.content


def test_leave_response_message_includes_note():
    msg = leave_response_message(
        _request(RequestStatus.APPROVED, note="enjoy"), make_user(2), frontend_url="http://hr.local"
    )

    assert msg.subject == "Leave Request Approved"
    assert "enjoy" in msg.content


def test_welcome_message():
    msg = welcome_message(make_user(2, employee_code="EMP-777"), frontend_url="http://hr.local")

    assert msg.subject == "Welcome - Your Account Has Been Created"
    assert "EMP-777" in msg.content


def test_background_notifier_does_not_wait_for_delivery():
    inner = GatedNotifier()
    notifier = BackgroundNotifier(inner)
    try:
        assert send_quietly(notifier, to="a@example.com", subject="s", content="c") is True
        assert inner.sent == []

        inner.release.set()
        assert notifier.flush(timeout=5)
        assert [m["to"] for m in inner.sent] == ["a@example.com"]
    finally:
        inner.release.set()
        notifier.shutdown()


def test_background_notifier_logs_worker_failures(caplog):
    notifier = BackgroundNotifier(FailingNotifier())
    try:
        assert send_quietly(notifier, to="a@example.com", subject="s", content="c") is True
        assert notifier.flush(timeout=5)
    finally:
        notifier.shutdown()

    assert "Background notification to a@example.com failed" in caplog.text


def test_update_message():
    msg = update_message(make_user(2, full_name="Jane Doe"), frontend_url="http://hr.local")

    assert msg.subject == "Your Employee Profile Has Been Updated"
    assert "Jane Doe" in msg.content
