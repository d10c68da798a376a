from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    employee_required,
    handle_errors,
    json_body,
    json_flag,
    required_date,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.leave_service

    @app.route("/api/employee/leave/request", methods=["POST"], endpoint="request_leave")
    @employee_required
    @handle_errors("submitting leave request")
    def request_leave():
        body = json_body()
        req = svc.submit_request(
            current_role=current_role(),
            user_id=current_user_id(),
            start_date=required_date(body.get("start_date"), "start_date"),
            end_date=required_date(body.get("end_date"), "end_date"),
            leave_type=body.get("leave_type"),
            reason=body.get("reason", ""),
            use_paid_leave=json_flag(body.get("use_paid_leave")),
        )
        message = "Paid leave request submitted" if req.is_paid_leave else "Leave request submitted"
        return jsonify({"success": True, "message": message, "leave_request": req.to_dict()}), 201

    @app.route("/api/employee/leave/requests", endpoint="my_leave_requests")
    @employee_required
    @handle_errors("fetching leave requests")
    def my_leave_requests():
        rows = svc.list_my_requests(user_id=current_user_id())
        return jsonify({"success": True, "leave_requests": [r.to_dict() for r in rows]})

    @app.route("/api/employee/paid-leaves", endpoint="my_paid_leaves")
    @employee_required
    @handle_errors("fetching paid leaves")
    def my_paid_leaves():
        return jsonify(dict(svc.paid_leave_balance(user_id=current_user_id()), success=True))

    @app.route("/api/admin/leave/requests", endpoint="pending_leave_requests")
    @admin_required
    @handle_errors("fetching leave requests")
    def pending_leave_requests():
        return jsonify({"success": True, "leave_requests": svc.list_pending(current_role=current_role())})

    @app.route("/api/admin/leave/requests/<int:request_id>", methods=["PUT"], endpoint="respond_leave_request")
    @admin_required
    @handle_errors("responding to leave request")
    def respond_leave_request(request_id: int):
        body = json_body()
        req = svc.respond(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            request_id=request_id,
            action=body.get("action"),
            note=body.get("admin_response", ""),
        )
        return jsonify(
            {"success": True, "message": f"Leave request {req.status.value.lower()}", "leave_request": req.to_dict()}
        )

    @app.route("/api/admin/leave/requests/<int:request_id>/reapply", methods=["POST"], endpoint="reapply_leave_days")
    @admin_required
    @handle_errors("re-applying leave days")
    def reapply_leave_days(request_id: int):
        marked = svc.reapply_leave_days(current_role=current_role(), request_id=request_id)
        return jsonify({"success": True, "message": f"{marked} leave day(s) marked", "days_marked": marked})

    @app.route("/api/admin/paid-leaves/reset", methods=["POST"], endpoint="reset_paid_leaves")
    @admin_required
    @handle_errors("resetting paid leaves")
    def reset_paid_leaves():
        updated = svc.monthly_reset(current_role=current_role())
        return jsonify({"success": True, "message": f"Paid leaves credited to {updated} employee(s)", "updated": updated})
