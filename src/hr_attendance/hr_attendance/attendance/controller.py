from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import current_role, current_user_id, employee_required, handle_errors, optional_int_arg
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_LIMIT


def register(app: Flask, container: Container) -> None:
    svc = container.attendance_service

    def _punch(action, message: str):
        record = action(current_role=current_role(), user_id=current_user_id())
        return jsonify({"success": True, "message": message, "attendance": record.to_dict()})

    @app.route("/api/employee/attendance/check-in", methods=["POST"], endpoint="punch_in")
    @employee_required
    @handle_errors("punch in")
    def punch_in():
        return _punch(svc.punch_in, "Punched in successfully")

    @app.route("/api/employee/attendance/lunch-start", methods=["POST"], endpoint="lunch_start")
    @employee_required
    @handle_errors("lunch start")
    def lunch_start():
        return _punch(svc.lunch_start, "Lunch break started")

    @app.route("/api/employee/attendance/lunch-end", methods=["POST"], endpoint="lunch_end")
    @employee_required
    @handle_errors("lunch end")
    def lunch_end():
        return _punch(svc.lunch_end, "Lunch break ended")

    @app.route("/api/employee/attendance/check-out", methods=["POST"], endpoint="punch_out")
    @employee_required
    @handle_errors("punch out")
    def punch_out():
        return _punch(svc.punch_out, "Punched out successfully")

    @app.route("/api/employee/attendance/today", endpoint="attendance_today")
    @employee_required
    @handle_errors("fetching today's attendance")
    def attendance_today():
        record = svc.get_today(user_id=current_user_id())
        return jsonify({"success": True, "attendance": record.to_dict() if record else None})

    @app.route("/api/employee/attendance/history", endpoint="attendance_history")
    @employee_required
    @handle_errors("fetching attendance history")
    def attendance_history():
        limit = optional_int_arg("limit") or DEFAULT_HISTORY_LIMIT
        rows = svc.history(user_id=current_user_id(), limit=limit)
        return jsonify({"success": True, "history": [r.to_dict() for r in rows]})
