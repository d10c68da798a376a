from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import (
    admin_required,
    current_role,
    handle_errors,
    optional_date_arg,
    optional_int_arg,
    required_date,
)
from ..container import Container
from ..core.constants import DEFAULT_TREND_DAYS


def register(app: Flask, container: Container) -> None:
    svc = container.report_service

    @app.route("/api/admin/attendance/summary", endpoint="attendance_summary")
    @admin_required
    @handle_errors("fetching attendance summary")
    def attendance_summary():
        result = svc.daily_summary(current_role=current_role(), day=optional_date_arg("date"))
        return jsonify(dict(result, success=True))

    @app.route("/api/admin/attendance/leave", endpoint="attendance_on_leave")
    @admin_required
    @handle_errors("fetching employees on leave")
    def attendance_on_leave():
        rows = svc.employees_on_leave(current_role=current_role(), day=optional_date_arg("date"))
        return jsonify({"success": True, "employees_on_leave": rows})

    @app.route("/api/admin/attendance/present", endpoint="attendance_present")
    @admin_required
    @handle_errors("fetching present employees")
    def attendance_present():
        rows = svc.present_employees(current_role=current_role(), day=optional_date_arg("date"))
        return jsonify({"success": True, "present_employees": rows})

    @app.route("/api/admin/attendance/analytics", endpoint="attendance_analytics")
    @admin_required
    @handle_errors("fetching attendance analytics")
    def attendance_analytics():
        days = optional_int_arg("days") or DEFAULT_TREND_DAYS
        return jsonify(dict(svc.trends(current_role=current_role(), range_days=days), success=True))

    @app.route("/api/admin/attendance/report", endpoint="attendance_report")
    @admin_required
    @handle_errors("fetching attendance report")
    def attendance_report():
        result = svc.range_report(
            current_role=current_role(),
            start_date=required_date(request.args.get("start_date"), "start_date"),
            end_date=required_date(request.args.get("end_date"), "end_date"),
            user_id=optional_int_arg("employee_id"),
        )
        return jsonify(dict(result, success=True))

    @app.route("/api/admin/employees/<int:user_id>/stats", endpoint="employee_stats")
    @admin_required
    @handle_errors("fetching employee statistics")
    def employee_stats(user_id: int):
        stats = svc.employee_stats(
            current_role=current_role(),
            user_id=user_id,
            year=optional_int_arg("year"),
            month=optional_int_arg("month"),
        )
        return jsonify({"success": True, "stats": stats})
