from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    employee_required,
    handle_errors,
    optional_int_arg,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.salary_service

    @app.route("/api/employee/salary", endpoint="my_salary")
    @employee_required
    @handle_errors("calculating salary")
    def my_salary():
        salary = svc.salary_for_employee(
            current_role=current_role(),
            caller_id=current_user_id(),
            user_id=current_user_id(),
            year=optional_int_arg("year"),
            month=optional_int_arg("month"),
        )
        return jsonify({"success": True, "salary": salary})

    @app.route("/api/admin/employees/<int:user_id>/salary", endpoint="employee_salary")
    @admin_required
    @handle_errors("calculating salary")
    def employee_salary(user_id: int):
        salary = svc.salary_for_employee(
            current_role=current_role(),
            caller_id=current_user_id(),
            user_id=user_id,
            year=optional_int_arg("year"),
            month=optional_int_arg("month"),
        )
        return jsonify({"success": True, "salary": salary})

    @app.route("/api/admin/salaries/monthly", endpoint="monthly_salaries")
    @admin_required
    @handle_errors("fetching monthly salaries")
    def monthly_salaries():
        result = svc.monthly_salaries(
            current_role=current_role(),
            year=optional_int_arg("year"),
            month=optional_int_arg("month"),
        )
        return jsonify(dict(result, success=True))
