from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    employee_required,
    handle_errors,
    json_body,
    login_required,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/auth/login", methods=["POST"], endpoint="login")
    @handle_errors("login")
    def login():
        body = json_body()
        s_user = container.auth_service.authenticate(body.get("email", ""), body.get("password", ""))

        session.clear()
        session.permanent = bool(body.get("remember_me"))
        session["user_id"] = s_user.user_id
        session["name"] = s_user.full_name
        session["role"] = s_user.role.value

        return jsonify(
            {
                "success": True,
                "user": {
                    "user_id": s_user.user_id,
                    "full_name": s_user.full_name,
                    "email": s_user.email,
                    "role": s_user.role.value,
                },
            }
        )

    @app.route("/api/auth/logout", methods=["POST"], endpoint="logout")
    def logout():
        session.clear()
        return jsonify({"success": True, "message": "Logged out"})

    @app.route("/api/employee/profile", endpoint="employee_profile")
    @login_required
    @handle_errors("fetching profile")
    def employee_profile():
        user = container.user_service.get_profile(user_id=current_user_id())
        return jsonify({"success": True, "profile": user.public_profile()})

    @app.route("/api/employee/profile", methods=["PUT"], endpoint="update_own_profile")
    @employee_required
    @handle_errors("updating profile")
    def update_own_profile():
        body = json_body()
        user = container.user_service.update_own_profile(
            current_role=current_role(),
            user_id=current_user_id(),
            full_name=body.get("name"),
            email=body.get("email"),
        )
        return jsonify({"success": True, "message": "Profile updated successfully.", "profile": user.public_profile()})

    @app.route("/api/admin/employees", methods=["GET"], endpoint="admin_employees")
    @admin_required
    @handle_errors("fetching employees")
    def admin_employees():
        employees = container.user_service.list_employees()
        return jsonify({"success": True, "employees": [e.public_profile() for e in employees]})

    @app.route("/api/admin/employees", methods=["POST"], endpoint="add_employee")
    @admin_required
    @handle_errors("adding employee")
    def add_employee():
        body = json_body()
        user_id = container.user_service.create_account(
            current_role=current_role(),
            full_name=body.get("name", ""),
            email=body.get("email", ""),
            employee_code=body.get("employee_code", ""),
            password=body.get("password", ""),
            designation=body.get("designation"),
            salary=body.get("salary"),
            role=body.get("role") or "Employee",
        )
        user = container.user_service.get_profile(user_id=user_id)
        return jsonify({"success": True, "message": "Employee added successfully", "employee": user.public_profile()}), 201

    @app.route("/api/admin/employees/<int:user_id>", methods=["PUT"], endpoint="update_employee")
    @admin_required
    @handle_errors("updating employee")
    def update_employee(user_id: int):
        body = json_body()
        user = container.user_service.update_employee(
            current_role=current_role(),
            admin_user_id=current_user_id(),
            user_id=user_id,
            full_name=body.get("name"),
            email=body.get("email"),
            employee_code=body.get("employee_code"),
            designation=body.get("designation"),
            salary=body.get("salary"),
        )
        return jsonify({"success": True, "message": "Employee updated successfully", "employee": user.public_profile()})

    @app.route("/api/admin/employees/<int:user_id>", methods=["DELETE"], endpoint="delete_employee")
    @admin_required
    @handle_errors("deleting employee")
    def delete_employee(user_id: int):
        container.user_service.delete_employee(current_role=current_role(), user_id=user_id)
        return jsonify({"success": True, "message": "Employee and related records deleted"})
