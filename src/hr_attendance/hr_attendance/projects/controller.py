from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import (
    admin_required,
    current_role,
    current_user_id,
    employee_required,
    handle_errors,
    json_body,
    required_date,
)
from ..container import Container


def register(app: Flask, container: Container) -> None:
    svc = container.project_service

    @app.route("/api/admin/projects", methods=["POST"], endpoint="create_project")
    @admin_required
    @handle_errors("creating project")
    def create_project():
        body = json_body()
        due = body.get("due_date")
        project = svc.create_project(
            current_role=current_role(),
            name=body.get("name", ""),
            description=body.get("description", ""),
            employee_ids=body.get("employee_ids"),
            status=body.get("status"),
            due_date=required_date(due, "due_date") if due else None,
        )
        return jsonify({"success": True, "message": "Project created and employees assigned", "project": svc.to_view(project)}), 201

    @app.route("/api/admin/projects", methods=["GET"], endpoint="list_projects")
    @admin_required
    @handle_errors("fetching projects")
    def list_projects():
        return jsonify({"success": True, "projects": svc.list_projects()})

    @app.route("/api/admin/projects/<int:project_id>/employees", methods=["PUT"], endpoint="update_project_employees")
    @admin_required
    @handle_errors("updating project employees")
    def update_project_employees(project_id: int):
        project = svc.update_employees(
            current_role=current_role(),
            project_id=project_id,
            employee_ids=json_body().get("employee_ids"),
        )
        return jsonify({"success": True, "message": "Project employees updated", "project": svc.to_view(project)})

    @app.route("/api/employee/projects", endpoint="my_projects")
    @employee_required
    @handle_errors("fetching projects")
    def my_projects():
        return jsonify({"success": True, "projects": svc.my_projects(user_id=current_user_id())})
