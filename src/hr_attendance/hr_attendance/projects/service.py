from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, List, Optional

from ..common.validators import parse_enum, require_non_empty
from ..core.enums import ProjectStatus, Role
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import Project
from .repository import ProjectRepository

logger = logging.getLogger(__name__)


class ProjectService:
    def __init__(self, projects: ProjectRepository, users: UserRepository):
        self._projects = projects
        self._users = users

    def _employee_ids(self, employee_ids: Iterable) -> List[int]:
        if employee_ids is None or isinstance(employee_ids, (str, bytes)):
            raise ValidationError("Employee IDs must be a list")
        ids: List[int] = []
        for raw in employee_ids:
            try:
                uid = int(raw)
            except (TypeError, ValueError):
                raise ValidationError("Employee IDs must be integers")
            if uid not in ids:
                ids.append(uid)

        for uid in ids:
            user = self._users.get_by_id(uid)
            if not user or user.role != Role.EMPLOYEE:
                raise NotFoundError(f"Employee {uid} not found")
        return ids

    def create_project(
        self,
        *,
        current_role: Role,
        name: str,
        description: str,
        employee_ids: Iterable,
        status=ProjectStatus.RUNNING,
        due_date: Optional[date] = None,
        now: datetime | None = None,
    ) -> Project:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can create projects")

        name = require_non_empty(name, "Project name")
        description = require_non_empty(description, "Description")
        status = parse_enum(ProjectStatus, status or ProjectStatus.RUNNING, "Status")
        ids = self._employee_ids(employee_ids)

        if self._projects.get_by_name(name):
            raise ValidationError("A project with this name already exists")

        start_date = (now or datetime.now()).date()
        project_id = self._projects.create_project(
            name=name,
            description=description,
            status=status,
            start_date=start_date,
            due_date=due_date,
            employee_ids=ids,
        )
        logger.info("Created project %s (%s) with %s employee(s)", project_id, name, len(ids))
        return Project(
            project_id=project_id,
            name=name,
            description=description,
            status=status,
            start_date=start_date,
            due_date=due_date,
            employee_ids=tuple(ids),
        )

    def to_view(self, project: Project) -> dict:
        """Project plus the assigned employees that still exist."""
        row = project.to_dict()
        employees = [self._users.get_by_id(uid) for uid in project.employee_ids]
        row["employees"] = [u.summary() for u in employees if u]
        return row

    def list_projects(self) -> List[dict]:
        return [self.to_view(p) for p in self._projects.list_projects()]

    def update_employees(self, *, current_role: Role, project_id: int, employee_ids: Iterable) -> Project:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Only admins can assign employees")

        ids = self._employee_ids(employee_ids)
        if not self._projects.replace_employees(project_id=int(project_id), employee_ids=ids):
            raise NotFoundError("Project not found")

        project = self._projects.get_by_id(int(project_id))
        if not project:
            raise NotFoundError("Project not found")
        return project

    def my_projects(self, *, user_id: int) -> List[dict]:
        return [self.to_view(p) for p in self._projects.list_for_employee(int(user_id))]
