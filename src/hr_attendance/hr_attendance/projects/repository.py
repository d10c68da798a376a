from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import ProjectStatus
from .model import Project


class ProjectRepository(Protocol):
    def create_project(
        self,
        *,
        name: str,
        description: str,
        status: ProjectStatus,
        start_date: date,
        due_date: Optional[date],
        employee_ids: Sequence[int],
    ) -> int:
        raise NotImplementedError

    def get_by_id(self, project_id: int) -> Optional[Project]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Project]:
        raise NotImplementedError

    def list_projects(self) -> Sequence[Project]:
        raise NotImplementedError

    def list_for_employee(self, user_id: int) -> Sequence[Project]:
        raise NotImplementedError

    def replace_employees(self, *, project_id: int, employee_ids: Sequence[int]) -> bool:
        raise NotImplementedError

    def remove_employee(self, user_id: int) -> int:
        """Unassign the employee from every project. Returns the number of projects touched."""

        raise NotImplementedError
