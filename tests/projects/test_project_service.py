from datetime import date

import pytest

from src.hr_attendance.hr_attendance.core.enums import ProjectStatus, Role
from src.hr_attendance.hr_attendance.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.hr_attendance.hr_attendance.projects.service import ProjectService
from tests.fakes import ADMIN_ID, EMPLOYEE_ID, make_user


@pytest.fixture
def project_service(projects_repo, users):
    users.add(make_user(3, full_name="John Roe"))
    return ProjectService(projects_repo, users)


def test_create_project_assigns_employees(project_service, fixed_now):
    project = project_service.create_project(
        current_role=Role.ADMIN,
        name="Payroll revamp",
        description="Rework monthly payroll",
        employee_ids=[EMPLOYEE_ID, "3", EMPLOYEE_ID],
        due_date=date(2026, 6, 30),
        now=fixed_now,
    )

    assert project.employee_ids == (EMPLOYEE_ID, 3)
    assert project.status == ProjectStatus.RUNNING
    assert project.start_date == fixed_now.date()

    view = project_service.list_projects()[0]
    assert [e["full_name"] for e in view["employees"]] == ["Jane Doe", "John Roe"]


def test_create_project_validation(project_service):
    base = dict(current_role=Role.ADMIN, name="A", description="B")

    with pytest.raises(NotFoundError):
        project_service.create_project(**base, employee_ids=[ADMIN_ID])
    with pytest.raises(ValidationError):
        project_service.create_project(**base, employee_ids="2")
    with pytest.raises(ValidationError):
        project_service.create_project(**base, employee_ids=[EMPLOYEE_ID], status="Cancelled")
    with pytest.raises(AuthorizationError):
        project_service.create_project(**dict(base, current_role=Role.EMPLOYEE), employee_ids=[])

    project_service.create_project(**base, employee_ids=[])
    with pytest.raises(ValidationError):
        project_service.create_project(**base, employee_ids=[])


def test_update_employees_and_my_projects(project_service):
    project = project_service.create_project(
        current_role=Role.ADMIN, name="A", description="B", employee_ids=[EMPLOYEE_ID]
    )

    updated = project_service.update_employees(current_role=Role.ADMIN, project_id=project.project_id, employee_ids=[3])

    assert updated.employee_ids == (3,)
    assert project_service.my_projects(user_id=EMPLOYEE_ID) == []
    assert project_service.my_projects(user_id=3)[0]["name"] == "A"

    with pytest.raises(NotFoundError):
        project_service.update_employees(current_role=Role.ADMIN, project_id=99, employee_ids=[3])
