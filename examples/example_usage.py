"""Example: use the service layer directly (no Flask).

Controllers are thin; the business rules live in the services.
"""

import importlib

from config import get_settings_module

from src.hr_attendance.hr_attendance.container import build_container
from src.hr_attendance.hr_attendance.core.enums import Role


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)

    print(container.report_service.daily_summary(current_role=Role.ADMIN))
    for row in container.salary_service.monthly_salaries(current_role=Role.ADMIN)["salaries"]:
        print(row["employee"]["full_name"], row["calculated_salary"], row["breakdown"])


if __name__ == "__main__":
    main()
