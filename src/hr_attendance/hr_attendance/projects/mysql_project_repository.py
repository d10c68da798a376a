from __future__ import annotations

from collections import defaultdict
from datetime import date
from typing import Any, Dict, List, Optional, Sequence

from ..core.enums import ProjectStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Project
from .repository import ProjectRepository


class MySQLProjectRepository(ProjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _with_employees(self, cur, rows: List[Dict[str, Any]]) -> List[Project]:
        if not rows:
            return []
        ids = [int(r["project_id"]) for r in rows]
        cur.execute(
            f"""
            SELECT project_id, user_id
            FROM project_employees
            WHERE project_id IN ({in_clause(ids)})
            ORDER BY user_id
            """,
            tuple(ids),
        )
        members: Dict[int, List[int]] = defaultdict(list)
        for m in fetchall(cur):
            members[int(m["project_id"])].append(int(m["user_id"]))

        return [
            Project(
                project_id=int(r["project_id"]),
                name=r["name"],
                description=r["description"],
                status=ProjectStatus(r["status"]),
                start_date=r["start_date"],
                due_date=r.get("due_date"),
                employee_ids=tuple(members.get(int(r["project_id"]), [])),
            )
            for r in rows
        ]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO projects(name, description, status, start_date, due_date)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (name, description, status.value, start_date, due_date),
            )
            project_id = int(cur.lastrowid)
            if employee_ids:
                cur.executemany(
                    "INSERT INTO project_employees(project_id, user_id) VALUES(%s,%s)",
                    [(project_id, int(u)) for u in employee_ids],
                )
            return project_id

    def _get_one(self, column: str, value) -> Optional[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT project_id, name, description, status, start_date, due_date FROM projects WHERE {column}=%s",
                (value,),
            )
            row = fetchone(cur)
            if not row:
                return None
            return self._with_employees(cur, [row])[0]

    def get_by_id(self, project_id: int) -> Optional[Project]:
        return self._get_one("project_id", int(project_id))

    def get_by_name(self, name: str) -> Optional[Project]:
        return self._get_one("name", name)

    def list_projects(self) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT project_id, name, description, status, start_date, due_date
                FROM projects
                ORDER BY start_date DESC, project_id DESC
                """
            )
            return self._with_employees(cur, fetchall(cur))

    def list_for_employee(self, user_id: int) -> Sequence[Project]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT p.project_id, p.name, p.description, p.status, p.start_date, p.due_date
                FROM projects p
                JOIN project_employees pe ON pe.project_id = p.project_id
                WHERE pe.user_id=%s
                ORDER BY p.start_date DESC, p.project_id DESC
                """,
                (int(user_id),),
            )
            return self._with_employees(cur, fetchall(cur))

    def replace_employees(self, *, project_id: int, employee_ids: Sequence[int]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT project_id FROM projects WHERE project_id=%s", (int(project_id),))
            if not fetchone(cur):
                return False
            cur.execute("DELETE FROM project_employees WHERE project_id=%s", (int(project_id),))
            if employee_ids:
                cur.executemany(
                    "INSERT INTO project_employees(project_id, user_id) VALUES(%s,%s)",
                    [(int(project_id), int(u)) for u in employee_ids],
                )
            return True

    def remove_employee(self, user_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM project_employees WHERE user_id=%s", (int(user_id),))
            return int(cur.rowcount)
