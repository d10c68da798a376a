from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional, Tuple

from ..core.enums import ProjectStatus


@dataclass(frozen=True)
class Project:
    project_id: int
    name: str
    description: str
    status: ProjectStatus
    start_date: date
    due_date: Optional[date] = None
    employee_ids: Tuple[int, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {
            "project_id": self.project_id,
            "name": self.name,
            "description": self.description,
            "status": self.status.value,
            "start_date": self.start_date.isoformat(),
            "due_date": self.due_date.isoformat() if self.due_date else None,
            "employee_ids": list(self.employee_ids),
        }
