from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: decides the stored status at punch-in and at punch-out."""

    @abstractmethod
    def decide_punch_in(self, *, now: datetime) -> StatusDecision:
        raise NotImplementedError

    @abstractmethod
    def decide_punch_out(self, *, work_minutes: int, half_day_threshold: int) -> StatusDecision:
        raise NotImplementedError
