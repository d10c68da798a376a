from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class PresentStrategy(AttendanceStrategy):
    """Punch-in, or a full day at punch-out."""

    def decide_punch_in(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_punch_out(self, *, work_minutes: int, half_day_threshold: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
