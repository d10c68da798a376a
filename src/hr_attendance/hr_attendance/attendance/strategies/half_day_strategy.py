from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Closed day with some work, but less than the half-day threshold."""

    def decide_punch_in(self, *, now: datetime) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)

    def decide_punch_out(self, *, work_minutes: int, half_day_threshold: int) -> StatusDecision:
        hours, minutes = divmod(max(work_minutes, 0), 60)
        return StatusDecision(
            status=AttendanceStatus.HALF_DAY,
            note=f"Worked {hours}h{minutes:02d}m, below {half_day_threshold} minutes",
        )
