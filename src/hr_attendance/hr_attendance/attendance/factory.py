from __future__ import annotations

from dataclasses import dataclass

from .strategies.base import AttendanceStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_punch_in(self) -> AttendanceStrategy:
        return PresentStrategy()

    def for_punch_out(self, *, work_minutes: int, half_day_threshold: int) -> AttendanceStrategy:
        if 0 < work_minutes < half_day_threshold:
            return HalfDayStrategy()
        return PresentStrategy()
