from datetime import datetime

from src.hr_attendance.hr_attendance.attendance.factory import AttendanceStrategyFactory
from src.hr_attendance.hr_attendance.attendance.strategies.half_day_strategy import HalfDayStrategy
from src.hr_attendance.hr_attendance.attendance.strategies.present_strategy import PresentStrategy
from src.hr_attendance.hr_attendance.core.enums import AttendanceStatus


def test_factory_punch_in_is_present():
    strategy = AttendanceStrategyFactory().for_punch_in()

    assert isinstance(strategy, PresentStrategy)
    assert strategy.decide_punch_in(now=datetime(2026, 3, 2, 9, 0)).status == AttendanceStatus.PRESENT


def test_factory_picks_half_day_below_threshold():
    strategy = AttendanceStrategyFactory().for_punch_out(work_minutes=239, half_day_threshold=240)

    assert isinstance(strategy, HalfDayStrategy)
    decision = strategy.decide_punch_out(work_minutes=239, half_day_threshold=240)
    assert decision.status == AttendanceStatus.HALF_DAY
    assert decision.note


def test_factory_picks_present_at_threshold_and_for_zero():
    factory = AttendanceStrategyFactory()

    assert isinstance(factory.for_punch_out(work_minutes=240, half_day_threshold=240), PresentStrategy)
    assert isinstance(factory.for_punch_out(work_minutes=0, half_day_threshold=240), PresentStrategy)
