from datetime import time

from src.office_attendance.office_attendance.attendance.factory import AttendanceStrategyFactory
from src.office_attendance.office_attendance.attendance.strategies.late_strategy import LateStrategy
from src.office_attendance.office_attendance.attendance.strategies.present_strategy import PresentStrategy
from src.office_attendance.office_attendance.core.enums import AttendanceStatus


def test_factory_checkin_at_threshold_is_present():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(local_time=time(10, 0, 0), late_threshold=time(10, 0))

    assert isinstance(strategy, PresentStrategy)


def test_factory_checkin_seconds_past_threshold_is_late():
    factory = AttendanceStrategyFactory()
    strategy = factory.for_checkin(local_time=time(10, 0, 1), late_threshold=time(10, 0))

    assert isinstance(strategy, LateStrategy)
    decision = strategy.decide_checkin(local_time=time(10, 0, 1), late_threshold=time(10, 0))
    assert decision.status == AttendanceStatus.LATE
    assert decision.is_late
    assert decision.message == "Marked as late (after 10:00)"


def test_checkout_keeps_checkin_status():
    strategy = AttendanceStrategyFactory().for_checkout()

    assert strategy.decide_checkout(current=AttendanceStatus.LATE).status == AttendanceStatus.LATE
    assert strategy.decide_checkout(current=AttendanceStatus.PRESENT).status == AttendanceStatus.PRESENT
