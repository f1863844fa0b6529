from datetime import datetime

from staff_payroll.attendance.factory import AttendanceStrategyFactory
from staff_payroll.attendance.strategies.late_strategy import LateStrategy
from staff_payroll.attendance.strategies.present_strategy import PresentStrategy
from staff_payroll.core.enums import AttendanceStatus


def test_factory_checkin_present_within_grace():
    now = datetime(2026, 1, 15, 9, 15, 59)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, shift_start="09:00", grace_minutes=15)

    assert isinstance(strategy, PresentStrategy)
    assert strategy.decide_checkin(now=now).status == AttendanceStatus.PRESENT


def test_factory_checkin_late_after_grace():
    now = datetime(2026, 1, 15, 9, 16, 0)

    strategy = AttendanceStrategyFactory().for_checkin(now=now, shift_start="09:00", grace_minutes=15)

    assert isinstance(strategy, LateStrategy)
    decision = strategy.decide_checkin(now=now)
    assert decision.status == AttendanceStatus.LATE
    assert decision.is_late


def test_checkout_keeps_status():
    strategy = AttendanceStrategyFactory().for_checkout()
    decision = strategy.decide_checkout(now=datetime(2026, 1, 15, 18, 0), current=AttendanceStatus.LATE)

    assert decision.status == AttendanceStatus.LATE
    assert decision.is_late
