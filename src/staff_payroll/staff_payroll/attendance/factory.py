from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..common.datetime_utils import is_late
from .strategies.base import AttendanceStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules."""

    def for_checkin(self, *, now: datetime, shift_start: str, grace_minutes: int) -> AttendanceStrategy:
        if is_late(now, shift_start, grace_minutes):
            return LateStrategy()
        return PresentStrategy()

    def for_checkout(self) -> AttendanceStrategy:
        return PresentStrategy()
