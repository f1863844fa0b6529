from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    is_late: bool = False


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide an attendance status."""

    @abstractmethod
    def decide_checkin(self, *, now: datetime) -> StatusDecision:
        raise NotImplementedError

    def decide_checkout(self, *, now: datetime, current: AttendanceStatus) -> StatusDecision:
        # Checking out never changes the status of the day.
        return StatusDecision(status=current, is_late=current == AttendanceStatus.LATE)
