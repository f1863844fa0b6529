from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class NewLeaveRequest:
    """Validated application, always pending until an admin decides."""

    staff_id: int
    store_id: int
    leave_date: date
    leave_type: LeaveType
    reason: str
    status: LeaveStatus = LeaveStatus.PENDING


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    staff_id: int
    store_id: int
    leave_date: date
    leave_type: LeaveType
    reason: str
    status: LeaveStatus
    created_at: datetime
    updated_at: datetime
    decided_by: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.status != LeaveStatus.REJECTED
