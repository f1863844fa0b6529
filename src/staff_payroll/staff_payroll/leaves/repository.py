from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveRequest, NewLeaveRequest


class LeaveRepository(Protocol):
    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_staff(self, staff_id: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def list_pending_for_store(self, store_id: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def get_approved_leaves_for_staff_and_month(self, staff_id: int, year: int, month: int) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def create_leave_request(self, request: NewLeaveRequest, *, now: datetime) -> LeaveRequest:
        """Insert unless the staff member holds a non-rejected request for the date.

        Raises DuplicateRequest when the uniqueness check fails at write time.
        """

        raise NotImplementedError

    def update_leave_request(
        self,
        request_id: int,
        *,
        status: LeaveStatus,
        decided_by: int,
        now: datetime,
        expected_status: LeaveStatus = LeaveStatus.PENDING,
    ) -> bool:
        """Conditional status change; False when the current status differs."""

        raise NotImplementedError
