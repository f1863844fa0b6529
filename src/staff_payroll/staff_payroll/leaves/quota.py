from __future__ import annotations

from datetime import date
from typing import Iterable

from ..common.datetime_utils import in_month, is_future_date
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import DuplicateRequest, InvalidDate, QuotaExceeded
from .model import LeaveRequest, NewLeaveRequest


def approved_in_month(staff_id: int, leaves: Iterable[LeaveRequest], year: int, month: int) -> int:
    return sum(
        1
        for lv in leaves
        if lv.staff_id == int(staff_id) and lv.status == LeaveStatus.APPROVED and in_month(lv.leave_date, year, month)
    )


def check_leave_application(
    *,
    staff_id: int,
    store_id: int,
    leave_date: date,
    existing_leaves: Iterable[LeaveRequest],
    monthly_quota: int,
    today: date,
    leave_type: LeaveType = LeaveType.PAID,
    reason: str = "",
) -> NewLeaveRequest:
    """Validate a leave application against date, quota and duplicate rules.

    Only approved leaves count towards the quota; pending requests do not.
    """
    existing = [lv for lv in existing_leaves if lv.staff_id == int(staff_id)]

    if not is_future_date(leave_date, today):
        raise InvalidDate("Cannot apply leave for past or current date")

    if approved_in_month(staff_id, existing, leave_date.year, leave_date.month) >= int(monthly_quota):
        raise QuotaExceeded(f"You have already used {monthly_quota} leaves this month")

    if any(lv.leave_date == leave_date and lv.is_active for lv in existing):
        raise DuplicateRequest("You already have a leave request for this date")

    return NewLeaveRequest(
        staff_id=int(staff_id),
        store_id=int(store_id),
        leave_date=leave_date,
        leave_type=leave_type,
        reason=reason,
    )
