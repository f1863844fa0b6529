from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import in_month
from ..core.enums import AttendanceStatus, LeaveStatus
from ..leaves.model import LeaveRequest


@dataclass(frozen=True)
class MonthlyTally:
    working_days: int
    present_days: int
    late_count: int
    recorded_absent_days: int
    leave_days: int

    @property
    def unaccounted_days(self) -> int:
        accounted = self.present_days + self.leave_days + self.recorded_absent_days
        return max(0, self.working_days - accounted)

    @property
    def absent_days(self) -> int:
        """Recorded absences plus working days nothing explains."""
        return self.recorded_absent_days + self.unaccounted_days


def tally_month(
    records: Iterable[AttendanceRecord],
    approved_leaves: Iterable[LeaveRequest],
    *,
    year: int,
    month: int,
    working_days: int,
) -> MonthlyTally:
    present = late = absent = 0
    for r in records:
        if not in_month(r.work_date, year, month):
            continue
        if r.status == AttendanceStatus.PRESENT:
            present += 1
        elif r.status == AttendanceStatus.LATE:
            present += 1
            late += 1
        elif r.status == AttendanceStatus.ABSENT:
            absent += 1

    leave_days = sum(
        1 for lv in approved_leaves if lv.status == LeaveStatus.APPROVED and in_month(lv.leave_date, year, month)
    )

    return MonthlyTally(
        working_days=int(working_days),
        present_days=present,
        late_count=late,
        recorded_absent_days=absent,
        leave_days=leave_days,
    )
