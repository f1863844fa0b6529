from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus, MarkedBy


@dataclass(frozen=True)
class GeoPoint:
    lat: float
    lng: float


@dataclass(frozen=True)
class NewAttendanceRecord:
    """Draft produced by the lifecycle before the repository assigns an id."""

    staff_id: int
    store_id: int
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    is_late: bool = False
    location: Optional[GeoPoint] = None
    marked_by: MarkedBy = MarkedBy.SELF


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance record per staff member per day."""

    attendance_id: int
    staff_id: int
    store_id: int
    work_date: date
    status: AttendanceStatus
    check_in_time: Optional[datetime] = None
    check_out_time: Optional[datetime] = None
    is_late: bool = False
    location: Optional[GeoPoint] = None
    marked_by: MarkedBy = MarkedBy.SELF
    updated_at: Optional[datetime] = None
    version: int = 1

    @property
    def is_checked_out(self) -> bool:
        return self.check_out_time is not None

    @classmethod
    def from_draft(cls, attendance_id: int, draft: NewAttendanceRecord) -> "AttendanceRecord":
        return cls(
            attendance_id=int(attendance_id),
            staff_id=draft.staff_id,
            store_id=draft.store_id,
            work_date=draft.work_date,
            status=draft.status,
            check_in_time=draft.check_in_time,
            is_late=draft.is_late,
            location=draft.location,
            marked_by=draft.marked_by,
        )
