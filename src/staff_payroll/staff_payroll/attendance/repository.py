from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, NewAttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_staff_and_date(self, staff_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_attendance_for_staff_and_month(self, staff_id: int, year: int, month: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def create_attendance_record(self, record: NewAttendanceRecord) -> AttendanceRecord:
        """Insert only if no record exists for (staff, date).

        Raises AlreadyMarked when another writer got there first.
        """

        raise NotImplementedError

    def update_attendance_record(self, record: AttendanceRecord, *, expected_version: int) -> bool:
        """Replace the stored record if its version still equals ``expected_version``."""

        raise NotImplementedError
