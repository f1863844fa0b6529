"""In-process storage backend.

Plays the role of the device-local key-value store: every collection lives
in one ``MemoryDatabase`` and a single re-entrant lock guards every read
and makes each conditional write (and the salary lock) atomic.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord, NewAttendanceRecord
from ..common.datetime_utils import in_month, month_key
from ..core.enums import LeaveStatus
from ..core.exceptions import AlreadyLocked, AlreadyMarked, DuplicateRequest, StaleStatement
from ..leaves.model import LeaveRequest, NewLeaveRequest
from ..payroll.model import MonthlySalaryRecord, SalaryAdvance
from ..stores.model import Store
from ..users.model import Staff, User


class MemoryDatabase:
    def __init__(self):
        self.lock = threading.RLock()
        self.users: dict[int, User] = {}
        self.stores: dict[int, Store] = {}
        self.attendance: dict[int, AttendanceRecord] = {}
        self.leaves: dict[int, LeaveRequest] = {}
        self.advances: dict[int, SalaryAdvance] = {}
        self.salaries: dict[tuple[int, int, int], MonthlySalaryRecord] = {}
        self._ids = itertools.count(1)

    def next_id(self) -> int:
        return next(self._ids)

    def add_user(self, user: User) -> User:
        with self.lock:
            self.users[user.user_id] = user
        return user

    def add_store(self, store: Store) -> Store:
        with self.lock:
            self.stores[store.store_id] = store
        return store



class MemoryUserRepository:
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get_by_id(self, user_id: int) -> Optional[User]:
        with self._db.lock:
            return self._db.users.get(int(user_id))

    def list_staff_for_store(self, store_id: int) -> Sequence[Staff]:
        with self._db.lock:
            return [u for u in self._db.users.values() if isinstance(u, Staff) and u.store_id == int(store_id)]


class MemoryStoreRepository:
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get_store(self, store_id: int) -> Optional[Store]:
        with self._db.lock:
            return self._db.stores.get(int(store_id))

    def set_attendance_frozen(self, store_id: int, *, frozen: bool) -> bool:
        with self._db.lock:
            store = self._db.stores.get(int(store_id))
            if not store:
                return False
            self._db.stores[store.store_id] = replace(store, attendance_frozen=bool(frozen))
            return True


class MemoryAttendanceRepository:
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with self._db.lock:
            return self._db.attendance.get(int(attendance_id))

    def get_for_staff_and_date(self, staff_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with self._db.lock:
            for r in self._db.attendance.values():
                if r.staff_id == int(staff_id) and r.work_date == work_date:
                    return r
            return None

    def get_attendance_for_staff_and_month(self, staff_id: int, year: int, month: int) -> Sequence[AttendanceRecord]:
        with self._db.lock:
            return [
                r
                for r in self._db.attendance.values()
                if r.staff_id == int(staff_id) and in_month(r.work_date, year, month)
            ]

    def create_attendance_record(self, record: NewAttendanceRecord) -> AttendanceRecord:
        with self._db.lock:
            if self.get_for_staff_and_date(record.staff_id, record.work_date):
                raise AlreadyMarked(f"Attendance already recorded for {record.work_date.isoformat()}")
            created = AttendanceRecord.from_draft(self._db.next_id(), record)
            self._db.attendance[created.attendance_id] = created
            return created

    def update_attendance_record(self, record: AttendanceRecord, *, expected_version: int) -> bool:
        with self._db.lock:
            current = self._db.attendance.get(record.attendance_id)
            if not current or current.version != int(expected_version):
                return False
            self._db.attendance[record.attendance_id] = record
            return True


class MemoryLeaveRepository:
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with self._db.lock:
            return self._db.leaves.get(int(request_id))

    def list_for_staff(self, staff_id: int) -> Sequence[LeaveRequest]:
        with self._db.lock:
            return [lv for lv in self._db.leaves.values() if lv.staff_id == int(staff_id)]

    def list_pending_for_store(self, store_id: int) -> Sequence[LeaveRequest]:
        with self._db.lock:
            return [
                lv
                for lv in self._db.leaves.values()
                if lv.store_id == int(store_id) and lv.status == LeaveStatus.PENDING
            ]

    def get_approved_leaves_for_staff_and_month(self, staff_id: int, year: int, month: int) -> Sequence[LeaveRequest]:
        return [
            lv
            for lv in self.list_for_staff(staff_id)
            if lv.status == LeaveStatus.APPROVED and in_month(lv.leave_date, year, month)
        ]

    def create_leave_request(self, request: NewLeaveRequest, *, now: datetime) -> LeaveRequest:
        with self._db.lock:
            if any(lv.leave_date == request.leave_date and lv.is_active for lv in self.list_for_staff(request.staff_id)):
                raise DuplicateRequest("You already have a leave request for this date")
            created = LeaveRequest(
                request_id=self._db.next_id(),
                staff_id=request.staff_id,
                store_id=request.store_id,
                leave_date=request.leave_date,
                leave_type=request.leave_type,
                reason=request.reason,
                status=request.status,
                created_at=now,
                updated_at=now,
            )
            self._db.leaves[created.request_id] = created
            return created

    def update_leave_request(
        self,
        request_id: int,
        *,
        status: LeaveStatus,
        decided_by: int,
        now: datetime,
        expected_status: LeaveStatus = LeaveStatus.PENDING,
    ) -> bool:
        with self._db.lock:
            current = self._db.leaves.get(int(request_id))
            if not current or current.status != expected_status:
                return False
            self._db.leaves[current.request_id] = replace(
                current, status=status, decided_by=int(decided_by), updated_at=now
            )
            return True


class MemoryPayrollRepository:
    def __init__(self, db: MemoryDatabase):
        self._db = db

    def get_undeducted_advances(self, staff_id: int) -> Sequence[SalaryAdvance]:
        return [a for a in self.list_advances_for_staff(staff_id) if not a.is_deducted]

    def list_advances_for_staff(self, staff_id: int) -> Sequence[SalaryAdvance]:
        with self._db.lock:
            return [a for a in self._db.advances.values() if a.staff_id == int(staff_id)]

    def add_advance(self, *, staff_id: int, amount: float, given_on: date, given_by: int) -> SalaryAdvance:
        with self._db.lock:
            advance = SalaryAdvance(
                advance_id=self._db.next_id(),
                staff_id=int(staff_id),
                amount=amount,
                given_on=given_on,
                given_by=int(given_by),
            )
            self._db.advances[advance.advance_id] = advance
            return advance

    def get_salary_record(self, staff_id: int, year: int, month: int) -> Optional[MonthlySalaryRecord]:
        with self._db.lock:
            return self._db.salaries.get((int(staff_id), int(year), int(month)))

    def list_salary_records_for_staff(self, staff_id: int) -> Sequence[MonthlySalaryRecord]:
        with self._db.lock:
            return [s for (sid, _, _), s in self._db.salaries.items() if sid == int(staff_id)]

    def lock_monthly_salary(self, record: MonthlySalaryRecord) -> MonthlySalaryRecord:
        key = (record.staff_id, record.year, record.month)
        with self._db.lock:
            existing = self._db.salaries.get(key)
            if existing and existing.is_locked:
                raise AlreadyLocked(f"Salary already locked for {month_key(record.year, record.month)}")

            settled = {}
            for advance_id in record.advance_ids:
                advance = self._db.advances.get(advance_id)
                if not advance or advance.staff_id != record.staff_id or advance.is_deducted:
                    raise StaleStatement(
                        f"Advance {advance_id} was settled elsewhere, recalculate "
                        f"{month_key(record.year, record.month)} and lock again"
                    )
                settled[advance_id] = replace(advance, is_deducted=True)
            saved = replace(
                record,
                is_locked=True,
                record_id=existing.record_id if existing else self._db.next_id(),
                advance_ids=tuple(settled),
            )

            # Both writes happen under the lock, after every check passed.
            self._db.salaries[key] = saved
            self._db.advances.update(settled)
            return saved
