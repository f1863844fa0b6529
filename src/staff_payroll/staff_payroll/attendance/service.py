from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, InvalidTransition, NotFound
from ..core.rules import PayrollRules
from ..payroll.late_penalty import LatePenaltyLadder, LateRule
from ..stores.model import Store
from ..stores.repository import StoreRepository
from ..users.access import load_staff, require_store_manager
from ..users.model import User
from ..users.repository import UserRepository
from . import lifecycle
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, GeoPoint
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckInResult:
    record: AttendanceRecord
    late_ordinal: int = 0
    late_rule: Optional[LateRule] = None


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        users: UserRepository,
        stores: StoreRepository,
        *,
        rules: Optional[PayrollRules] = None,
        strategy_factory: Optional[AttendanceStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._users = users
        self._stores = stores
        self._rules = rules or PayrollRules()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    def _get_store(self, store_id: int) -> Store:
        store = self._stores.get_store(int(store_id))
        if not store:
            raise NotFound(f"Store {store_id} does not exist")
        return store

    def check_in(
        self,
        staff_id: int,
        *,
        location: Optional[GeoPoint] = None,
        now: Optional[datetime] = None,
    ) -> CheckInResult:
        now = now or now_local()
        staff = load_staff(self._users, staff_id)
        store = self._get_store(staff.store_id)
        rules = store.effective_rules(self._rules)

        existing = self._attendance.get_for_staff_and_date(staff.user_id, now.date())
        try:
            draft = lifecycle.self_check_in(
                existing,
                staff_id=staff.user_id,
                store=store,
                now=now,
                location=location,
                rules=rules,
                factory=self._factory,
            )
        except DomainError as exc:
            logger.warning("Check-in rejected for staff %s: %s", staff.user_id, exc)
            raise

        record = self._attendance.create_attendance_record(draft)
        logger.info("Staff %s checked in (%s) at store %s", staff.user_id, record.status.value, store.store_id)

        if record.status != AttendanceStatus.LATE:
            return CheckInResult(record=record)

        late_ordinal = self._late_count(staff.user_id, now.year, now.month)
        rule = LatePenaltyLadder.from_rules(rules).consequence(late_ordinal)
        return CheckInResult(record=record, late_ordinal=late_ordinal, late_rule=rule)

    def check_out(self, staff_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        record = self._attendance.get_for_staff_and_date(int(staff_id), now.date())
        updated = lifecycle.check_out(record, now=now, factory=self._factory)
        self._save(updated, expected_version=record.version)
        logger.info("Staff %s checked out", staff_id)
        return updated

    def admin_mark(
        self,
        actor: User,
        staff_id: int,
        status: AttendanceStatus,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        now = now or now_local()
        staff = load_staff(self._users, staff_id)
        require_store_manager(actor, staff.store_id)
        store = self._get_store(staff.store_id)

        existing = self._attendance.get_for_staff_and_date(staff.user_id, now.date())
        draft = lifecycle.admin_mark(existing, staff_id=staff.user_id, store=store, status=AttendanceStatus(status), now=now)
        record = self._attendance.create_attendance_record(draft)
        logger.info("Staff %s marked %s by user %s", staff.user_id, record.status.value, actor.user_id)
        return record

    def correct_status(
        self,
        actor: User,
        attendance_id: int,
        status: AttendanceStatus,
        *,
        now: Optional[datetime] = None,
    ) -> AttendanceRecord:
        record = self._attendance.get_by_id(int(attendance_id))
        if not record:
            raise NotFound(f"Attendance record {attendance_id} does not exist")
        require_store_manager(actor, record.store_id)

        updated = lifecycle.correct_status(record, status=AttendanceStatus(status), now=now or now_local())
        self._save(updated, expected_version=record.version)
        logger.info("Attendance %s corrected to %s by user %s", record.attendance_id, updated.status.value, actor.user_id)
        return updated

    def get_today_record(self, staff_id: int, today: date) -> Optional[AttendanceRecord]:
        return self._attendance.get_for_staff_and_date(int(staff_id), today)

    def month_records(self, staff_id: int, year: int, month: int) -> Sequence[AttendanceRecord]:
        items = list(self._attendance.get_attendance_for_staff_and_month(int(staff_id), int(year), int(month)))
        items.sort(key=lambda r: r.work_date)
        return items

    def _late_count(self, staff_id: int, year: int, month: int) -> int:
        return sum(1 for r in self.month_records(staff_id, year, month) if r.status == AttendanceStatus.LATE)

    def _save(self, record: AttendanceRecord, *, expected_version: int) -> None:
        if not self._attendance.update_attendance_record(record, expected_version=expected_version):
            raise InvalidTransition("Attendance record was changed by someone else, reload and retry")
