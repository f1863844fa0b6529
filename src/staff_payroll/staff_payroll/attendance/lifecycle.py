"""Transitions of the one-record-per-day attendance entry.

NOT_MARKED (no record) -> PRESENT | LATE      self check-in
NOT_MARKED             -> PRESENT | LATE | ABSENT | ON_LEAVE   admin mark
PRESENT | LATE         -> (same status, check-out time set)
ABSENT                 -> any other status    admin correction

Functions here are pure: they validate and return the next value, the
service persists it.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Optional

from ..common.geo import is_within_radius
from ..core.enums import AttendanceStatus, MarkedBy
from ..core.exceptions import AlreadyMarked, InvalidTransition, OutOfRange, StoreFrozen
from ..core.rules import PayrollRules
from ..stores.model import Store
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, GeoPoint, NewAttendanceRecord

ADMIN_MARKABLE = frozenset(
    {
        AttendanceStatus.PRESENT,
        AttendanceStatus.LATE,
        AttendanceStatus.ABSENT,
        AttendanceStatus.ON_LEAVE,
    }
)
CHECKED_IN = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})


def ensure_not_marked(store: Store, existing: Optional[AttendanceRecord]) -> None:
    if store.attendance_frozen:
        raise StoreFrozen(f"Attendance is frozen for store {store.name}")
    if existing is not None:
        raise AlreadyMarked(f"Attendance already recorded for {existing.work_date.isoformat()}")


def ensure_within_geofence(store: Store, location: Optional[GeoPoint], rules: PayrollRules) -> None:
    if not store.has_geofence:
        return
    if location is None:
        raise OutOfRange("Location is required to check in at this store")

    radius = store.radius_meters or rules.default_radius_meters
    if not is_within_radius(location.lat, location.lng, store.latitude, store.longitude, radius):
        raise OutOfRange("You are outside the allowed check-in radius")


def self_check_in(
    existing: Optional[AttendanceRecord],
    *,
    staff_id: int,
    store: Store,
    now: datetime,
    location: Optional[GeoPoint],
    rules: PayrollRules,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> NewAttendanceRecord:
    ensure_not_marked(store, existing)
    ensure_within_geofence(store, location, rules)

    factory = factory or AttendanceStrategyFactory()
    shift_start = store.default_start_time or rules.default_shift_start
    strategy = factory.for_checkin(now=now, shift_start=shift_start, grace_minutes=rules.grace_period_minutes)
    decision = strategy.decide_checkin(now=now)

    return NewAttendanceRecord(
        staff_id=int(staff_id),
        store_id=store.store_id,
        work_date=now.date(),
        status=decision.status,
        check_in_time=now,
        is_late=decision.is_late,
        location=location,
        marked_by=MarkedBy.SELF,
    )


def admin_mark(
    existing: Optional[AttendanceRecord],
    *,
    staff_id: int,
    store: Store,
    status: AttendanceStatus,
    now: datetime,
) -> NewAttendanceRecord:
    if status not in ADMIN_MARKABLE:
        raise InvalidTransition(f"Cannot mark attendance as {status.value}")
    ensure_not_marked(store, existing)

    return NewAttendanceRecord(
        staff_id=int(staff_id),
        store_id=store.store_id,
        work_date=now.date(),
        status=status,
        check_in_time=now if status in CHECKED_IN else None,
        is_late=status == AttendanceStatus.LATE,
        marked_by=MarkedBy.ADMIN,
    )


def check_out(
    record: Optional[AttendanceRecord],
    *,
    now: datetime,
    factory: Optional[AttendanceStrategyFactory] = None,
) -> AttendanceRecord:
    if record is None:
        raise InvalidTransition("You have not checked in today")
    if record.is_checked_out:
        raise InvalidTransition("You have already checked out")
    if record.status not in CHECKED_IN:
        raise InvalidTransition(f"Cannot check out from status {record.status.value}")
    if record.check_in_time and now < record.check_in_time:
        raise InvalidTransition("Check-out cannot be earlier than check-in")

    decision = (factory or AttendanceStrategyFactory()).for_checkout().decide_checkout(now=now, current=record.status)
    return replace(
        record,
        status=decision.status,
        check_out_time=now,
        updated_at=now,
        version=record.version + 1,
    )


def correct_status(record: AttendanceRecord, *, status: AttendanceStatus, now: datetime) -> AttendanceRecord:
    """Admin correction; only an ABSENT day may be turned into something else."""
    if record.status != AttendanceStatus.ABSENT:
        raise InvalidTransition(f"Only absent records can be corrected (record is {record.status.value})")
    if status == AttendanceStatus.ABSENT:
        raise InvalidTransition("Record is already absent")

    return replace(
        record,
        status=status,
        is_late=status == AttendanceStatus.LATE,
        marked_by=MarkedBy.ADMIN,
        updated_at=now,
        version=record.version + 1,
    )
