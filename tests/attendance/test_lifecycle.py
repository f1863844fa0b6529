from dataclasses import replace
from datetime import date, datetime

import pytest

from staff_payroll.attendance import lifecycle
from staff_payroll.attendance.model import AttendanceRecord, GeoPoint
from staff_payroll.core.enums import AttendanceStatus, MarkedBy
from staff_payroll.core.exceptions import AlreadyMarked, InvalidTransition, OutOfRange, StoreFrozen
from staff_payroll.core.rules import PayrollRules

RULES = PayrollRules()


def _checked_in(status=AttendanceStatus.PRESENT, at=datetime(2026, 1, 15, 9, 5)) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=1,
        staff_id=10,
        store_id=1,
        work_date=at.date(),
        status=status,
        check_in_time=at,
        is_late=status == AttendanceStatus.LATE,
    )


def test_self_check_in_inside_geofence(store, store_location, fixed_now):
    draft = lifecycle.self_check_in(
        None, staff_id=10, store=store, now=fixed_now, location=store_location, rules=RULES
    )

    assert draft.status == AttendanceStatus.PRESENT
    assert draft.work_date == date(2026, 1, 15)
    assert draft.check_in_time == fixed_now
    assert draft.marked_by == MarkedBy.SELF
    assert not draft.is_late


def test_self_check_in_uses_store_shift_start(store, store_location):
    late_store = replace(store, default_start_time="08:00")

    draft = lifecycle.self_check_in(
        None, staff_id=10, store=late_store, now=datetime(2026, 1, 15, 8, 30), location=store_location, rules=RULES
    )

    assert draft.status == AttendanceStatus.LATE
    assert draft.is_late


def test_self_check_in_outside_geofence(store, far_away, fixed_now):
    with pytest.raises(OutOfRange):
        lifecycle.self_check_in(None, staff_id=10, store=store, now=fixed_now, location=far_away, rules=RULES)


def test_location_required_when_store_has_geofence(store, fixed_now):
    with pytest.raises(OutOfRange):
        lifecycle.self_check_in(None, staff_id=10, store=store, now=fixed_now, location=None, rules=RULES)


def test_default_radius_used_when_store_has_none(store, fixed_now):
    nearby = GeoPoint(lat=store.latitude + 0.0009, lng=store.longitude)  # ~100 m north
    no_radius = replace(store, radius_meters=None)

    with pytest.raises(OutOfRange):
        lifecycle.self_check_in(None, staff_id=10, store=no_radius, now=fixed_now, location=nearby, rules=RULES)

    wide = RULES.with_overrides(default_radius_meters=500)
    draft = lifecycle.self_check_in(None, staff_id=10, store=no_radius, now=fixed_now, location=nearby, rules=wide)
    assert draft.status == AttendanceStatus.PRESENT


def test_store_without_coordinates_skips_geofence(open_store, far_away, fixed_now):
    draft = lifecycle.self_check_in(None, staff_id=11, store=open_store, now=fixed_now, location=far_away, rules=RULES)
    assert draft.status == AttendanceStatus.PRESENT


def test_frozen_store_rejects_before_anything_else(store, far_away, fixed_now):
    frozen = replace(store, attendance_frozen=True)

    with pytest.raises(StoreFrozen):
        lifecycle.self_check_in(_checked_in(), staff_id=10, store=frozen, now=fixed_now, location=far_away, rules=RULES)
    with pytest.raises(StoreFrozen):
        lifecycle.admin_mark(None, staff_id=10, store=frozen, status=AttendanceStatus.ABSENT, now=fixed_now)


def test_second_mark_same_day_rejected(store, store_location, fixed_now):
    with pytest.raises(AlreadyMarked):
        lifecycle.self_check_in(
            _checked_in(), staff_id=10, store=store, now=fixed_now, location=store_location, rules=RULES
        )
    with pytest.raises(AlreadyMarked):
        lifecycle.admin_mark(_checked_in(), staff_id=10, store=store, status=AttendanceStatus.ABSENT, now=fixed_now)


def test_admin_mark_absent_has_no_check_in_time(store, fixed_now):
    draft = lifecycle.admin_mark(None, staff_id=10, store=store, status=AttendanceStatus.ABSENT, now=fixed_now)

    assert draft.status == AttendanceStatus.ABSENT
    assert draft.check_in_time is None
    assert draft.marked_by == MarkedBy.ADMIN


def test_admin_cannot_mark_holiday(store, fixed_now):
    with pytest.raises(InvalidTransition):
        lifecycle.admin_mark(None, staff_id=10, store=store, status=AttendanceStatus.HOLIDAY, now=fixed_now)


def test_check_out_keeps_status_and_bumps_version():
    record = _checked_in(AttendanceStatus.LATE)
    out = lifecycle.check_out(record, now=datetime(2026, 1, 15, 18, 0))

    assert out.status == AttendanceStatus.LATE
    assert out.check_out_time == datetime(2026, 1, 15, 18, 0)
    assert out.version == record.version + 1


def test_check_out_rejections():
    with pytest.raises(InvalidTransition):
        lifecycle.check_out(None, now=datetime(2026, 1, 15, 18, 0))

    done = lifecycle.check_out(_checked_in(), now=datetime(2026, 1, 15, 18, 0))
    with pytest.raises(InvalidTransition):
        lifecycle.check_out(done, now=datetime(2026, 1, 15, 18, 5))

    with pytest.raises(InvalidTransition):
        lifecycle.check_out(_checked_in(AttendanceStatus.ABSENT), now=datetime(2026, 1, 15, 18, 0))

    with pytest.raises(InvalidTransition):
        lifecycle.check_out(_checked_in(), now=datetime(2026, 1, 15, 9, 0))


def test_only_absent_may_be_corrected(fixed_now):
    absent = replace(_checked_in(AttendanceStatus.ABSENT), check_in_time=None)

    corrected = lifecycle.correct_status(absent, status=AttendanceStatus.LATE, now=fixed_now)
    assert corrected.status == AttendanceStatus.LATE
    assert corrected.is_late
    assert corrected.version == 2

    with pytest.raises(InvalidTransition):
        lifecycle.correct_status(_checked_in(), status=AttendanceStatus.ABSENT, now=fixed_now)
    with pytest.raises(InvalidTransition):
        lifecycle.correct_status(absent, status=AttendanceStatus.ABSENT, now=fixed_now)
