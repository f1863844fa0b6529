from dataclasses import replace
from datetime import date, datetime

import pytest

from staff_payroll.attendance.model import NewAttendanceRecord
from staff_payroll.core.enums import AttendanceStatus, LeaveStatus, LeaveType
from staff_payroll.core.exceptions import (
    AlreadyLocked,
    AuthorizationError,
    NonComputable,
    NotFound,
    StaleStatement,
    ValidationError,
)
from staff_payroll.core.rules import PayrollRules
from staff_payroll.leaves.model import NewLeaveRequest
from staff_payroll.payroll.model import MonthlySalaryRecord
from staff_payroll.stores.model import Holiday

LOCKED_AT = datetime(2026, 2, 1, 10, 0)
LATE_DAYS = {5, 6, 7}


def _record_january(container, staff_id: int, days):
    for day in days:
        status = AttendanceStatus.LATE if day in LATE_DAYS else AttendanceStatus.PRESENT
        container.attendance_repo.create_attendance_record(
            NewAttendanceRecord(
                staff_id=staff_id,
                store_id=1,
                work_date=date(2026, 1, day),
                status=status,
                is_late=status == AttendanceStatus.LATE,
            )
        )


@pytest.fixture
def january(container, staff):
    # 28 of 30 working days recorded (26th is a holiday, 30th and 31st missing).
    _record_january(container, staff.user_id, [d for d in range(1, 30) if d != 26])
    return container


def test_calculate_january(january, staff):
    statement = january.payroll_service.calculate_staff_salary(staff.user_id, 2026, 1)
    b = statement.breakdown

    assert statement.staff_name == "Ravi"
    assert b.working_days == 30
    assert b.present_days == 28
    assert b.absent_days == 2
    assert b.late_count == 3
    assert b.daily_salary == 500
    assert b.absent_deduction == 1000
    assert b.late_penalty == 200
    assert b.bonus == 500
    assert b.final_amount == 14300


def test_approved_leave_reduces_absences_and_cancels_bonus(january, staff):
    leave = january.leaves_repo.create_leave_request(
        NewLeaveRequest(staff_id=staff.user_id, store_id=1, leave_date=date(2026, 1, 30), leave_type=LeaveType.PAID, reason=""),
        now=datetime(2026, 1, 20, 9, 0),
    )
    january.leaves_repo.update_leave_request(leave.request_id, status=LeaveStatus.APPROVED, decided_by=2, now=datetime(2026, 1, 21))

    b = january.payroll_service.calculate_staff_salary(staff.user_id, 2026, 1).breakdown

    assert b.leaves_used == 1
    assert b.absent_days == 1
    assert b.bonus == 0
    assert b.final_amount == 15000 - 500 - 200


def test_store_rules_override_tenant_defaults(january, db, store, staff):
    db.add_store(replace(store, rules=PayrollRules(perfect_attendance_bonus=1000, late_fine_amount=100)))

    b = january.payroll_service.calculate_staff_salary(staff.user_id, 2026, 1).breakdown

    assert b.bonus == 1000
    assert b.late_penalty == 100


def test_lock_month_settles_included_advances(january, admin, staff):
    svc = january.payroll_service
    advance = svc.add_advance(admin, staff.user_id, 1000, given_on=date(2026, 1, 10))

    record = svc.lock_month(admin, staff.user_id, 2026, 1, now=LOCKED_AT)

    assert record.is_locked
    assert record.final_amount == 13300
    assert record.advance_deduction == 1000
    assert record.advance_ids == (advance.advance_id,)
    assert january.payroll_repo.get_undeducted_advances(staff.user_id) == []


def test_lock_is_write_once(january, admin, super_admin, staff):
    svc = january.payroll_service
    first = svc.lock_month(admin, staff.user_id, 2026, 1, now=LOCKED_AT)

    _record_january(january, staff.user_id, [30])
    with pytest.raises(AlreadyLocked):
        svc.lock_month(super_admin, staff.user_id, 2026, 1, now=datetime(2026, 2, 2, 10, 0))

    assert svc.get_locked_record(staff.user_id, 2026, 1) == first
    assert first.calculated_at == LOCKED_AT


def test_advance_issued_after_calculation_stays_pending(january, admin, staff):
    svc = january.payroll_service
    included = svc.add_advance(admin, staff.user_id, 1000, given_on=date(2026, 1, 10))
    statement = svc.calculate_staff_salary(staff.user_id, 2026, 1)
    late = svc.add_advance(admin, staff.user_id, 500, given_on=date(2026, 1, 31))

    january.payroll_repo.lock_monthly_salary(MonthlySalaryRecord.locked_from(statement, calculated_at=LOCKED_AT))

    pending = january.payroll_repo.get_undeducted_advances(staff.user_id)
    assert [a.advance_id for a in pending] == [late.advance_id]
    assert included.advance_id not in {a.advance_id for a in pending}


def test_month_without_working_days_cannot_be_locked(container, db, store, admin, staff):
    february = tuple(Holiday(date(2026, 2, d), "Closed") for d in range(1, 29))
    db.add_store(replace(store, holidays=february))

    with pytest.raises(NonComputable):
        container.payroll_service.lock_month(admin, staff.user_id, 2026, 2, now=LOCKED_AT)

    assert container.payroll_service.get_locked_record(staff.user_id, 2026, 2) is None


def test_only_managers_of_the_store_may_lock(january, staff, other_admin):
    with pytest.raises(AuthorizationError):
        january.payroll_service.lock_month(staff, staff.user_id, 2026, 1)
    with pytest.raises(AuthorizationError):
        january.payroll_service.lock_month(other_admin, staff.user_id, 2026, 1)


def test_salary_history_newest_first(january, super_admin, staff):
    svc = january.payroll_service
    svc.lock_month(super_admin, staff.user_id, 2026, 1, now=LOCKED_AT)
    svc.lock_month(super_admin, staff.user_id, 2025, 12, now=LOCKED_AT)
    svc.lock_month(super_admin, staff.user_id, 2026, 2, now=datetime(2026, 3, 1, 10, 0))

    history = svc.salary_history(staff.user_id)

    assert [(r.year, r.month) for r in history] == [(2026, 2), (2026, 1), (2025, 12)]


def test_advance_amount_must_be_positive(container, admin, staff):
    with pytest.raises(ValidationError):
        container.payroll_service.add_advance(admin, staff.user_id, 0)
    with pytest.raises(ValidationError):
        container.payroll_service.add_advance(admin, staff.user_id, "abc")


def test_unknown_staff(container, admin):
    with pytest.raises(NotFound):
        container.payroll_service.calculate_staff_salary(999, 2026, 1)
    with pytest.raises(NotFound):
        container.payroll_service.calculate_staff_salary(admin.user_id, 2026, 1)


def test_advance_settled_by_another_month_blocks_stale_lock(january, admin, staff):
    svc = january.payroll_service
    advance = svc.add_advance(admin, staff.user_id, 2000, given_on=date(2026, 1, 10))
    february = svc.calculate_staff_salary(staff.user_id, 2026, 2)
    assert february.advance_ids == (advance.advance_id,)

    january_record = svc.lock_month(admin, staff.user_id, 2026, 1, now=LOCKED_AT)
    assert january_record.advance_ids == (advance.advance_id,)

    with pytest.raises(StaleStatement):
        january.payroll_repo.lock_monthly_salary(
            MonthlySalaryRecord.locked_from(february, calculated_at=datetime(2026, 3, 1, 10, 0))
        )
    assert svc.get_locked_record(staff.user_id, 2026, 2) is None

    relocked = svc.lock_month(admin, staff.user_id, 2026, 2, now=datetime(2026, 3, 1, 10, 0))
    assert relocked.advance_deduction == 0
    assert relocked.advance_ids == ()
