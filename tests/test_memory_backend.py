import threading
from datetime import date, timedelta

from staff_payroll.attendance.model import NewAttendanceRecord
from staff_payroll.core.enums import AttendanceStatus


def test_reads_are_safe_while_another_thread_writes(container, staff):
    errors = []
    done = threading.Event()

    def write_records():
        try:
            start = date(2026, 1, 1)
            for offset in range(1500):
                container.attendance_repo.create_attendance_record(
                    NewAttendanceRecord(
                        staff_id=staff.user_id,
                        store_id=staff.store_id,
                        work_date=start + timedelta(days=offset),
                        status=AttendanceStatus.PRESENT,
                    )
                )
                container.payroll_repo.add_advance(
                    staff_id=staff.user_id, amount=10, given_on=start, given_by=2
                )
        except Exception as exc:  # surfaced through the assertion below
            errors.append(exc)
        finally:
            done.set()

    writer = threading.Thread(target=write_records)
    writer.start()
    try:
        while not done.is_set():
            container.attendance_repo.get_attendance_for_staff_and_month(staff.user_id, 2026, 1)
            container.attendance_repo.get_for_staff_and_date(staff.user_id, date(2030, 1, 1))
            container.payroll_repo.get_undeducted_advances(staff.user_id)
    except RuntimeError as exc:
        errors.append(exc)
    finally:
        writer.join()

    assert errors == []
    assert len(container.attendance_service.month_records(staff.user_id, 2026, 1)) == 31
    assert len(container.payroll_repo.list_advances_for_staff(staff.user_id)) == 1500
