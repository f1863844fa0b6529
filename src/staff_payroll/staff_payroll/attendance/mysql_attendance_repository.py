from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus, MarkedBy
from ..core.exceptions import AlreadyMarked
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import AttendanceRecord, GeoPoint, NewAttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, staff_id, store_id, work_date, status, check_in_time, check_out_time,
    is_late, latitude, longitude, marked_by, updated_at, version
"""


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    location = None
    if r.get("latitude") is not None and r.get("longitude") is not None:
        location = GeoPoint(lat=float(r["latitude"]), lng=float(r["longitude"]))
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        staff_id=int(r["staff_id"]),
        store_id=int(r["store_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        is_late=bool(r["is_late"]),
        location=location,
        marked_by=MarkedBy(r["marked_by"]),
        updated_at=r.get("updated_at"),
        version=int(r["version"]),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s", (int(attendance_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_staff_and_date(self, staff_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE staff_id=%s AND work_date=%s",
                (int(staff_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_attendance_for_staff_and_month(self, staff_id: int, year: int, month: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE staff_id=%s AND YEAR(work_date)=%s AND MONTH(work_date)=%s
                ORDER BY work_date
                """,
                (int(staff_id), int(year), int(month)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create_attendance_record(self, record: NewAttendanceRecord) -> AttendanceRecord:
        lat = record.location.lat if record.location else None
        lng = record.location.lng if record.location else None
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        staff_id, store_id, work_date, status, check_in_time, is_late, latitude, longitude, marked_by
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.staff_id,
                        record.store_id,
                        record.work_date,
                        record.status.value,
                        record.check_in_time,
                        1 if record.is_late else 0,
                        lat,
                        lng,
                        record.marked_by.value,
                    ),
                )
                attendance_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise AlreadyMarked(f"Attendance already recorded for {record.work_date.isoformat()}") from exc
            raise
        return AttendanceRecord.from_draft(attendance_id, record)

    def update_attendance_record(self, record: AttendanceRecord, *, expected_version: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET status=%s, check_in_time=%s, check_out_time=%s, is_late=%s,
                    marked_by=%s, updated_at=%s, version=%s
                WHERE attendance_id=%s AND version=%s
                """,
                (
                    record.status.value,
                    record.check_in_time,
                    record.check_out_time,
                    1 if record.is_late else 0,
                    record.marked_by.value,
                    record.updated_at,
                    record.version,
                    record.attendance_id,
                    int(expected_version),
                ),
            )
            return cur.rowcount > 0
