from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import DuplicateRequest
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import LeaveRequest, NewLeaveRequest
from .repository import LeaveRepository

_COLUMNS = "request_id, staff_id, store_id, leave_date, leave_type, reason, status, decided_by, created_at, updated_at"


def _to_request(r: Dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        request_id=int(r["request_id"]),
        staff_id=int(r["staff_id"]),
        store_id=int(r["store_id"]),
        leave_date=r["leave_date"],
        leave_type=LeaveType(r["leave_type"]),
        reason=r.get("reason") or "",
        status=LeaveStatus(r["status"]),
        created_at=r["created_at"],
        updated_at=r["updated_at"],
        decided_by=int(r["decided_by"]) if r.get("decided_by") is not None else None,
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE request_id=%s", (int(request_id),))
            r = fetchone(cur)
            return _to_request(r) if r else None

    def list_for_staff(self, staff_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE staff_id=%s ORDER BY leave_date DESC",
                (int(staff_id),),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def list_pending_for_store(self, store_id: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE store_id=%s AND status='pending'
                ORDER BY created_at
                """,
                (int(store_id),),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def get_approved_leaves_for_staff_and_month(self, staff_id: int, year: int, month: int) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE staff_id=%s AND status='approved' AND YEAR(leave_date)=%s AND MONTH(leave_date)=%s
                ORDER BY leave_date
                """,
                (int(staff_id), int(year), int(month)),
            )
            return [_to_request(r) for r in fetchall(cur)]

    def create_leave_request(self, request: NewLeaveRequest, *, now: datetime) -> LeaveRequest:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # uq_leave_active rejects a second non-rejected request for the date.
                cur.execute(
                    """
                    INSERT INTO leave_requests(
                        staff_id, store_id, leave_date, leave_type, reason, status, created_at, updated_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        request.staff_id,
                        request.store_id,
                        request.leave_date,
                        request.leave_type.value,
                        request.reason,
                        request.status.value,
                        now,
                        now,
                    ),
                )
                request_id = int(cur.lastrowid)
        except mysql.connector.IntegrityError as exc:
            if is_duplicate_key(exc):
                raise DuplicateRequest("You already have a leave request for this date") from exc
            raise

        return LeaveRequest(
            request_id=request_id,
            staff_id=request.staff_id,
            store_id=request.store_id,
            leave_date=request.leave_date,
            leave_type=request.leave_type,
            reason=request.reason,
            status=request.status,
            created_at=now,
            updated_at=now,
        )

    def update_leave_request(
        self,
        request_id: int,
        *,
        status: LeaveStatus,
        decided_by: int,
        now: datetime,
        expected_status: LeaveStatus = LeaveStatus.PENDING,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_by=%s, updated_at=%s
                WHERE request_id=%s AND status=%s
                """,
                (status.value, int(decided_by), now, int(request_id), expected_status.value),
            )
            return cur.rowcount > 0
