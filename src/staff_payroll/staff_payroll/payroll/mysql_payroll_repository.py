from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import month_key
from ..core.exceptions import AlreadyLocked, StaleStatement
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_placeholders, is_duplicate_key
from .model import MonthlySalaryRecord, SalaryAdvance
from .repository import PayrollRepository

_SALARY_COLUMNS = (
    "staff_id",
    "year",
    "month",
    "base_salary",
    "working_days",
    "daily_salary",
    "present_days",
    "absent_days",
    "late_count",
    "leaves_used",
    "late_penalty",
    "absent_deduction",
    "advance_deduction",
    "bonus",
    "total_deductions",
    "final_amount",
    "is_locked",
    "calculated_at",
)


def _to_advance(r: Dict[str, Any]) -> SalaryAdvance:
    return SalaryAdvance(
        advance_id=int(r["advance_id"]),
        staff_id=int(r["staff_id"]),
        amount=float(r["amount"]),
        given_on=r["given_on"],
        given_by=int(r["given_by"]),
        is_deducted=bool(r["is_deducted"]),
    )


def _to_salary(r: Dict[str, Any], advance_ids: Sequence[int]) -> MonthlySalaryRecord:
    return MonthlySalaryRecord(
        staff_id=int(r["staff_id"]),
        year=int(r["year"]),
        month=int(r["month"]),
        base_salary=float(r["base_salary"]),
        working_days=int(r["working_days"]),
        daily_salary=int(r["daily_salary"]),
        present_days=int(r["present_days"]),
        absent_days=int(r["absent_days"]),
        late_count=int(r["late_count"]),
        leaves_used=int(r["leaves_used"]),
        late_penalty=int(r["late_penalty"]),
        absent_deduction=int(r["absent_deduction"]),
        advance_deduction=float(r["advance_deduction"]),
        bonus=int(r["bonus"]),
        total_deductions=int(r["total_deductions"]),
        final_amount=int(r["final_amount"]),
        is_locked=bool(r["is_locked"]),
        calculated_at=r["calculated_at"],
        advance_ids=tuple(int(a) for a in advance_ids),
        record_id=int(r["salary_id"]),
    )


def _salary_values(record: MonthlySalaryRecord) -> tuple:
    return tuple(1 if c == "is_locked" and getattr(record, c) else getattr(record, c) for c in _SALARY_COLUMNS)


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_undeducted_advances(self, staff_id: int) -> Sequence[SalaryAdvance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT advance_id, staff_id, amount, given_on, given_by, is_deducted
                FROM salary_advances
                WHERE staff_id=%s AND is_deducted=0
                ORDER BY given_on, advance_id
                """,
                (int(staff_id),),
            )
            return [_to_advance(r) for r in fetchall(cur)]

    def list_advances_for_staff(self, staff_id: int) -> Sequence[SalaryAdvance]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT advance_id, staff_id, amount, given_on, given_by, is_deducted
                FROM salary_advances
                WHERE staff_id=%s
                ORDER BY given_on DESC, advance_id DESC
                """,
                (int(staff_id),),
            )
            return [_to_advance(r) for r in fetchall(cur)]

    def add_advance(self, *, staff_id: int, amount: float, given_on: date, given_by: int) -> SalaryAdvance:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO salary_advances(staff_id, amount, given_on, given_by) VALUES(%s,%s,%s,%s)",
                (int(staff_id), amount, given_on, int(given_by)),
            )
            advance_id = int(cur.lastrowid)
        return SalaryAdvance(
            advance_id=advance_id,
            staff_id=int(staff_id),
            amount=amount,
            given_on=given_on,
            given_by=int(given_by),
        )

    @staticmethod
    def _settled_advance_ids(cur, salary_id: int) -> list[int]:
        cur.execute("SELECT advance_id FROM salary_advances WHERE deducted_in_salary_id=%s", (int(salary_id),))
        return [int(r["advance_id"]) for r in fetchall(cur)]

    def get_salary_record(self, staff_id: int, year: int, month: int) -> Optional[MonthlySalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT salary_id, {', '.join(_SALARY_COLUMNS)} FROM monthly_salaries WHERE staff_id=%s AND year=%s AND month=%s",
                (int(staff_id), int(year), int(month)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return _to_salary(r, self._settled_advance_ids(cur, r["salary_id"]))

    def list_salary_records_for_staff(self, staff_id: int) -> Sequence[MonthlySalaryRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT salary_id, {', '.join(_SALARY_COLUMNS)} FROM monthly_salaries WHERE staff_id=%s ORDER BY year DESC, month DESC",
                (int(staff_id),),
            )
            rows = fetchall(cur)
            return [_to_salary(r, self._settled_advance_ids(cur, r["salary_id"])) for r in rows]

    def lock_monthly_salary(self, record: MonthlySalaryRecord) -> MonthlySalaryRecord:
        record = replace(record, is_locked=True)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT salary_id, is_locked
                    FROM monthly_salaries
                    WHERE staff_id=%s AND year=%s AND month=%s
                    FOR UPDATE
                    """,
                    (record.staff_id, record.year, record.month),
                )
                existing = fetchone(cur)
                if existing and existing["is_locked"]:
                    raise AlreadyLocked(f"Salary already locked for {month_key(record.year, record.month)}")

                if existing:
                    salary_id = int(existing["salary_id"])
                    assignments = ", ".join(f"{c}=%s" for c in _SALARY_COLUMNS)
                    cur.execute(
                        f"UPDATE monthly_salaries SET {assignments} WHERE salary_id=%s",
                        _salary_values(record) + (salary_id,),
                    )
                else:
                    cur.execute(
                        f"INSERT INTO monthly_salaries({', '.join(_SALARY_COLUMNS)}) VALUES({in_placeholders(_SALARY_COLUMNS)})",
                        _salary_values(record),
                    )
                    salary_id = int(cur.lastrowid)

                if record.advance_ids:
                    ids = list(record.advance_ids)
                    cur.execute(
                        f"""
                        UPDATE salary_advances
                        SET is_deducted=1, deducted_in_salary_id=%s
                        WHERE staff_id=%s AND is_deducted=0 AND advance_id IN ({in_placeholders(ids)})
                        """,
                        (salary_id, record.staff_id, *ids),
                    )
                    if cur.rowcount != len(ids):
                        raise StaleStatement(
                            f"Advances were settled elsewhere, recalculate "
                            f"{month_key(record.year, record.month)} and lock again"
                        )
                settled = self._settled_advance_ids(cur, salary_id)
        except mysql.connector.IntegrityError as exc:
            # A concurrent lock inserted the same (staff, year, month) first.
            if is_duplicate_key(exc):
                raise AlreadyLocked(f"Salary already locked for {month_key(record.year, record.month)}") from exc
            raise

        return replace(record, record_id=salary_id, advance_ids=tuple(settled))
