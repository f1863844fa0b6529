from __future__ import annotations

from typing import Optional

from ..core.constants import DEFAULT_SHIFT_END, DEFAULT_SHIFT_START
from ..core.rules import PayrollRules
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, mysql_time_to_hhmm, optional_float
from .model import Holiday, Store
from .repository import StoreRepository

RULE_COLUMNS = ("grace_period_minutes", "max_leaves_per_month", "perfect_attendance_bonus", "late_fine_amount")


class MySQLStoreRepository(StoreRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, default_rules: Optional[PayrollRules] = None):
        self._conn_factory = conn_factory
        self._default_rules = default_rules or PayrollRules()

    def _rules_override(self, row: dict) -> Optional[PayrollRules]:
        overrides = {col: int(row[col]) for col in RULE_COLUMNS if row.get(col) is not None}
        if not overrides:
            return None
        return self._default_rules.with_overrides(**overrides)

    def get_store(self, store_id: int) -> Optional[Store]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT store_id, name, default_start_time, default_end_time, latitude, longitude,
                       radius_meters, attendance_frozen, grace_period_minutes, max_leaves_per_month,
                       perfect_attendance_bonus, late_fine_amount
                FROM stores
                WHERE store_id=%s
                """,
                (int(store_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            cur.execute(
                "SELECT holiday_date, description FROM store_holidays WHERE store_id=%s ORDER BY holiday_date",
                (int(store_id),),
            )
            holidays = tuple(Holiday(date=h["holiday_date"], description=h["description"] or "") for h in fetchall(cur))

            return Store(
                store_id=int(r["store_id"]),
                name=r["name"],
                holidays=holidays,
                default_start_time=mysql_time_to_hhmm(r["default_start_time"], DEFAULT_SHIFT_START),
                default_end_time=mysql_time_to_hhmm(r["default_end_time"], DEFAULT_SHIFT_END),
                latitude=optional_float(r.get("latitude")),
                longitude=optional_float(r.get("longitude")),
                radius_meters=optional_float(r.get("radius_meters")),
                attendance_frozen=bool(r["attendance_frozen"]),
                rules=self._rules_override(r),
            )

    def set_attendance_frozen(self, store_id: int, *, frozen: bool) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE stores SET attendance_frozen=%s WHERE store_id=%s",
                (1 if frozen else 0, int(store_id)),
            )
            return cur.rowcount > 0
