from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role, StaffStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Admin, Staff, SuperAdmin, User
from .repository import UserRepository


class MySQLUserRepository(UserRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _to_staff(r: Dict[str, Any]) -> Staff:
        return Staff(
            user_id=int(r["user_id"]),
            name=r["name"],
            store_id=int(r["store_id"]),
            monthly_salary=float(r["monthly_salary"] or 0),
            status=StaffStatus(r["status"]),
        )

    def get_by_id(self, user_id: int) -> Optional[User]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, name, role, store_id, monthly_salary, status FROM users WHERE user_id=%s",
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None

            role = Role(r["role"])
            if role == Role.STAFF:
                return self._to_staff(r)
            if role == Role.SUPER_ADMIN:
                return SuperAdmin(user_id=int(r["user_id"]), name=r["name"])

            cur.execute("SELECT store_id FROM admin_stores WHERE admin_id=%s", (int(user_id),))
            store_ids = frozenset(int(x["store_id"]) for x in fetchall(cur))
            return Admin(user_id=int(r["user_id"]), name=r["name"], store_ids=store_ids)

    def list_staff_for_store(self, store_id: int) -> Sequence[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT user_id, name, role, store_id, monthly_salary, status
                FROM users
                WHERE role='staff' AND store_id=%s
                ORDER BY name
                """,
                (int(store_id),),
            )
            return [self._to_staff(r) for r in fetchall(cur)]
