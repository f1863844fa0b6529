from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.rules import PayrollRules
from .database.connection import DBConfig, DatabaseConnection
from .database.memory import (
    MemoryAttendanceRepository,
    MemoryDatabase,
    MemoryLeaveRepository,
    MemoryPayrollRepository,
    MemoryStoreRepository,
    MemoryUserRepository,
)
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.repository import PayrollRepository
from .payroll.service import PayrollService
from .stores.mysql_store_repository import MySQLStoreRepository
from .stores.repository import StoreRepository
from .stores.service import StoreService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository


@dataclass(frozen=True)
class Container:
    rules: PayrollRules

    users_repo: UserRepository
    stores_repo: StoreRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    payroll_repo: PayrollRepository

    store_service: StoreService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService

    memory_db: Optional[MemoryDatabase] = None


def _wire(
    *,
    rules: PayrollRules,
    users_repo: UserRepository,
    stores_repo: StoreRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    payroll_repo: PayrollRepository,
    memory_db: Optional[MemoryDatabase] = None,
) -> Container:
    return Container(
        rules=rules,
        users_repo=users_repo,
        stores_repo=stores_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payroll_repo=payroll_repo,
        store_service=StoreService(stores_repo, users_repo),
        attendance_service=AttendanceService(
            attendance_repo,
            users_repo,
            stores_repo,
            rules=rules,
            strategy_factory=AttendanceStrategyFactory(),
        ),
        leave_service=LeaveService(leaves_repo, stores_repo, rules=rules),
        payroll_service=PayrollService(
            payroll_repo,
            attendance_repo,
            leaves_repo,
            users_repo,
            stores_repo,
            rules=rules,
        ),
        memory_db=memory_db,
    )


def build_memory_container(*, db: Optional[MemoryDatabase] = None, rules: Optional[PayrollRules] = None) -> Container:
    db = db or MemoryDatabase()
    return _wire(
        rules=rules or PayrollRules(),
        users_repo=MemoryUserRepository(db),
        stores_repo=MemoryStoreRepository(db),
        attendance_repo=MemoryAttendanceRepository(db),
        leaves_repo=MemoryLeaveRepository(db),
        payroll_repo=MemoryPayrollRepository(db),
        memory_db=db,
    )


def build_mysql_container(*, db_config: dict, rules: Optional[PayrollRules] = None) -> Container:
    rules = rules or PayrollRules()
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
    return _wire(
        rules=rules,
        users_repo=MySQLUserRepository(conn),
        stores_repo=MySQLStoreRepository(conn, default_rules=rules),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        payroll_repo=MySQLPayrollRepository(conn),
    )


def build_container(*, settings: Any) -> Container:
    rules = PayrollRules.from_settings(settings)
    backend = str(getattr(settings, "STORAGE_BACKEND", "mysql")).lower()
    if backend == "memory":
        return build_memory_container(rules=rules)
    return build_mysql_container(db_config=getattr(settings, "DB_CONFIG"), rules=rules)
