from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_key, now_local, working_days_in_month
from ..common.validators import require_month, require_positive_amount
from ..core.exceptions import AlreadyLocked, NonComputable, NotFound
from ..core.rules import PayrollRules
from ..leaves.repository import LeaveRepository
from ..stores.repository import StoreRepository
from ..users.access import load_staff, require_store_manager
from ..users.model import User
from ..users.repository import UserRepository
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import MonthlySalaryRecord, SalaryAdvance, SalaryInputs, SalaryStatement
from .repository import PayrollRepository
from .tally import tally_month

logger = logging.getLogger(__name__)


class PayrollService:
    def __init__(
        self,
        payroll: PayrollRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        users: UserRepository,
        stores: StoreRepository,
        *,
        rules: Optional[PayrollRules] = None,
        calculator: Optional[SalaryCalculator] = None,
    ):
        self._payroll = payroll
        self._attendance = attendance
        self._leaves = leaves
        self._users = users
        self._stores = stores
        self._rules = rules or PayrollRules()
        self._calculator = calculator

    def _calculator_for(self, rules: PayrollRules) -> SalaryCalculator:
        return self._calculator or StandardSalaryCalculator(rules)

    def calculate_staff_salary(self, staff_id: int, year: int, month: int) -> SalaryStatement:
        year, month = require_month(year, month)
        staff = load_staff(self._users, staff_id)
        store = self._stores.get_store(staff.store_id)
        if not store:
            raise NotFound(f"Store {staff.store_id} does not exist")
        rules = store.effective_rules(self._rules)

        working_days = working_days_in_month(year, month, store.holiday_dates())
        tally = tally_month(
            self._attendance.get_attendance_for_staff_and_month(staff.user_id, year, month),
            self._leaves.get_approved_leaves_for_staff_and_month(staff.user_id, year, month),
            year=year,
            month=month,
            working_days=working_days,
        )

        advances = list(self._payroll.get_undeducted_advances(staff.user_id))
        breakdown = self._calculator_for(rules).calculate(
            SalaryInputs(
                base_salary=staff.monthly_salary,
                working_days=working_days,
                present_days=tally.present_days,
                absent_days=tally.absent_days,
                late_count=tally.late_count,
                leaves_used=tally.leave_days,
                advance_amount=sum(a.amount for a in advances),
            )
        )

        return SalaryStatement(
            staff_id=staff.user_id,
            staff_name=staff.name,
            year=year,
            month=month,
            breakdown=breakdown,
            advance_ids=tuple(a.advance_id for a in advances),
        )

    def lock_month(
        self,
        actor: User,
        staff_id: int,
        year: int,
        month: int,
        *,
        now: Optional[datetime] = None,
    ) -> MonthlySalaryRecord:
        staff = load_staff(self._users, staff_id)
        require_store_manager(actor, staff.store_id)

        existing = self._payroll.get_salary_record(staff.user_id, int(year), int(month))
        if existing and existing.is_locked:
            logger.warning("Salary %s-%s for staff %s is already locked", year, month, staff.user_id)
            raise AlreadyLocked(f"Salary already locked for {month_key(year, month)}")

        statement = self.calculate_staff_salary(staff.user_id, year, month)
        if not statement.breakdown.computable:
            raise NonComputable(f"No working days in {month_key(statement.year, statement.month)}")

        record = MonthlySalaryRecord.locked_from(statement, calculated_at=now or now_local())
        saved = self._payroll.lock_monthly_salary(record)
        logger.info(
            "Salary %s-%s locked for staff %s: final=%s, advances settled=%s",
            statement.year,
            statement.month,
            staff.user_id,
            saved.final_amount,
            len(saved.advance_ids),
        )
        return saved

    def get_locked_record(self, staff_id: int, year: int, month: int) -> Optional[MonthlySalaryRecord]:
        return self._payroll.get_salary_record(int(staff_id), int(year), int(month))

    def salary_history(self, staff_id: int) -> Sequence[MonthlySalaryRecord]:
        items = list(self._payroll.list_salary_records_for_staff(int(staff_id)))
        items.sort(key=lambda r: (r.year, r.month), reverse=True)
        return items

    def add_advance(
        self,
        actor: User,
        staff_id: int,
        amount: float,
        *,
        given_on: Optional[date] = None,
    ) -> SalaryAdvance:
        staff = load_staff(self._users, staff_id)
        require_store_manager(actor, staff.store_id)
        amount = require_positive_amount(amount, "Advance amount")

        advance = self._payroll.add_advance(
            staff_id=staff.user_id,
            amount=amount,
            given_on=given_on or now_local().date(),
            given_by=actor.user_id,
        )
        logger.info("Advance %s of %s issued to staff %s by user %s", advance.advance_id, amount, staff.user_id, actor.user_id)
        return advance

    def list_advances(self, staff_id: int) -> Sequence[SalaryAdvance]:
        items = list(self._payroll.list_advances_for_staff(int(staff_id)))
        items.sort(key=lambda a: (a.given_on, a.advance_id), reverse=True)
        return items
