from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import MonthlySalaryRecord, SalaryAdvance


class PayrollRepository(Protocol):
    def get_undeducted_advances(self, staff_id: int) -> Sequence[SalaryAdvance]:
        raise NotImplementedError

    def list_advances_for_staff(self, staff_id: int) -> Sequence[SalaryAdvance]:
        raise NotImplementedError

    def add_advance(self, *, staff_id: int, amount: float, given_on: date, given_by: int) -> SalaryAdvance:
        raise NotImplementedError

    def get_salary_record(self, staff_id: int, year: int, month: int) -> Optional[MonthlySalaryRecord]:
        raise NotImplementedError

    def list_salary_records_for_staff(self, staff_id: int) -> Sequence[MonthlySalaryRecord]:
        raise NotImplementedError

    def lock_monthly_salary(self, record: MonthlySalaryRecord) -> MonthlySalaryRecord:
        """Persist a locked month and settle its advances as one atomic unit.

        Raises AlreadyLocked, leaving everything unchanged, if the
        (staff, year, month) record is already locked, and StaleStatement if
        any of ``record.advance_ids`` is no longer pending.
        """

        raise NotImplementedError
