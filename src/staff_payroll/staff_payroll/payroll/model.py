from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class SalaryAdvance:
    advance_id: int
    staff_id: int
    amount: float
    given_on: date
    given_by: int
    is_deducted: bool = False


@dataclass(frozen=True)
class SalaryInputs:
    base_salary: float
    working_days: int
    present_days: int
    absent_days: int
    late_count: int
    leaves_used: int
    advance_amount: float = 0


@dataclass(frozen=True)
class SalaryBreakdown:
    """Every figure of the month, kept for display and audit."""

    base_salary: float
    working_days: int
    present_days: int
    absent_days: int
    late_count: int
    leaves_used: int
    daily_salary: int
    absent_deduction: int
    late_penalty: int
    advance_deduction: float
    bonus: int
    total_deductions: int
    final_amount: int
    computable: bool = True


@dataclass(frozen=True)
class SalaryStatement:
    staff_id: int
    staff_name: str
    year: int
    month: int
    breakdown: SalaryBreakdown
    advance_ids: tuple[int, ...] = ()


@dataclass(frozen=True)
class MonthlySalaryRecord:
    """Persisted, locked result of a month. Immutable once ``is_locked``."""

    staff_id: int
    year: int
    month: int
    base_salary: float
    working_days: int
    daily_salary: int
    present_days: int
    absent_days: int
    late_count: int
    leaves_used: int
    late_penalty: int
    absent_deduction: int
    advance_deduction: float
    bonus: int
    total_deductions: int
    final_amount: int
    is_locked: bool
    calculated_at: datetime
    advance_ids: tuple[int, ...] = ()
    record_id: Optional[int] = None

    @classmethod
    def locked_from(cls, statement: SalaryStatement, *, calculated_at: datetime) -> "MonthlySalaryRecord":
        b = statement.breakdown
        return cls(
            staff_id=statement.staff_id,
            year=statement.year,
            month=statement.month,
            base_salary=b.base_salary,
            working_days=b.working_days,
            daily_salary=b.daily_salary,
            present_days=b.present_days,
            absent_days=b.absent_days,
            late_count=b.late_count,
            leaves_used=b.leaves_used,
            late_penalty=b.late_penalty,
            absent_deduction=b.absent_deduction,
            advance_deduction=b.advance_deduction,
            bonus=b.bonus,
            total_deductions=b.total_deductions,
            final_amount=b.final_amount,
            is_locked=True,
            calculated_at=calculated_at,
            advance_ids=tuple(statement.advance_ids),
        )
