from __future__ import annotations

from typing import Optional

from ...core.rules import PayrollRules
from ..late_penalty import LatePenaltyLadder, round_half_up
from ..model import SalaryBreakdown, SalaryInputs
from .base import SalaryCalculator


def daily_salary(base_salary: float, working_days: int) -> int:
    """Base salary spread over the working days; 0 when either is 0."""
    if not base_salary or not working_days:
        return 0
    return round_half_up(base_salary / working_days)


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: base - (absences + late penalty + advances) + bonus, not below 0.

    The perfect-attendance bonus depends only on zero approved leave days;
    lates and absences do not reduce it.
    """

    def __init__(self, rules: Optional[PayrollRules] = None, *, ladder: Optional[LatePenaltyLadder] = None):
        self._rules = rules or PayrollRules()
        self._ladder = ladder or LatePenaltyLadder.from_rules(self._rules)

    @property
    def rules(self) -> PayrollRules:
        return self._rules

    def calculate(self, inputs: SalaryInputs) -> SalaryBreakdown:
        daily = daily_salary(inputs.base_salary, inputs.working_days)

        absent_deduction = int(inputs.absent_days) * daily
        late_penalty = self._ladder.total_penalty(inputs.late_count, daily)
        bonus = self._rules.perfect_attendance_bonus if int(inputs.leaves_used) == 0 else 0

        advance = inputs.advance_amount or 0
        total_deductions = absent_deduction + late_penalty + advance
        final_amount = max(0, round_half_up(inputs.base_salary - total_deductions + bonus))

        return SalaryBreakdown(
            base_salary=inputs.base_salary,
            working_days=int(inputs.working_days),
            present_days=int(inputs.present_days),
            absent_days=int(inputs.absent_days),
            late_count=int(inputs.late_count),
            leaves_used=int(inputs.leaves_used),
            daily_salary=daily,
            absent_deduction=absent_deduction,
            late_penalty=late_penalty,
            advance_deduction=advance,
            bonus=bonus,
            total_deductions=round_half_up(total_deductions),
            final_amount=final_amount,
            computable=int(inputs.working_days) > 0,
        )
