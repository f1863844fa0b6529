"""Progressive penalty for late arrivals within one calendar month.

    1st, 2nd late   warning, no money
    3rd late        flat fine
    4th late        half a day's salary
    5th and later   a full day's salary each
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..core.constants import DEFAULT_LATE_FINE_AMOUNT
from ..core.enums import LateConsequence
from ..core.rules import PayrollRules


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


@dataclass(frozen=True)
class LateRule:
    ordinal: int
    kind: LateConsequence
    fine: float = 0
    day_fraction: float = 0
    message: str = ""

    def amount(self, daily_salary: float) -> float:
        return self.fine + self.day_fraction * daily_salary


class LatePenaltyLadder:
    def __init__(self, fine_amount: float = DEFAULT_LATE_FINE_AMOUNT):
        self._fine_amount = fine_amount

    @classmethod
    def from_rules(cls, rules: PayrollRules) -> "LatePenaltyLadder":
        return cls(fine_amount=rules.late_fine_amount)

    def consequence(self, late_ordinal: int) -> Optional[LateRule]:
        n = int(late_ordinal)
        if n <= 0:
            return None
        if n == 1:
            return LateRule(n, LateConsequence.WARNING, message="1st late - Warning issued")
        if n == 2:
            return LateRule(n, LateConsequence.WARNING, message="2nd late - Final warning")
        if n == 3:
            return LateRule(
                n,
                LateConsequence.FINE,
                fine=self._fine_amount,
                message=f"3rd late - ₹{self._fine_amount:g} fine",
            )
        if n == 4:
            return LateRule(n, LateConsequence.HALF_DAY, day_fraction=0.5, message="4th late - Half-day deducted")
        return LateRule(n, LateConsequence.ABSENT, day_fraction=1, message=f"{ordinal(n)} late - Marked absent")

    def total_penalty(self, late_count: int, daily_salary: float) -> int:
        """Cumulative penalty for ``late_count`` lates, rounded once at the end."""
        total = 0.0
        for i in range(1, int(late_count) + 1):
            total += self.consequence(i).amount(daily_salary)
        return round_half_up(total)
