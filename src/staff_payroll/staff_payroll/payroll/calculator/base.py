from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import SalaryBreakdown, SalaryInputs


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, inputs: SalaryInputs) -> SalaryBreakdown:
        raise NotImplementedError
