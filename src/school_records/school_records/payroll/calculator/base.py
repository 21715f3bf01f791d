from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Iterable

from ..model import SalaryReconciliation, TeacherAdvance, TeacherSalary


@dataclass(frozen=True)
class MonthlyTotals:
    total_base_salaries: float
    total_advances: float
    total_bonuses: float
    total_deductions: float
    total_cost: float
    teacher_count: int


class SalaryCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def reconcile(
        self,
        *,
        base_salary: float,
        advance_amounts: Iterable[float],
        bonuses: float = 0,
        deductions: float = 0,
    ) -> SalaryReconciliation:
        raise NotImplementedError

    @abstractmethod
    def monthly_totals(
        self,
        salaries: Iterable[TeacherSalary],
        advances: Iterable[TeacherAdvance],
    ) -> MonthlyTotals:
        raise NotImplementedError
