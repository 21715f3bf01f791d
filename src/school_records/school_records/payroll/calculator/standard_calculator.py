from __future__ import annotations

from typing import Iterable

from ...core.enums import SalaryStatus
from ..model import SalaryReconciliation, TeacherAdvance, TeacherSalary
from .base import MonthlyTotals, SalaryCalculator


def derive_status(*, remaining_balance: float, total_paid: float) -> SalaryStatus:
    if remaining_balance <= 0:
        return SalaryStatus.COMPLETED
    if total_paid > 0:
        return SalaryStatus.PARTIAL
    return SalaryStatus.PENDING


class StandardSalaryCalculator(SalaryCalculator):
    """Standard rule: remaining = base - (advances + bonuses) - deductions.

    Deductions lower the balance but never count as paid, so a salary wiped
    out by deductions alone reads "completed" with nothing paid.
    """

    def reconcile(
        self,
        *,
        base_salary: float,
        advance_amounts: Iterable[float],
        bonuses: float = 0,
        deductions: float = 0,
    ) -> SalaryReconciliation:
        total_advances = sum(advance_amounts)
        total_paid = total_advances + bonuses
        remaining_balance = base_salary - total_paid - deductions
        return SalaryReconciliation(
            total_advances=total_advances,
            total_paid=total_paid,
            remaining_balance=remaining_balance,
            status=derive_status(remaining_balance=remaining_balance, total_paid=total_paid),
        )

    def monthly_totals(
        self,
        salaries: Iterable[TeacherSalary],
        advances: Iterable[TeacherAdvance],
    ) -> MonthlyTotals:
        salaries = list(salaries)
        total_base = sum(s.base_salary for s in salaries)
        total_bonuses = sum(s.bonuses for s in salaries)
        total_deductions = sum(s.deductions for s in salaries)
        # Advances are drawn against base salaries, so they stay out of the cost.
        return MonthlyTotals(
            total_base_salaries=total_base,
            total_advances=sum(a.amount for a in advances),
            total_bonuses=total_bonuses,
            total_deductions=total_deductions,
            total_cost=total_base + total_bonuses - total_deductions,
            teacher_count=len(salaries),
        )
