from __future__ import annotations

from typing import Optional, Sequence

from ..common.datetime_utils import generate_id, now_iso, now_local, year_of
from ..common.validators import require_amount, require_month, require_non_empty
from ..core.constants import ADVANCE_RECEIPT_PREFIX
from ..core.enums import EntityKind, PaymentMethod, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..records.repository import RecordStore
from .calculator.base import SalaryCalculator
from .calculator.standard_calculator import StandardSalaryCalculator
from .model import MonthlySalaryCost, TeacherAdvance, TeacherSalary


class PayrollService:
    """Use cases of the payroll screen: advances, salaries, monthly cost."""

    def __init__(self, store: RecordStore, *, calculator: Optional[SalaryCalculator] = None):
        self._users = store.collection(EntityKind.USERS)
        self._salaries = store.collection(EntityKind.TEACHER_SALARIES)
        self._advances = store.collection(EntityKind.TEACHER_ADVANCES)
        self._costs = store.collection(EntityKind.MONTHLY_SALARY_COSTS)
        self._calculator = calculator or StandardSalaryCalculator()

    @staticmethod
    def _require_admin(current_role: Role) -> None:
        if current_role != Role.ADMIN:
            raise AuthorizationError("Payroll is restricted to administrators")

    async def _require_teacher(self, teacher_id: str) -> str:
        teacher_id = require_non_empty(teacher_id, "teacherId")
        user = await self._users.get(teacher_id)
        if not user or user.get("role") != Role.TEACHER.value:
            raise ValidationError("Unknown teacher")
        return teacher_id

    async def _advances_for(self, teacher_id: str, month: str) -> list[TeacherAdvance]:
        return [
            TeacherAdvance.from_record(r)
            for r in await self._advances.list()
            if r.get("teacherId") == teacher_id and r.get("month") == month
        ]

    async def record_advance(
        self,
        *,
        current_role: Role,
        teacher_id: str,
        amount,
        month: str,
        approved_by: str,
        reason: str = "",
        method: str = PaymentMethod.CASH.value,
    ) -> TeacherAdvance:
        self._require_admin(current_role)
        teacher_id = await self._require_teacher(teacher_id)
        month = require_month(month)
        value = require_amount(amount, "amount")
        if value <= 0:
            raise ValidationError("amount must be greater than zero")
        try:
            method = PaymentMethod(method).value
        except ValueError:
            raise ValidationError("Unknown payment method")

        advance_id = generate_id()
        advance = TeacherAdvance(
            id=advance_id,
            teacher_id=teacher_id,
            amount=value,
            date=now_local().date().isoformat(),
            reason=(reason or "").strip(),
            method=method,
            approved_by=approved_by or "",
            receipt_number=f"{ADVANCE_RECEIPT_PREFIX}{advance_id}",
            month=month,
            year=year_of(month),
        )
        await self._advances.add(advance.to_record())
        return advance

    async def compute_salary(
        self,
        *,
        current_role: Role,
        teacher_id: str,
        base_salary,
        month: str,
        bonuses=None,
        deductions=None,
        notes: str = "",
    ) -> TeacherSalary:
        self._require_admin(current_role)
        teacher_id = await self._require_teacher(teacher_id)
        month = require_month(month)
        base = require_amount(base_salary, "baseSalary")
        bonus_value = require_amount(bonuses, "bonuses", default=0.0)
        deduction_value = require_amount(deductions, "deductions", default=0.0)

        advances = await self._advances_for(teacher_id, month)
        result = self._calculator.reconcile(
            base_salary=base,
            advance_amounts=[a.amount for a in advances],
            bonuses=bonus_value,
            deductions=deduction_value,
        )

        salary = TeacherSalary(
            id=generate_id(),
            teacher_id=teacher_id,
            base_salary=base,
            bonuses=bonus_value,
            deductions=deduction_value,
            month=month,
            year=year_of(month),
            total_paid=result.total_paid,
            remaining_balance=result.remaining_balance,
            status=result.status,
            advance_ids=tuple(a.id for a in advances),
            notes=(notes or "").strip(),
        )
        await self._salaries.add(salary.to_record())
        return salary

    async def recompute_salary(self, *, current_role: Role, salary_id: str) -> TeacherSalary:
        """Re-derive balance and status from the advances recorded so far."""
        self._require_admin(current_role)
        record = await self._salaries.get(salary_id)
        if not record:
            raise ValidationError("Unknown salary record")

        salary = TeacherSalary.from_record(record)
        advances = await self._advances_for(salary.teacher_id, salary.month)
        result = self._calculator.reconcile(
            base_salary=salary.base_salary,
            advance_amounts=[a.amount for a in advances],
            bonuses=salary.bonuses,
            deductions=salary.deductions,
        )
        changes = {
            "advanceIds": [a.id for a in advances],
            "totalPaid": result.total_paid,
            "remainingBalance": result.remaining_balance,
            "status": result.status.value,
        }
        await self._salaries.update(salary.id, changes)
        return TeacherSalary.from_record({**record, **changes})

    async def generate_monthly_cost(self, *, current_role: Role, month: str) -> MonthlySalaryCost:
        self._require_admin(current_role)
        month = require_month(month)

        salaries = [TeacherSalary.from_record(r) for r in await self._salaries.list() if r.get("month") == month]
        advances = [TeacherAdvance.from_record(r) for r in await self._advances.list() if r.get("month") == month]
        totals = self._calculator.monthly_totals(salaries, advances)

        cost = MonthlySalaryCost(
            id=generate_id(),
            month=month,
            year=year_of(month),
            total_base_salaries=totals.total_base_salaries,
            total_advances=totals.total_advances,
            total_bonuses=totals.total_bonuses,
            total_deductions=totals.total_deductions,
            total_cost=totals.total_cost,
            teacher_count=totals.teacher_count,
            generated_date=now_iso(),
        )

        # One cost record per month: a new run replaces the previous one.
        for previous in await self._costs.list():
            if previous.get("month") == month:
                await self._costs.delete(previous["id"])
        await self._costs.add(cost.to_record())
        return cost

    async def list_salaries(self, *, current_role: Role, month: Optional[str] = None) -> Sequence[dict]:
        self._require_admin(current_role)
        rows = await self._salaries.list()
        return [r for r in rows if month is None or r.get("month") == month]

    async def list_advances(
        self,
        *,
        current_role: Role,
        month: Optional[str] = None,
        teacher_id: Optional[str] = None,
    ) -> Sequence[dict]:
        self._require_admin(current_role)
        return [
            r
            for r in await self._advances.list()
            if (month is None or r.get("month") == month) and (teacher_id is None or r.get("teacherId") == teacher_id)
        ]

    async def list_monthly_costs(self, *, current_role: Role) -> Sequence[dict]:
        self._require_admin(current_role)
        return list(await self._costs.list())
