from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Tuple

from ..core.enums import SalaryStatus


@dataclass(frozen=True)
class SalaryReconciliation:
    """Result of netting a base salary against what was already paid."""

    total_advances: float
    total_paid: float
    remaining_balance: float
    status: SalaryStatus


@dataclass(frozen=True)
class TeacherAdvance:
    """A partial salary payment made before the month is reconciled.

    Immutable once recorded; it belongs to one teacher and one month.
    """

    id: str
    teacher_id: str
    amount: float
    date: str
    month: str
    year: str
    receipt_number: str
    method: str
    approved_by: str
    reason: str = ""

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "teacherId": self.teacher_id,
            "amount": self.amount,
            "date": self.date,
            "reason": self.reason,
            "method": self.method,
            "approvedBy": self.approved_by,
            "receiptNumber": self.receipt_number,
            "month": self.month,
            "year": self.year,
        }

    @classmethod
    def from_record(cls, r: Mapping[str, Any]) -> "TeacherAdvance":
        return cls(
            id=str(r["id"]),
            teacher_id=str(r["teacherId"]),
            amount=float(r.get("amount") or 0),
            date=r.get("date") or "",
            month=r["month"],
            year=r.get("year") or r["month"].split("-")[0],
            receipt_number=r.get("receiptNumber") or "",
            method=r.get("method") or "",
            approved_by=r.get("approvedBy") or "",
            reason=r.get("reason") or "",
        )


@dataclass(frozen=True)
class TeacherSalary:
    id: str
    teacher_id: str
    base_salary: float
    bonuses: float
    deductions: float
    month: str
    year: str
    total_paid: float
    remaining_balance: float
    status: SalaryStatus
    advance_ids: Tuple[str, ...] = field(default_factory=tuple)
    notes: str = ""

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "teacherId": self.teacher_id,
            "baseSalary": self.base_salary,
            "advanceIds": list(self.advance_ids),
            "bonuses": self.bonuses,
            "deductions": self.deductions,
            "month": self.month,
            "year": self.year,
            "totalPaid": self.total_paid,
            "remainingBalance": self.remaining_balance,
            "status": self.status.value,
            "notes": self.notes,
        }

    @classmethod
    def from_record(cls, r: Mapping[str, Any]) -> "TeacherSalary":
        return cls(
            id=str(r["id"]),
            teacher_id=str(r["teacherId"]),
            base_salary=float(r.get("baseSalary") or 0),
            bonuses=float(r.get("bonuses") or 0),
            deductions=float(r.get("deductions") or 0),
            month=r["month"],
            year=r.get("year") or r["month"].split("-")[0],
            total_paid=float(r.get("totalPaid") or 0),
            remaining_balance=float(r.get("remainingBalance") or 0),
            status=SalaryStatus(r.get("status") or SalaryStatus.PENDING.value),
            advance_ids=tuple(str(a) for a in (r.get("advanceIds") or [])),
            notes=r.get("notes") or "",
        )


@dataclass(frozen=True)
class MonthlySalaryCost:
    id: str
    month: str
    year: str
    total_base_salaries: float
    total_advances: float
    total_bonuses: float
    total_deductions: float
    total_cost: float
    teacher_count: int
    generated_date: str

    def to_record(self) -> dict:
        return {
            "id": self.id,
            "month": self.month,
            "year": self.year,
            "totalBaseSalaries": self.total_base_salaries,
            "totalAdvances": self.total_advances,
            "totalBonuses": self.total_bonuses,
            "totalDeductions": self.total_deductions,
            "totalCost": self.total_cost,
            "teacherCount": self.teacher_count,
            "generatedDate": self.generated_date,
        }
