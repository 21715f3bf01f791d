from __future__ import annotations

import asyncio

import pytest

from src.school_records.school_records.core.enums import EntityKind, Role, SalaryStatus
from src.school_records.school_records.core.exceptions import AuthorizationError, ValidationError
from src.school_records.school_records.database.keyvalue import InMemoryKeyValueStore
from src.school_records.school_records.payroll.service import PayrollService
from src.school_records.school_records.records.local_repository import LocalRecordStore


def run(coro):
    return asyncio.run(coro)


@pytest.fixture()
def store():
    store = LocalRecordStore(InMemoryKeyValueStore())
    users = store.collection(EntityKind.USERS)
    run(users.add({"id": "1", "role": "admin", "name": "Admin"}))
    run(users.add({"id": "2", "role": "teacher", "name": "Marie Dupont"}))
    run(users.add({"id": "3", "role": "parent", "name": "Pierre Martin"}))
    return store


@pytest.fixture()
def service(store):
    return PayrollService(store)


def _advance(service, amount, *, teacher_id="2", month="2025-01"):
    return run(
        service.record_advance(
            current_role=Role.ADMIN,
            teacher_id=teacher_id,
            amount=amount,
            month=month,
            reason="Urgence",
            approved_by="1",
        )
    )


def test_record_advance_persists_receipt(service, store):
    advance = _advance(service, 50000)

    assert advance.receipt_number == f"ADV{advance.id}"
    assert advance.year == "2025"
    stored = run(store.collection(EntityKind.TEACHER_ADVANCES).get(advance.id))
    assert stored["teacherId"] == "2"
    assert stored["amount"] == 50000
    assert stored["method"] == "especes"


@pytest.mark.parametrize("amount", [0, -10, "abc", ""])
def test_record_advance_rejects_bad_amount(service, amount):
    with pytest.raises(ValidationError):
        _advance(service, amount)


@pytest.mark.parametrize("amount", ["nan", "inf", "-inf", float("inf")])
def test_record_advance_rejects_non_finite_amount(service, store, amount):
    with pytest.raises(ValidationError):
        _advance(service, amount)

    assert run(store.collection(EntityKind.TEACHER_ADVANCES).list()) == []


def test_record_advance_requires_teacher(service):
    with pytest.raises(ValidationError):
        _advance(service, 1000, teacher_id="3")


def test_record_advance_rejects_bad_month(service):
    with pytest.raises(ValidationError):
        _advance(service, 1000, month="2025-13")


def test_non_admin_cannot_touch_payroll(service):
    with pytest.raises(AuthorizationError):
        run(
            service.record_advance(
                current_role=Role.TEACHER,
                teacher_id="2",
                amount=1000,
                month="2025-01",
                approved_by="2",
            )
        )
    with pytest.raises(AuthorizationError):
        run(service.list_salaries(current_role=Role.PARENT))


def test_compute_salary_uses_same_month_advances(service):
    _advance(service, 50000)
    _advance(service, 50000)
    _advance(service, 70000, month="2025-02")

    salary = run(
        service.compute_salary(
            current_role=Role.ADMIN,
            teacher_id="2",
            base_salary=300000,
            month="2025-01",
            bonuses=20000,
            deductions=10000,
        )
    )

    assert salary.total_paid == 120000
    assert salary.remaining_balance == 170000
    assert salary.status == SalaryStatus.PARTIAL
    assert len(salary.advance_ids) == 2


def test_compute_salary_blank_bonus_defaults_to_zero(service):
    salary = run(
        service.compute_salary(
            current_role=Role.ADMIN,
            teacher_id="2",
            base_salary="100000",
            month="2025-01",
            bonuses="",
        )
    )

    assert salary.bonuses == 0
    assert salary.status == SalaryStatus.PENDING


def test_compute_salary_rejects_negative_base(service):
    with pytest.raises(ValidationError):
        run(service.compute_salary(current_role=Role.ADMIN, teacher_id="2", base_salary=-1, month="2025-01"))


@pytest.mark.parametrize("field", ["base_salary", "bonuses", "deductions"])
@pytest.mark.parametrize("value", ["nan", "inf", float("nan")])
def test_compute_salary_rejects_non_finite_amounts(service, store, field, value):
    kwargs = {"base_salary": 100000, field: value}

    with pytest.raises(ValidationError):
        run(service.compute_salary(current_role=Role.ADMIN, teacher_id="2", month="2025-01", **kwargs))

    assert run(store.collection(EntityKind.TEACHER_SALARIES).list()) == []


def test_recompute_salary_picks_up_new_advances(service):
    salary = run(service.compute_salary(current_role=Role.ADMIN, teacher_id="2", base_salary=100000, month="2025-01"))
    assert salary.status == SalaryStatus.PENDING

    _advance(service, 100000)
    updated = run(service.recompute_salary(current_role=Role.ADMIN, salary_id=salary.id))

    assert updated.status == SalaryStatus.COMPLETED
    assert updated.remaining_balance == 0
    rows = run(service.list_salaries(current_role=Role.ADMIN, month="2025-01"))
    assert rows[0]["status"] == "completed"


def test_recompute_unknown_salary(service):
    with pytest.raises(ValidationError):
        run(service.recompute_salary(current_role=Role.ADMIN, salary_id="missing"))


def test_generate_monthly_cost_replaces_previous(service):
    _advance(service, 25000)
    run(
        service.compute_salary(
            current_role=Role.ADMIN, teacher_id="2", base_salary=300000, month="2025-01", bonuses=20000, deductions=10000
        )
    )

    first = run(service.generate_monthly_cost(current_role=Role.ADMIN, month="2025-01"))
    second = run(service.generate_monthly_cost(current_role=Role.ADMIN, month="2025-01"))

    assert second.total_cost == 310000
    assert second.total_advances == 25000
    assert second.teacher_count == 1
    costs = run(service.list_monthly_costs(current_role=Role.ADMIN))
    assert [c["id"] for c in costs] == [second.id]
    assert first.id != second.id


def test_list_advances_filters(service):
    _advance(service, 1000)
    _advance(service, 2000, month="2025-02")

    assert len(run(service.list_advances(current_role=Role.ADMIN))) == 2
    only_feb = run(service.list_advances(current_role=Role.ADMIN, month="2025-02"))
    assert [a["amount"] for a in only_feb] == [2000]
    assert run(service.list_advances(current_role=Role.ADMIN, teacher_id="9")) == []
