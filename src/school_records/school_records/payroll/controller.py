from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.session_guard import current_role, current_user_id, login_required
from ..core.enums import PaymentMethod
from ..core.exceptions import ValidationError
from ..container import Container


def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service

    @app.route("/api/payroll/advances", methods=["GET"], endpoint="list_advances")
    @login_required
    async def list_advances():
        rows = await payroll.list_advances(
            current_role=current_role(),
            month=request.args.get("month") or None,
            teacher_id=request.args.get("teacherId") or None,
        )
        return jsonify(list(rows))

    @app.route("/api/payroll/advances", methods=["POST"], endpoint="record_advance")
    @login_required
    async def record_advance():
        data = _json_body()
        advance = await payroll.record_advance(
            current_role=current_role(),
            teacher_id=data.get("teacherId", ""),
            amount=data.get("amount"),
            month=data.get("month", ""),
            reason=data.get("reason", ""),
            method=data.get("method") or PaymentMethod.CASH.value,
            approved_by=current_user_id(),
        )
        return jsonify(advance.to_record()), 201

    @app.route("/api/payroll/salaries", methods=["GET"], endpoint="list_salaries")
    @login_required
    async def list_salaries():
        rows = await payroll.list_salaries(current_role=current_role(), month=request.args.get("month") or None)
        return jsonify(list(rows))

    @app.route("/api/payroll/salaries", methods=["POST"], endpoint="compute_salary")
    @login_required
    async def compute_salary():
        data = _json_body()
        salary = await payroll.compute_salary(
            current_role=current_role(),
            teacher_id=data.get("teacherId", ""),
            base_salary=data.get("baseSalary"),
            month=data.get("month", ""),
            bonuses=data.get("bonuses"),
            deductions=data.get("deductions"),
            notes=data.get("notes", ""),
        )
        return jsonify(salary.to_record()), 201

    @app.route("/api/payroll/salaries/<salary_id>/recompute", methods=["POST"], endpoint="recompute_salary")
    @login_required
    async def recompute_salary(salary_id: str):
        salary = await payroll.recompute_salary(current_role=current_role(), salary_id=salary_id)
        return jsonify(salary.to_record())

    @app.route("/api/payroll/monthly-costs", methods=["GET"], endpoint="list_monthly_costs")
    @login_required
    async def list_monthly_costs():
        return jsonify(list(await payroll.list_monthly_costs(current_role=current_role())))

    @app.route("/api/payroll/monthly-costs/<month>", methods=["POST"], endpoint="generate_monthly_cost")
    @login_required
    async def generate_monthly_cost(month: str):
        cost = await payroll.generate_monthly_cost(current_role=current_role(), month=month)
        return jsonify(cost.to_record()), 201
