from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.validators import require_positive_int
from ..core.exceptions import ValidationError
from ..container import Container
from .model import PayrollRecord, PayrollRun


def payroll_to_json(r: PayrollRecord) -> dict:
    return {
        "id": r.payroll_id,
        "userId": r.user_id,
        "period": r.period,
        "basicSalary": r.basic_salary,
        "overtimePay": r.overtime_pay,
        "bonus": r.bonus,
        "lateDeduction": r.late_deduction,
        "bpjsDeduction": r.bpjs_deduction,
        "pph21Deduction": r.pph21_deduction,
        "otherDeduction": r.other_deduction,
        "totalDeductions": r.total_deductions,
        "totalNet": r.total_net,
        "negativeNet": r.is_negative_net,
        "status": r.status.value,
        "generatedAt": r.generated_at.isoformat() if r.generated_at else None,
        "finalizedAt": r.finalized_at.isoformat() if r.finalized_at else None,
    }


def run_to_json(run: PayrollRun) -> dict:
    return {
        "success": True,
        "message": f"Generated payroll for {len(run.records)} employees",
        "period": run.period,
        "payrolls": [payroll_to_json(r) for r in run.records],
        "skippedFinalized": list(run.skipped_finalized),
        "warnings": [{"userId": w.user_id, "code": w.code, "message": w.message} for w in run.warnings],
    }


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payroll", methods=["GET"], endpoint="api_payroll_list")
    def api_payroll_list():
        period = request.args.get("period")
        user_id = request.args.get("userId")
        if period:
            records = container.payroll_runner.list_for_period(period)
        elif user_id:
            records = container.payroll_runner.list_for_user(require_positive_int(user_id, "userId"))
        else:
            raise ValidationError("period or userId required")
        return jsonify([payroll_to_json(r) for r in records]), 200

    @app.route("/api/payroll/<int:payroll_id>", methods=["GET"], endpoint="api_payroll_get")
    def api_payroll_get(payroll_id: int):
        return jsonify(payroll_to_json(container.payroll_runner.get(payroll_id))), 200

    @app.route("/api/payroll/generate", methods=["POST"], endpoint="api_payroll_generate")
    def api_payroll_generate():
        data = request.get_json(silent=True) or {}
        bonuses = data.get("manualBonuses") or {}
        if not isinstance(bonuses, dict):
            raise ValidationError("manualBonuses must be an object keyed by employee id")
        run = container.payroll_runner.generate(str(data.get("period") or ""), bonuses)
        return jsonify(run_to_json(run)), 201

    @app.route("/api/payroll/<int:payroll_id>/finalize", methods=["POST"], endpoint="api_payroll_finalize")
    def api_payroll_finalize(payroll_id: int):
        record = container.payroll_runner.finalize(payroll_id)
        return jsonify(payroll_to_json(record)), 200
