from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import json_errors
from ..core.exceptions import ValidationError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    service = container.fee_service

    @app.route("/api/fees", methods=["GET"], endpoint="api_fees")
    @json_errors
    def api_fees():
        rows = service.list_fee_records(
            search=request.args.get("search", ""),
            status=request.args.get("status", "ALL"),
            course=request.args.get("course", "ALL"),
        )
        return jsonify({"success": True, "fees": [r.to_dict() for r in rows]})

    @app.route("/api/fees/stats", methods=["GET"], endpoint="api_fees_stats")
    @json_errors
    def api_fees_stats():
        return jsonify({"success": True, "stats": service.stats().to_dict()})

    @app.route("/api/fees/<int:student_id>", methods=["GET"], endpoint="api_fee_ledger")
    @json_errors
    def api_fee_ledger(student_id: int):
        return jsonify({"success": True, "ledger": service.get_ledger(student_id).to_dict()})

    @app.route("/api/fees/<int:student_id>/payments", methods=["GET"], endpoint="api_fee_payments")
    @json_errors
    def api_fee_payments(student_id: int):
        payments = service.payment_history(student_id)
        return jsonify(
            {
                "success": True,
                "payments": [
                    {
                        "payment_id": p.payment_id,
                        "payment_date": p.payment_date.isoformat(),
                        "method": p.method.value,
                        "amount": str(p.amount),
                        "late_fee": str(p.late_fee),
                        "discount": str(p.discount),
                        "transaction_id": p.transaction_id,
                        "cheque_number": p.cheque_number,
                        "bank_name": p.bank_name,
                        "notes": p.notes,
                    }
                    for p in payments
                ],
            }
        )

    @app.route("/api/fees/<int:student_id>/payment-defaults", methods=["GET"], endpoint="api_fee_payment_defaults")
    @json_errors
    def api_fee_payment_defaults(student_id: int):
        return jsonify({"success": True, "payment": service.payment_defaults(student_id)})

    @app.route("/api/fees/<int:student_id>/payments", methods=["POST"], endpoint="api_fee_record_payment")
    @json_errors
    def api_fee_record_payment(student_id: int):
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            raise ValidationError("Payment data must be a JSON object")
        receipt = service.record_payment(student_id, data)
        return jsonify({"success": True, "message": "Payment recorded successfully!", "receipt": receipt.to_dict()}), 201
