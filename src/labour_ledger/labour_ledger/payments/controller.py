from __future__ import annotations

from flask import Flask, request

from ..common.http import api_view, filter_args, is_confirmed, json_body, ok
from ..container import Container
from ..ledger.filters import LedgerFilter


def register(app: Flask, container: Container) -> None:
    @app.route("/api/payments", methods=["GET"], endpoint="list_payments")
    @api_view
    def list_payments():
        ledger_filter = LedgerFilter.build(**filter_args())
        return ok(container.payment_service.list_view(ledger_filter))

    @app.route("/api/payments", methods=["POST"], endpoint="record_payment")
    @api_view
    def record_payment():
        payload = json_body()
        payment_id = container.payment_service.record_payment(
            worker_id=payload.get("worker_id"),
            amount=payload.get("amount"),
            payment_date=payload.get("date"),
            payment_mode=payload.get("payment_mode"),
            narration=payload.get("narration"),
            confirmed=is_confirmed(payload),
        )
        balance = container.balance_service.calculate_worker_balance(payload.get("worker_id"))
        return ok({"payment_id": payment_id, "balance": balance}, status=201, message="Payment recorded successfully")

    @app.route("/api/payments/<int:payment_id>", methods=["DELETE"], endpoint="delete_payment")
    @api_view
    def delete_payment(payment_id: int):
        container.payment_service.delete_payment(payment_id)
        return ok(message="Payment deleted")

    @app.route("/api/payments/preview", methods=["GET"], endpoint="preview_payment")
    @api_view
    def preview_payment():
        preview = container.balance_service.preview_payment(
            request.args.get("worker_id"),
            amount=request.args.get("amount"),
        )
        return ok(preview)

    @app.route("/api/payments/modes", methods=["GET"], endpoint="payment_modes")
    @api_view
    def payment_modes():
        return ok(list(container.payment_service.payment_modes()))
