from __future__ import annotations

from flask import Flask

from ..common.http import api_view, fail, is_confirmed, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/workers", methods=["GET"], endpoint="list_workers")
    @api_view
    def list_workers():
        return ok(container.worker_service.list_workers())

    @app.route("/api/workers", methods=["POST"], endpoint="create_worker")
    @api_view
    def create_worker():
        payload = json_body()
        worker_id = container.worker_service.create_worker(
            name=payload.get("name"),
            address=payload.get("address"),
            phone=payload.get("phone"),
            opening_balance=payload.get("opening_balance"),
        )
        return ok(container.worker_service.get_worker(worker_id), status=201, message="Worker added successfully")

    @app.route("/api/workers/<int:worker_id>", methods=["GET"], endpoint="get_worker")
    @api_view
    def get_worker(worker_id: int):
        return ok(container.worker_service.get_worker(worker_id))

    @app.route("/api/workers/<int:worker_id>", methods=["PUT"], endpoint="update_worker")
    @api_view
    def update_worker(worker_id: int):
        payload = json_body()
        worker = container.worker_service.update_worker(
            worker_id,
            name=payload.get("name"),
            address=payload.get("address"),
            phone=payload.get("phone"),
            opening_balance=payload.get("opening_balance"),
        )
        return ok(worker, message="Worker updated successfully")

    @app.route("/api/workers/<int:worker_id>", methods=["DELETE"], endpoint="delete_worker")
    @api_view
    def delete_worker(worker_id: int):
        worker = container.worker_service.get_worker(worker_id)
        if not is_confirmed():
            return fail(
                f"Deleting {worker.name} also deletes all their attendance and payment records.",
                status=409,
                requires_confirmation=True,
            )
        container.worker_service.delete_worker(worker_id)
        return ok(message="Worker deleted successfully")

    @app.route("/api/workers/<int:worker_id>/balance", methods=["GET"], endpoint="worker_balance")
    @api_view
    def worker_balance(worker_id: int):
        worker = container.worker_service.get_worker(worker_id)
        balance = container.balance_service.calculate_worker_balance(worker.worker_id)
        return ok({"worker_id": worker.worker_id, "worker_name": worker.name, "balance": balance})

    @app.route("/api/balances", methods=["GET"], endpoint="list_balances")
    @api_view
    def list_balances():
        return ok(
            [
                {"worker_id": w.worker_id, "worker_name": w.name, "balance": balance}
                for w, balance in container.balance_service.balances_for_all()
            ]
        )
