from __future__ import annotations

from flask import Flask, request

from ..common.http import api_view, filter_args, json_body, ok
from ..container import Container
from ..ledger.filters import LedgerFilter


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @api_view
    def list_attendance():
        ledger_filter = LedgerFilter.build(**filter_args())
        return ok(container.attendance_service.list_view(ledger_filter))

    @app.route("/api/attendance", methods=["POST"], endpoint="record_attendance")
    @api_view
    def record_attendance():
        payload = json_body()
        attendance_id = container.attendance_service.record_attendance(
            worker_id=payload.get("worker_id"),
            work_date=payload.get("date"),
            status=payload.get("status") or "present",
            category_id=payload.get("category_id"),
            subcategory_id=payload.get("subcategory_id"),
            amount=payload.get("amount"),
            narration=payload.get("narration"),
        )
        return ok({"attendance_id": attendance_id}, status=201, message="Attendance recorded successfully")

    @app.route("/api/attendance/<int:attendance_id>", methods=["DELETE"], endpoint="delete_attendance")
    @api_view
    def delete_attendance(attendance_id: int):
        container.attendance_service.delete_record(attendance_id)
        return ok(message="Attendance record deleted")

    @app.route("/api/attendance/preview", methods=["GET"], endpoint="preview_attendance")
    @api_view
    def preview_attendance():
        preview = container.balance_service.preview_attendance(
            request.args.get("worker_id"),
            status=request.args.get("status"),
            amount=request.args.get("amount"),
        )
        return ok(preview)
