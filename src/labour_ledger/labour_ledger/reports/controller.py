from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import month_bounds, today
from ..common.http import api_view, ok
from ..container import Container
from ..core.enums import ReportType
from ..ledger.filters import LedgerFilter
from .csv_export import render_csv, report_filename


def register(app: Flask, container: Container) -> None:
    def _report_filter() -> LedgerFilter:
        # reports default to the current month
        first, last = month_bounds(today())
        return LedgerFilter.build(
            worker_id=request.args.get("worker_id"),
            start=request.args.get("start", first),
            end=request.args.get("end", last),
        )

    def _build(report_type: ReportType, ledger_filter: LedgerFilter):
        if report_type == ReportType.DETAILED:
            return container.report_service.build_detailed_report(ledger_filter)
        return container.report_service.build_summary_report(ledger_filter)

    @app.route("/api/reports/<any(detailed, summary):report_type>", methods=["GET"], endpoint="report")
    @api_view
    def report(report_type: str):
        rtype = ReportType(report_type)
        ledger_filter = _report_filter()
        return ok(
            {
                "report_type": rtype,
                "start": ledger_filter.start,
                "end": ledger_filter.end,
                "worker_id": ledger_filter.worker_id,
                "rows": _build(rtype, ledger_filter),
            }
        )

    @app.route("/api/reports/<any(detailed, summary):report_type>.csv", methods=["GET"], endpoint="report_csv")
    @api_view
    def report_csv(report_type: str):
        rtype = ReportType(report_type)
        rows = _build(rtype, _report_filter())
        csv_bytes = render_csv(rtype, rows).encode("utf-8")
        filename = report_filename(app.config["APP_NAME"], rtype, on=today())
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )

    @app.route("/api/dashboard", methods=["GET"], endpoint="dashboard")
    @api_view
    def dashboard():
        ledger_filter = LedgerFilter.build(
            worker_id=request.args.get("worker_id"),
            start=request.args.get("start"),
            end=request.args.get("end"),
        )
        return ok(container.report_service.build_dashboard(ledger_filter))
