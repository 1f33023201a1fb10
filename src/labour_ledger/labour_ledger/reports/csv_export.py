"""CSV rendering of the detailed and summary reports.

Header row and dates unquoted, text fields quoted, numbers bare, ``,`` as delimiter.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Sequence

from ..core.enums import ReportType
from ..core.exceptions import ValidationError
from .model import DetailedReportRow, SummaryReportRow

DETAILED_HEADERS = [
    "Date",
    "Worker Name",
    "Attendance Status",
    "Category",
    "Subcategory",
    "Wage Amount",
    "Payment Amount",
    "Running Balance",
    "Narration",
]

SUMMARY_HEADERS = [
    "Worker Name",
    "Phone",
    "Address",
    "Opening Balance",
    "Total Attendance",
    "Total Wages",
    "Total Payments",
    "Net Balance",
]


def report_filename(app_name: str, report_type: ReportType, *, on: date) -> str:
    return f"{app_name}_{ReportType(report_type).value}_report_{on.strftime('%Y%m%d')}.csv"


def _detailed_values(row: DetailedReportRow) -> list:
    # the date column is written bare by render_csv
    return [
        row.worker_name,
        row.attendance_status,
        row.category,
        row.subcategory,
        row.wage_amount,
        row.payment_amount,
        row.running_balance,
        row.narration,
    ]


def _summary_values(row: SummaryReportRow) -> list:
    return [
        row.worker_name,
        row.phone,
        row.address,
        row.opening_balance,
        row.total_attendance,
        row.total_wages,
        row.total_payments,
        row.net_balance,
    ]


def render_csv(report_type: ReportType, rows: Sequence) -> str:
    if not rows:
        raise ValidationError("No data available for export")

    if ReportType(report_type) == ReportType.DETAILED:
        headers, values = DETAILED_HEADERS, _detailed_values
    else:
        headers, values = SUMMARY_HEADERS, _summary_values

    out = io.StringIO()
    csv.writer(out, lineterminator="\n").writerow(headers)
    writer = csv.writer(out, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    for row in rows:
        if isinstance(row, DetailedReportRow):
            out.write(row.date.strftime("%Y-%m-%d") + ",")
        writer.writerow(values(row))
    return out.getvalue()
