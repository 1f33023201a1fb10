from __future__ import annotations

from decimal import Decimal

import pytest

from src.labour_ledger.labour_ledger.core.enums import ReportType
from src.labour_ledger.labour_ledger.core.exceptions import ValidationError
from src.labour_ledger.labour_ledger.ledger.filters import LedgerFilter
from src.labour_ledger.labour_ledger.reports.csv_export import render_csv, report_filename


@pytest.fixture
def ledger(container, ravi, work, day1, day2):
    """Opening 100, wage 50 on day 1, payment 30 on day 2."""
    cid, sid = work
    container.attendance_service.record_attendance(
        worker_id=ravi, work_date=day1, category_id=cid, subcategory_id=sid, amount="50", narration="picking"
    )
    container.payment_service.record_payment(
        worker_id=ravi, amount="30", payment_date=day2, payment_mode="Cash", narration="advance"
    )
    return container


def test_detailed_report_running_balance(ledger, ravi):
    rows = ledger.report_service.build_detailed_report(LedgerFilter(worker_id=ravi))

    assert [r.running_balance for r in rows] == [Decimal("150.00"), Decimal("120.00")]
    assert (rows[0].attendance_status, rows[0].category, rows[0].subcategory) == ("present", "Coffee Estate", "Picking")
    assert (rows[0].wage_amount, rows[0].payment_amount) == (Decimal("50.00"), Decimal("0.00"))
    assert (rows[1].attendance_status, rows[1].payment_amount, rows[1].narration) == ("", Decimal("30.00"), "advance")


def test_detailed_report_seeds_from_opening_balance_even_when_filtered(ledger, ravi, day2):
    rows = ledger.report_service.build_detailed_report(LedgerFilter(worker_id=ravi, start=day2))
    assert [r.running_balance for r in rows] == [Decimal("70.00")]


def test_same_day_attendance_comes_before_payment(container, ravi, work, day1):
    cid, sid = work
    container.payment_service.record_payment(worker_id=ravi, amount="20", payment_date=day1, payment_mode="Cash")
    container.attendance_service.record_attendance(
        worker_id=ravi, work_date=day1, category_id=cid, subcategory_id=sid, amount="50"
    )

    rows = container.report_service.build_detailed_report(LedgerFilter())
    assert [(r.wage_amount, r.payment_amount, r.running_balance) for r in rows] == [
        (Decimal("50.00"), Decimal("0.00"), Decimal("150.00")),
        (Decimal("0.00"), Decimal("20.00"), Decimal("130.00")),
    ]


def test_summary_net_balance_ignores_date_filter(ledger, ravi, day2):
    (row,) = ledger.report_service.build_summary_report(LedgerFilter(worker_id=ravi, start=day2, end=day2))

    assert row.total_attendance == 0
    assert row.total_wages == Decimal("0.00")
    assert row.total_payments == Decimal("30.00")
    assert row.net_balance == Decimal("120.00")
    assert row.net_balance == ledger.balance_service.calculate_worker_balance(ravi)


def test_summary_lists_every_worker_without_worker_filter(ledger):
    ledger.worker_service.create_worker(name="Anand", opening_balance="10")
    rows = ledger.report_service.build_summary_report(LedgerFilter())

    assert [(r.worker_name, r.net_balance) for r in rows] == [("Anand", Decimal("10.00")), ("Ravi", Decimal("120.00"))]
    assert rows[1].phone == "9876543210"


def test_dashboard_totals(ledger, ravi):
    ledger.worker_service.create_worker(name="Anand", opening_balance="10")
    ledger.attendance_service.record_attendance(worker_id=ravi, work_date="2026-03-05", status="absent")

    stats = ledger.report_service.build_dashboard(LedgerFilter())

    assert stats.total_workers == 2
    assert stats.total_attendance == 1
    assert stats.total_wages == Decimal("50.00")
    assert stats.total_payments == Decimal("30.00")
    assert stats.net_balance == Decimal("130.00")


def test_detailed_csv_quotes_text_only(ledger, ravi):
    rows = ledger.report_service.build_detailed_report(LedgerFilter(worker_id=ravi))
    lines = render_csv(ReportType.DETAILED, rows).splitlines()

    assert lines[0] == (
        "Date,Worker Name,Attendance Status,Category,Subcategory,"
        "Wage Amount,Payment Amount,Running Balance,Narration"
    )
    assert lines[1] == '2026-03-01,"Ravi","present","Coffee Estate","Picking",50.00,0.00,150.00,"picking"'
    assert lines[2] == '2026-03-02,"Ravi","","","",0.00,30.00,120.00,"advance"'


def test_summary_csv(ledger):
    rows = ledger.report_service.build_summary_report(LedgerFilter())
    lines = render_csv(ReportType.SUMMARY, rows).splitlines()

    assert lines[0].startswith("Worker Name,Phone,Address,Opening Balance")
    assert lines[1] == '"Ravi","9876543210","",100.00,1,50.00,30.00,120.00'


def test_empty_export_is_rejected():
    with pytest.raises(ValidationError, match="No data available for export"):
        render_csv(ReportType.SUMMARY, [])


def test_report_filename(day1):
    assert report_filename("hulimane", ReportType.DETAILED, on=day1) == "hulimane_detailed_report_20260301.csv"
