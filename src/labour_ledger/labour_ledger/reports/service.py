from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.repository import AttendanceRepository
from ..categories.repository import CategoryRepository
from ..common.money import round_money
from ..core.constants import ZERO
from ..core.enums import AttendanceStatus, EventKind
from ..ledger.balance import countable_payment, sum_amounts
from ..ledger.filters import LedgerFilter
from ..ledger.service import BalanceService
from ..payments.model import Payment
from ..payments.repository import PaymentRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .model import DashboardStats, DetailedReportRow, SummaryReportRow, WorkerBalance


@dataclass(frozen=True)
class _LedgerEvent:
    kind: EventKind
    on: date
    attendance: Optional[AttendanceRecord] = None
    payment: Optional[Payment] = None


class LedgerReportService:
    """Reconciliation reports built by replaying attendance (credits) and payments (debits).

    The detailed report seeds every worker's running total with the opening
    balance, even when the date range skips earlier activity. The summary
    report takes its net balance from ``BalanceService`` and so always shows
    the all-time balance, whatever the range.
    """

    def __init__(
        self,
        workers: WorkerRepository,
        categories: CategoryRepository,
        attendance: AttendanceRepository,
        payments: PaymentRepository,
        balances: BalanceService,
    ):
        self._workers = workers
        self._categories = categories
        self._attendance = attendance
        self._payments = payments
        self._balances = balances

    def _workers_in_scope(self, ledger_filter: LedgerFilter) -> Sequence[Worker]:
        if ledger_filter.worker_id is None:
            return self._workers.list_all()
        worker = self._workers.get_by_id(ledger_filter.worker_id)
        return [worker] if worker else []

    @staticmethod
    def _events_for(worker_id: int, records, payments) -> list[_LedgerEvent]:
        events = [
            _LedgerEvent(kind=EventKind.ATTENDANCE, on=r.work_date, attendance=r)
            for r in records
            if r.worker_id == worker_id
        ]
        events += [
            _LedgerEvent(kind=EventKind.PAYMENT, on=p.payment_date, payment=p)
            for p in payments
            if p.worker_id == worker_id
        ]
        # sorted() is stable: same-day events keep attendance-then-payment fetch order
        return sorted(events, key=lambda e: e.on)

    def build_detailed_report(self, ledger_filter: LedgerFilter) -> list[DetailedReportRow]:
        records = self._attendance.list_filtered(ledger_filter)
        payments = self._payments.list_filtered(ledger_filter)
        categories = {c.category_id: c.name for c in self._categories.list_categories()}
        subcategories = {s.subcategory_id: s.name for s in self._categories.list_subcategories()}

        rows: list[DetailedReportRow] = []
        for worker in self._workers_in_scope(ledger_filter):
            running = round_money(worker.opening_balance)
            for event in self._events_for(worker.worker_id, records, payments):
                if event.kind == EventKind.ATTENDANCE:
                    a = event.attendance
                    wage = round_money(a.wage)
                    running = round_money(running + wage)
                    rows.append(
                        DetailedReportRow(
                            date=a.work_date,
                            worker_id=worker.worker_id,
                            worker_name=worker.name,
                            attendance_status=a.status.value,
                            category=categories.get(a.category_id, "") if a.category_id else "",
                            subcategory=subcategories.get(a.subcategory_id, "") if a.subcategory_id else "",
                            wage_amount=wage,
                            payment_amount=ZERO,
                            running_balance=running,
                            narration=a.narration or "",
                        )
                    )
                else:
                    p = event.payment
                    paid = round_money(countable_payment(p.amount))
                    running = round_money(running - paid)
                    rows.append(
                        DetailedReportRow(
                            date=p.payment_date,
                            worker_id=worker.worker_id,
                            worker_name=worker.name,
                            attendance_status="",
                            category="",
                            subcategory="",
                            wage_amount=ZERO,
                            payment_amount=paid,
                            running_balance=running,
                            narration=p.narration or "",
                        )
                    )
        return rows

    def build_summary_report(self, ledger_filter: LedgerFilter) -> list[SummaryReportRow]:
        records = self._attendance.list_filtered(ledger_filter)
        payments = self._payments.list_filtered(ledger_filter)

        rows: list[SummaryReportRow] = []
        for worker in self._workers_in_scope(ledger_filter):
            mine = [r for r in records if r.worker_id == worker.worker_id]
            paid = [p for p in payments if p.worker_id == worker.worker_id]
            rows.append(
                SummaryReportRow(
                    worker_id=worker.worker_id,
                    worker_name=worker.name,
                    phone=worker.phone or "",
                    address=worker.address or "",
                    opening_balance=round_money(worker.opening_balance),
                    total_attendance=sum(1 for r in mine if r.status != AttendanceStatus.ABSENT),
                    total_wages=round_money(sum_amounts(r.wage for r in mine)),
                    total_payments=round_money(sum_amounts(countable_payment(p.amount) for p in paid)),
                    net_balance=self._balances.calculate_worker_balance(worker.worker_id),
                )
            )
        return rows

    def build_dashboard(self, ledger_filter: LedgerFilter) -> DashboardStats:
        """Range totals plus every worker's all-time balance."""
        records = self._attendance.list_filtered(ledger_filter)
        payments = self._payments.list_filtered(ledger_filter)
        workers = self._workers.list_all()

        balances = tuple(
            WorkerBalance(
                worker_id=w.worker_id,
                worker_name=w.name,
                balance=self._balances.calculate_worker_balance(w.worker_id),
            )
            for w in workers
        )
        return DashboardStats(
            total_workers=len(workers),
            total_attendance=sum(1 for r in records if r.status != AttendanceStatus.ABSENT),
            total_wages=round_money(sum_amounts(r.wage for r in records)),
            total_payments=round_money(sum_amounts(countable_payment(p.amount) for p in payments)),
            net_balance=round_money(sum_amounts(b.balance for b in balances)),
            balances=balances,
            start=ledger_filter.start,
            end=ledger_filter.end,
        )
