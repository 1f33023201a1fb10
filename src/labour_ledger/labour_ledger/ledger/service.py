from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.money import round_money
from ..common.validators import parse_amount, parse_id
from ..core.constants import ZERO
from ..core.enums import AttendanceStatus
from ..core.logging_config import get_logger
from ..payments.repository import PaymentRepository
from ..workers.model import Worker
from ..workers.repository import WorkerRepository
from .balance import compute_balance, eligible_wage
from .model import AttendancePreview, PaymentPreview
from .repository import BalanceAuditRepository

logger = get_logger("ledger")


class BalanceService:
    """Use case: current balance of a worker, computed live from the ledger.

    Nothing here is cached; every call re-reads opening balance, wages and
    payments from the store.
    """

    def __init__(self, workers: WorkerRepository, attendance: AttendanceRepository, payments: PaymentRepository):
        self._workers = workers
        self._attendance = attendance
        self._payments = payments

    def calculate_worker_balance(self, worker_id) -> Decimal:
        """opening + eligible wages - payments, 2 decimals; 0 for a missing/unknown worker."""
        wid = parse_id(worker_id)
        if wid is None:
            return ZERO

        worker = self._workers.get_by_id(wid)
        if not worker:
            return ZERO

        return self.balance_for(worker)

    def balance_for(self, worker: Worker) -> Decimal:
        wages = self._attendance.sum_eligible_wages(worker.worker_id)
        payments = self._payments.sum_payments(worker.worker_id)
        return compute_balance(worker.opening_balance, wages, payments)

    def balances_for_all(self) -> Sequence[tuple[Worker, Decimal]]:
        return [(w, self.balance_for(w)) for w in self._workers.list_all()]

    def preview_attendance(self, worker_id, *, status, amount) -> AttendancePreview:
        """Balance panel of the attendance form: what this entry would add."""
        previous = self.calculate_worker_balance(worker_id)
        try:
            st = AttendanceStatus(str(status or "").strip().lower())
        except ValueError:
            st = AttendanceStatus.PRESENT
        wage = round_money(eligible_wage(st, parse_amount(amount)))
        return AttendancePreview(previous_balance=previous, current_wage=wage, updated_balance=round_money(previous + wage))

    def preview_payment(self, worker_id, *, amount) -> PaymentPreview:
        """Balance panel of the payment form."""
        current = self.calculate_worker_balance(worker_id)
        pay = round_money(parse_amount(amount) or ZERO)
        return PaymentPreview(
            total_payable=current,
            new_balance=round_money(current - pay),
            exceeds_balance=pay > current,
        )


class BalanceAuditor:
    """Appends balance transitions to the audit log after a ledger write."""

    def __init__(self, balances: BalanceService, audit: BalanceAuditRepository):
        self._balances = balances
        self._audit = audit

    def snapshot(self, worker_id: int) -> Decimal:
        return self._balances.calculate_worker_balance(worker_id)

    def record(self, worker_id: int, *, old_balance: Optional[Decimal], reason: str) -> Decimal:
        new_balance = self._balances.calculate_worker_balance(worker_id)
        self._audit.append(
            worker_id=int(worker_id),
            old_balance=old_balance,
            new_balance=new_balance,
            change_reason=reason,
        )
        logger.info("balance of worker %s: %s -> %s (%s)", worker_id, old_balance, new_balance, reason)
        return new_balance
