from __future__ import annotations

from typing import Optional, Sequence

from ..common.money import round_money
from ..common.validators import (
    FormErrors,
    optional_text,
    parse_id,
    require_date,
    require_id,
    require_non_empty,
    require_positive_amount,
)
from ..core.constants import PAYMENT_MODES
from ..core.exceptions import ConfirmationRequiredError, NotFoundError, ValidationError
from ..core.logging_config import get_logger
from ..ledger.filters import LedgerFilter
from ..ledger.service import BalanceAuditor, BalanceService
from ..workers.repository import WorkerRepository
from .model import Payment
from .repository import PaymentRepository

logger = get_logger("payments")


class PaymentService:
    """Use case: pay a worker.

    A payment larger than the current balance is allowed, but only after the
    caller confirms it (``confirmed=True``). The check and the insert are two
    separate requests, so two concurrent payments can both pass the check.
    """

    def __init__(
        self,
        payments: PaymentRepository,
        workers: WorkerRepository,
        balances: BalanceService,
        *,
        auditor: Optional[BalanceAuditor] = None,
    ):
        self._payments = payments
        self._workers = workers
        self._balances = balances
        self._auditor = auditor

    @staticmethod
    def payment_modes() -> Sequence[str]:
        return PAYMENT_MODES

    def record_payment(
        self,
        *,
        worker_id,
        amount,
        payment_date,
        payment_mode: Optional[str],
        narration: Optional[str] = None,
        confirmed: bool = False,
    ) -> int:
        form = FormErrors()
        wid = form.check(require_id, worker_id, "worker_id", label="Worker")
        amt = form.check(require_positive_amount, amount, "amount")
        day = form.check(require_date, payment_date, "date")
        mode = form.check(require_non_empty, payment_mode, "payment_mode", label="Payment mode")
        form.raise_if_any()

        worker = self._workers.get_by_id(wid)
        if not worker:
            raise ValidationError("Worker not found", {"worker_id": "Worker not found"})

        current = self._balances.calculate_worker_balance(wid)
        if amt > current and not confirmed:
            new_balance = round_money(current - amt)
            logger.warning("payment of %s to worker %s exceeds balance %s; confirmation required", amt, wid, current)
            raise ConfirmationRequiredError(
                f"Payment amount ({round_money(amt)}) exceeds current balance ({current}). "
                f"This will result in a negative balance. Do you want to continue?",
                current_balance=current,
                new_balance=new_balance,
            )

        payment_id = self._payments.create_payment(
            worker_id=wid,
            payment_date=day,
            amount=amt,
            payment_mode=mode,
            narration=optional_text(narration),
        )
        logger.info("payment %s recorded: worker %s, %s, %s via %s", payment_id, wid, day, amt, mode)

        if self._auditor:
            self._auditor.record(wid, old_balance=current, reason=f"payment {day.isoformat()}")
        return payment_id

    def list_payments(self, ledger_filter: LedgerFilter) -> Sequence[Payment]:
        return self._payments.list_filtered(ledger_filter)

    def list_view(self, ledger_filter: LedgerFilter) -> list[dict]:
        payments = self._payments.list_filtered(ledger_filter)
        workers = {w.worker_id: w.name for w in self._workers.list_all()}
        return [
            {
                "payment_id": p.payment_id,
                "worker_id": p.worker_id,
                "worker_name": workers.get(p.worker_id, ""),
                "date": p.payment_date.isoformat(),
                "amount": p.amount,
                "payment_mode": p.payment_mode,
                "narration": p.narration or "",
            }
            for p in payments
        ]

    def delete_payment(self, payment_id) -> None:
        pid = parse_id(payment_id)
        payment = self._payments.get_by_id(pid) if pid else None
        if not payment:
            raise NotFoundError("Payment not found")

        old_balance = self._auditor.snapshot(payment.worker_id) if self._auditor else None
        if not self._payments.delete_by_id(payment.payment_id):
            raise NotFoundError("Payment not found")
        logger.info("payment %s deleted (worker %s, %s)", payment.payment_id, payment.worker_id, payment.amount)

        if self._auditor:
            self._auditor.record(
                payment.worker_id,
                old_balance=old_balance,
                reason=f"payment {payment.payment_date.isoformat()} deleted",
            )
