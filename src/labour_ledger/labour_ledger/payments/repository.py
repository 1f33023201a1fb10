from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..ledger.filters import LedgerFilter
from .model import Payment


class PaymentRepository(Protocol):
    def get_by_id(self, payment_id: int) -> Optional[Payment]:
        raise NotImplementedError

    def create_payment(
        self,
        *,
        worker_id: int,
        payment_date: date,
        amount: Decimal,
        payment_mode: str,
        narration: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def delete_by_id(self, payment_id: int) -> bool:
        raise NotImplementedError

    def list_filtered(self, ledger_filter: LedgerFilter) -> Sequence[Payment]:
        """Payments in scope, ordered by payment_date then id."""

        raise NotImplementedError

    def sum_payments(self, worker_id: int) -> Decimal:
        """Sum of all positive payment amounts of a worker."""

        raise NotImplementedError
