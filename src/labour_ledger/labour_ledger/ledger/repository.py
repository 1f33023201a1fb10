from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol


class BalanceAuditRepository(Protocol):
    """Append-only store for balance transitions.

    There is deliberately no read method: balances are always recomputed
    from attendance and payments, never taken from this log.
    """

    def append(
        self,
        *,
        worker_id: int,
        old_balance: Optional[Decimal],
        new_balance: Optional[Decimal],
        change_reason: str,
    ) -> int:
        raise NotImplementedError
