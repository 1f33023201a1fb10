from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class BalanceAudit:
    """Immutable record of a worker's balance transition (write-only log)."""

    audit_id: int
    worker_id: int
    old_balance: Optional[Decimal]
    new_balance: Optional[Decimal]
    change_reason: Optional[str]
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class AttendancePreview:
    previous_balance: Decimal
    current_wage: Decimal
    updated_balance: Decimal


@dataclass(frozen=True)
class PaymentPreview:
    total_payable: Decimal
    new_balance: Decimal
    exceeds_balance: bool
