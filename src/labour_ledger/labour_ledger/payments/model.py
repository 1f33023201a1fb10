from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Payment:
    """Domain entity: money paid out to a worker (always a positive amount)."""

    payment_id: int
    worker_id: int
    payment_date: date
    amount: Decimal
    payment_mode: str
    narration: Optional[str] = None
    created_at: Optional[datetime] = None
