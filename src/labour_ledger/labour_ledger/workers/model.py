from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.constants import ZERO


@dataclass(frozen=True)
class Worker:
    """Domain entity: a labourer whose wages and payments are ledgered."""

    worker_id: int
    name: str
    address: Optional[str] = None
    phone: Optional[str] = None
    opening_balance: Decimal = ZERO
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
