from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus
from ..ledger.balance import eligible_wage, is_wage_eligible


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one worker's attendance on one day, with the wage earned."""

    attendance_id: int
    worker_id: int
    work_date: date
    status: AttendanceStatus
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    amount: Optional[Decimal] = None
    narration: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def is_wage_eligible(self) -> bool:
        return is_wage_eligible(self.status, self.amount)

    @property
    def wage(self) -> Decimal:
        """What this record contributes to the balance (0 unless wage-eligible)."""
        return eligible_wage(self.status, self.amount)
