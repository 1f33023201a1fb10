from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from ..ledger.filters import LedgerFilter
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_worker_and_date(self, worker_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_record(
        self,
        *,
        worker_id: int,
        work_date: date,
        status: AttendanceStatus,
        category_id: Optional[int],
        subcategory_id: Optional[int],
        amount: Optional[Decimal],
        narration: Optional[str] = None,
    ) -> int:
        """Insert one record; a second record for the same (worker, date) must fail."""

        raise NotImplementedError

    def delete_by_id(self, attendance_id: int) -> bool:
        raise NotImplementedError

    def list_filtered(self, ledger_filter: LedgerFilter) -> Sequence[AttendanceRecord]:
        """Records in scope, ordered by work_date then id."""

        raise NotImplementedError

    def sum_eligible_wages(self, worker_id: int) -> Decimal:
        """Sum of amounts of present/halfday records with a positive amount."""

        raise NotImplementedError
