from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..common.datetime_utils import parse_optional_date
from ..common.validators import parse_id
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class LedgerFilter:
    """Scope for attendance/payment queries. Every bound is optional."""

    worker_id: Optional[int] = None
    start: Optional[date] = None
    end: Optional[date] = None

    @classmethod
    def build(cls, *, worker_id=None, start=None, end=None) -> "LedgerFilter":
        """Build from raw query values (ids/ISO strings); blank means unbounded."""
        start_d = parse_optional_date(start, "start")
        end_d = parse_optional_date(end, "end")
        if start_d and end_d and start_d > end_d:
            raise ValidationError("Start date must not be after end date", {"start": "Start date is after end date"})
        return cls(worker_id=parse_id(worker_id), start=start_d, end=end_d)

    def contains(self, worker_id: int, on: date) -> bool:
        if self.worker_id is not None and worker_id != self.worker_id:
            return False
        if self.start is not None and on < self.start:
            return False
        if self.end is not None and on > self.end:
            return False
        return True

    def sql_clauses(self, *, worker_col: str, date_col: str) -> tuple[list[str], list[object]]:
        """WHERE fragments and parameters for the MySQL repositories."""
        clauses: list[str] = []
        params: list[object] = []
        if self.worker_id is not None:
            clauses.append(f"{worker_col}=%s")
            params.append(int(self.worker_id))
        if self.start is not None:
            clauses.append(f"{date_col}>=%s")
            params.append(self.start)
        if self.end is not None:
            clauses.append(f"{date_col}<=%s")
            params.append(self.end)
        return clauses, params
