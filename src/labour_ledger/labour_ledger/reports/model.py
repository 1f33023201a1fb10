from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class DetailedReportRow:
    """One ledger event of a worker with the running balance after it."""

    date: date
    worker_id: int
    worker_name: str
    attendance_status: str
    category: str
    subcategory: str
    wage_amount: Decimal
    payment_amount: Decimal
    running_balance: Decimal
    narration: str


@dataclass(frozen=True)
class SummaryReportRow:
    """Per-worker totals in the report range; net_balance is the all-time balance."""

    worker_id: int
    worker_name: str
    phone: str
    address: str
    opening_balance: Decimal
    total_attendance: int
    total_wages: Decimal
    total_payments: Decimal
    net_balance: Decimal


@dataclass(frozen=True)
class WorkerBalance:
    worker_id: int
    worker_name: str
    balance: Decimal


@dataclass(frozen=True)
class DashboardStats:
    total_workers: int
    total_attendance: int
    total_wages: Decimal
    total_payments: Decimal
    net_balance: Decimal
    balances: tuple[WorkerBalance, ...] = ()
    start: Optional[date] = None
    end: Optional[date] = None
