"""The balance formula.

``balance = opening_balance + sum(wage-eligible attendance) - sum(payments)``,
rounded half-up to 2 decimals. Only ``BalanceService`` should call
``compute_balance`` for a stored worker; everything that shows a current
balance goes through ``BalanceService.calculate_worker_balance``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional

from ..common.money import round_money
from ..core.constants import ZERO
from ..core.enums import AttendanceStatus

WAGE_STATUSES = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.HALFDAY})


def is_wage_eligible(status: AttendanceStatus, amount: Optional[Decimal]) -> bool:
    """Present/halfday with a positive amount; absent never counts."""
    return AttendanceStatus(status) in WAGE_STATUSES and amount is not None and amount > 0


def eligible_wage(status: AttendanceStatus, amount: Optional[Decimal]) -> Decimal:
    return Decimal(amount) if is_wage_eligible(status, amount) else ZERO


def countable_payment(amount: Optional[Decimal]) -> Decimal:
    """Payments with a null or non-positive amount are left out of the sum."""
    return Decimal(amount) if amount is not None and amount > 0 else ZERO


def sum_amounts(amounts: Iterable[Decimal]) -> Decimal:
    return sum(amounts, ZERO)


def compute_balance(
    opening_balance: Optional[Decimal],
    total_wages: Optional[Decimal],
    total_payments: Optional[Decimal],
) -> Decimal:
    opening = opening_balance if opening_balance is not None else ZERO
    wages = total_wages if total_wages is not None else ZERO
    payments = total_payments if total_payments is not None else ZERO
    return round_money(Decimal(opening) + Decimal(wages) - Decimal(payments))
