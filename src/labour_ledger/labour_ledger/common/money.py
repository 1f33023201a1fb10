from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Optional

from ..core.constants import MONEY_QUANTUM, ZERO


def to_decimal(value) -> Optional[Decimal]:
    """Convert driver/form values to Decimal; None and blank stay None."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # go through str so 0.1 stays 0.1
        return Decimal(str(value))
    s = str(value).strip()
    if not s:
        return None
    try:
        return Decimal(s)
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {value!r}")


def round_money(value: Optional[Decimal]) -> Decimal:
    """Round half-up to 2 decimals; None counts as zero."""
    if value is None:
        return ZERO
    return Decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)
