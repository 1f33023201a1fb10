from __future__ import annotations

import re
from decimal import Decimal
from typing import Optional

from ..core.constants import PHONE_DIGITS
from ..core.exceptions import ValidationError
from .datetime_utils import parse_optional_date
from .money import round_money, to_decimal


def require_non_empty(value: Optional[str], field_name: str, *, label: Optional[str] = None) -> str:
    label = label or field_name
    if not value or not str(value).strip():
        raise ValidationError(f"{label} is required", {field_name: f"{label} is required"})
    return str(value).strip()


def optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    s = str(value).strip()
    return s or None


def normalize_phone(value: Optional[str], field_name: str = "phone") -> Optional[str]:
    """Strip non-digits; blank means no phone. Anything else must be 10 digits."""
    raw = optional_text(value)
    if raw is None:
        return None
    digits = re.sub(r"\D", "", raw)
    if len(digits) != PHONE_DIGITS:
        raise ValidationError(
            f"Phone number must be {PHONE_DIGITS} digits",
            {field_name: f"Phone number must be {PHONE_DIGITS} digits"},
        )
    return digits


def parse_amount(value, field_name: str = "amount") -> Optional[Decimal]:
    try:
        amount = to_decimal(value)
    except ValueError:
        raise ValidationError("Amount must be a number", {field_name: "Amount must be a number"})
    if amount is not None and not amount.is_finite():
        raise ValidationError("Amount must be a number", {field_name: "Amount must be a number"})
    return amount


def require_positive_amount(value, field_name: str = "amount") -> Decimal:
    """Positive amount rounded to cents; anything that rounds to 0.00 is rejected."""
    amount = parse_amount(value, field_name)
    if amount is not None:
        amount = round_money(amount)
    if amount is None or amount <= 0:
        raise ValidationError("Amount must be greater than 0", {field_name: "Amount must be greater than 0"})
    return amount


def parse_id(value) -> Optional[int]:
    """Parse a positive integer id; anything else (None, blank, junk, <= 0) is None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return None
    return parsed if parsed > 0 else None


def require_id(value, field_name: str, *, label: Optional[str] = None) -> int:
    parsed = parse_id(value)
    if parsed is None:
        label = label or field_name
        raise ValidationError(f"{label} is required", {field_name: f"{label} is required"})
    return parsed


class FormErrors:
    """Collects per-field errors so a form reports every bad field at once."""

    def __init__(self):
        self.errors: dict[str, str] = {}

    def check(self, fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except ValidationError as e:
            self.errors.update(e.field_errors or {"form": str(e)})
            return None

    def add(self, field_name: str, message: str) -> None:
        self.errors.setdefault(field_name, message)

    def raise_if_any(self, message: str = "Please correct the highlighted fields") -> None:
        if self.errors:
            raise ValidationError(message, self.errors)


def require_date(value, field_name: str = "date", *, label: str = "Date"):
    parsed = parse_optional_date(value, field_name)
    if parsed is None:
        raise ValidationError(f"{label} is required", {field_name: f"{label} is required"})
    return parsed
