from __future__ import annotations

from decimal import Decimal
from typing import Mapping, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules.

    ``field_errors`` maps form field names to messages so callers can show
    each message next to the offending field.
    """

    def __init__(self, message: str, field_errors: Optional[Mapping[str, str]] = None):
        super().__init__(message)
        self.field_errors = dict(field_errors or {})


class NotFoundError(DomainError):
    """Raised when a referenced entity does not exist."""


class ConstraintViolationError(DomainError):
    """Raised when the store rejects a write (unique, foreign key or check)."""


class StoreError(DomainError):
    """Raised when the store fails for a reason other than a constraint."""


class ConfirmationRequiredError(DomainError):
    """Raised when a payment exceeds the balance and was not confirmed."""

    def __init__(self, message: str, *, current_balance: Decimal, new_balance: Decimal):
        super().__init__(message)
        self.current_balance = current_balance
        self.new_balance = new_balance
