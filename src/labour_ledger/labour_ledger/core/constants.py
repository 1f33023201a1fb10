"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_APP_NAME = "hulimane"
PHONE_DIGITS = 10
MONEY_QUANTUM = Decimal("0.01")
ZERO = Decimal("0.00")

PAYMENT_MODES = ("Cash", "Bank Transfer", "UPI", "Cheque", "Online Transfer")
DEFAULT_PAYMENT_MODE = "Cash"
