"""Balance tolerance and money helpers shared by the ledger engines.

Balances closer than BALANCE_TOLERANCE to zero count as zero. The tolerance
is part of the observable behaviour (zero separators, overpayment detection),
so never compare balances against a literal in the engines.
"""

from decimal import Decimal

BALANCE_TOLERANCE = Decimal("0.01")
ZERO = Decimal("0")

# Display messages for split payments
PAYMENT_APPLIED_MESSAGE = "Pago aplicado a deuda"
PAYMENT_RECEIVED_MESSAGE = "Pago recibido"


def as_decimal(value: Decimal | int | float | str) -> Decimal:
    """Convert a monetary value to Decimal through its string form."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def is_zero(amount: Decimal) -> bool:
    return abs(amount) < BALANCE_TOLERANCE


def is_positive(amount: Decimal) -> bool:
    """Meaningfully above zero."""
    return amount > BALANCE_TOLERANCE


def is_negative(amount: Decimal) -> bool:
    """Meaningfully below zero."""
    return amount < -BALANCE_TOLERANCE
