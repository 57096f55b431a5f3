"""Enumerations for Fiado."""

from enum import StrEnum


class TransactionType(StrEnum):
    VENTA = "venta"
    PAGO = "pago"


class TransitionType(StrEnum):
    TO_ZERO = "to-zero"
    FROM_ZERO = "from-zero"
    THROUGH_ZERO = "through-zero"


class DisplayStepType(StrEnum):
    PAYMENT = "payment"
    ZERO_SEPARATOR = "zero-separator"
    FAVOR = "favor"
