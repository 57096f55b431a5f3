"""Debt ledger engines."""

from fiado.engines.consistency import ConsistencyValidator, validate_sale_total
from fiado.engines.debt import DebtCalculator
from fiado.engines.history import (
    BaseHistoryFormatter,
    DetailedHistoryFormatter,
    SummaryHistoryFormatter,
)
from fiado.engines.payment_split import PaymentSplitter
from fiado.engines.transitions import TransitionDetector

__all__ = [
    "BaseHistoryFormatter",
    "ConsistencyValidator",
    "DebtCalculator",
    "DetailedHistoryFormatter",
    "PaymentSplitter",
    "SummaryHistoryFormatter",
    "TransitionDetector",
    "validate_sale_total",
]
