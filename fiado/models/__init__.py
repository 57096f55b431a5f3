"""Data models for Fiado."""

from fiado.models.client import Client
from fiado.models.enums import DisplayStepType, TransactionType, TransitionType
from fiado.models.history import (
    FavorBalanceGroup,
    HistoryGroup,
    PaymentSplitGroup,
    TransactionGroup,
    ZeroBalanceGroup,
    signed_total,
)
from fiado.models.ledger import (
    ClientBalance,
    ConsistencyReport,
    DebtCalculation,
    DebtImpact,
    LedgerEntry,
    PaymentDisplayStep,
    PaymentSplit,
    PaymentVisualization,
    RejectedRecord,
    ZeroBalanceTransition,
)
from fiado.models.timestamps import EPOCH, coerce_timestamp, to_millis
from fiado.models.transaction_event import (
    PaymentEvent,
    SaleEvent,
    TransactionEvent,
    calculate_sale_total,
    transaction_event_adapter,
)

__all__ = [
    "Client",
    "ClientBalance",
    "ConsistencyReport",
    "DebtCalculation",
    "DebtImpact",
    "DisplayStepType",
    "EPOCH",
    "FavorBalanceGroup",
    "HistoryGroup",
    "LedgerEntry",
    "PaymentDisplayStep",
    "PaymentEvent",
    "PaymentSplit",
    "PaymentSplitGroup",
    "PaymentVisualization",
    "RejectedRecord",
    "SaleEvent",
    "TransactionEvent",
    "TransactionGroup",
    "TransactionType",
    "TransitionType",
    "ZeroBalanceGroup",
    "ZeroBalanceTransition",
    "calculate_sale_total",
    "coerce_timestamp",
    "signed_total",
    "to_millis",
    "transaction_event_adapter",
]
