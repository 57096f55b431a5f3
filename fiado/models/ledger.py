"""Derived ledger models: annotated entries, calculation results, payment splits.

None of these are persisted; they are recomputed from the events on demand.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from fiado.models.base import WireModel
from fiado.models.enums import DisplayStepType, TransactionType, TransitionType
from fiado.models.transaction_event import PaymentEvent, SaleEvent, TransactionEvent


class LedgerEntry(WireModel):
    """A transaction event annotated with the balance right after it."""

    event: TransactionEvent
    running_total: Decimal
    is_zero_balance: bool

    @property
    def id(self) -> str:
        return self.event.id

    @property
    def tipo(self) -> TransactionType:
        return TransactionType(self.event.tipo)

    @property
    def fecha(self) -> datetime:
        return self.event.fecha

    @property
    def is_payment(self) -> bool:
        return isinstance(self.event, PaymentEvent)

    @property
    def is_sale(self) -> bool:
        return isinstance(self.event, SaleEvent)

    @property
    def signed_amount(self) -> Decimal:
        return self.event.signed_amount


class DebtCalculation(WireModel):
    """Result of walking a client's events oldest-first."""

    total_debt: Decimal = Decimal("0")
    favor_balance: Decimal = Decimal("0")
    events: list[LedgerEntry] = Field(default_factory=list)
    zero_balance_points: list[int] = Field(default_factory=list)

    @property
    def net_balance(self) -> Decimal:
        """Signed balance: positive is owed by the client, negative is credit."""
        return self.total_debt - self.favor_balance

    @property
    def last_transaction_at(self) -> datetime | None:
        if not self.events:
            return None
        return max(entry.fecha for entry in self.events)


class ZeroBalanceTransition(WireModel):
    event_index: int
    previous_debt: Decimal
    new_debt: Decimal
    transition_type: TransitionType


class PaymentSplit(WireModel):
    """How a payment divides between existing debt and new favor balance."""

    debt_payment: Decimal
    favor_payment: Decimal
    is_overpayment: bool
    zero_balance_reached: bool


class PaymentDisplayStep(WireModel):
    type: DisplayStepType
    amount: Decimal | None = None
    message: str


class PaymentVisualization(WireModel):
    split: PaymentSplit
    display_events: list[PaymentDisplayStep]


class DebtImpact(WireModel):
    """Effect of adding a single event to a known balance."""

    new_debt: Decimal
    debt_change: Decimal
    reaches_zero: bool
    creates_overpayment: bool


class ClientBalance(WireModel):
    """What the store persists on the client after a recalculation."""

    deuda_actual: Decimal
    ultima_transaccion: datetime | None = None


class RejectedRecord(WireModel):
    """An input record the normalizer could not turn into an event."""

    position: int
    record_id: str | None = None
    reason: str


class ConsistencyReport(WireModel):
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
