"""Display groups for a newest-first transaction history."""

from decimal import Decimal
from typing import Annotated, Literal

from pydantic import Field

from fiado.models.base import WireModel
from fiado.models.ledger import LedgerEntry

ZERO_BALANCE_MESSAGE = "cuenta en 0"
FAVOR_BALANCE_MESSAGE = "saldo a favor"


class TransactionGroup(WireModel):
    """A ledger entry shown as-is, or only partially when ``amount`` is set."""

    type: Literal["transaction"] = "transaction"
    entry: LedgerEntry
    amount: Decimal | None = None

    @property
    def signed_amount(self) -> Decimal:
        if self.amount is None:
            return self.entry.signed_amount
        return -self.amount if self.entry.is_payment else self.amount


class ZeroBalanceGroup(WireModel):
    type: Literal["zero-balance"] = "zero-balance"
    message: str = ZERO_BALANCE_MESSAGE

    @property
    def signed_amount(self) -> Decimal:
        return Decimal("0")


class FavorBalanceGroup(WireModel):
    """The part of a payment that became credit for the client."""

    type: Literal["favor-balance"] = "favor-balance"
    amount: Decimal
    message: str = FAVOR_BALANCE_MESSAGE

    @property
    def signed_amount(self) -> Decimal:
        return -self.amount


class PaymentSplitGroup(WireModel):
    """The debt-extinguishing part of a payment that crossed zero."""

    type: Literal["payment-split"] = "payment-split"
    entry: LedgerEntry
    amount: Decimal
    debt_portion: Decimal
    favor_portion: Decimal

    @property
    def signed_amount(self) -> Decimal:
        return -self.amount


HistoryGroup = Annotated[
    TransactionGroup | ZeroBalanceGroup | FavorBalanceGroup | PaymentSplitGroup,
    Field(discriminator="type"),
]


def signed_total(groups: list[HistoryGroup]) -> Decimal:
    """Net monetary movement of a formatted history (sales +, payments -)."""
    return sum((group.signed_amount for group in groups), Decimal("0"))
