"""Newest-first history formatting with zero-balance and overpayment groups.

Two strategies are kept side by side because they disagree on purpose:

* ``SummaryHistoryFormatter`` only splits payments that the transition
  detector reports as crossing zero. A payment made while the client already
  had credit, or any payment that does not flip the sign of the balance, is
  shown whole.
* ``DetailedHistoryFormatter`` re-splits every payment against the balance
  before it, so each overpayment in a long history gets its own groups.
"""

from abc import ABC, abstractmethod

from fiado.engines.payment_split import PaymentSplitter
from fiado.engines.tolerance import ZERO, is_zero
from fiado.engines.transitions import TransitionDetector
from fiado.models.enums import DisplayStepType, TransitionType
from fiado.models.history import (
    FavorBalanceGroup,
    HistoryGroup,
    PaymentSplitGroup,
    TransactionGroup,
    ZeroBalanceGroup,
)
from fiado.models.ledger import DebtCalculation


class BaseHistoryFormatter(ABC):
    """Abstract base class for history formatting strategies."""

    @abstractmethod
    def format(self, calculation: DebtCalculation) -> list[HistoryGroup]:
        """Return display groups, newest first."""
        ...


class SummaryHistoryFormatter(BaseHistoryFormatter):
    """Splits only the payments that carried the balance through zero."""

    def __init__(self, detector: TransitionDetector | None = None) -> None:
        self.detector = detector or TransitionDetector()

    def format(self, calculation: DebtCalculation) -> list[HistoryGroup]:
        entries = calculation.events
        crossings = {
            t.event_index: t
            for t in self.detector.detect(entries)
            if t.transition_type == TransitionType.THROUGH_ZERO
        }
        formatted: list[HistoryGroup] = []

        for index in range(len(entries) - 1, -1, -1):
            entry = entries[index]
            crossing = crossings.get(index)

            if entry.is_payment and crossing is not None:
                amount = entry.event.amount
                debt_portion = min(amount, crossing.previous_debt)
                favor_portion = amount - debt_portion

                if debt_portion > 0:
                    shown_at_zero = entry.model_copy(update={"running_total": ZERO, "is_zero_balance": True})
                    formatted.append(
                        PaymentSplitGroup(
                            entry=shown_at_zero,
                            amount=debt_portion,
                            debt_portion=debt_portion,
                            favor_portion=favor_portion,
                        )
                    )
                    formatted.append(ZeroBalanceGroup())
                if favor_portion > 0:
                    formatted.append(FavorBalanceGroup(amount=favor_portion))
                continue

            formatted.append(TransactionGroup(entry=entry))
            if entry.is_zero_balance:
                formatted.append(ZeroBalanceGroup())

        return formatted


class DetailedHistoryFormatter(BaseHistoryFormatter):
    """Re-splits every payment against the balance that preceded it."""

    def __init__(self, splitter: PaymentSplitter | None = None) -> None:
        self.splitter = splitter or PaymentSplitter()

    def format(self, calculation: DebtCalculation) -> list[HistoryGroup]:
        newest_first = list(reversed(calculation.events))
        formatted: list[HistoryGroup] = []

        for position, entry in enumerate(newest_first):
            if not entry.is_payment:
                formatted.append(TransactionGroup(entry=entry))
                continue

            # The chronologically previous entry is the next one newest-first
            older = newest_first[position + 1] if position + 1 < len(newest_first) else None
            previous_debt = older.running_total if older is not None else ZERO
            visualization = self.splitter.visualize(previous_debt, entry.event.amount)

            # Favor on top, then the separator, then the portion applied to debt
            for step in reversed(visualization.display_events):
                if step.type == DisplayStepType.PAYMENT:
                    balance_after = previous_debt - step.amount
                    shown = entry.model_copy(
                        update={"running_total": balance_after, "is_zero_balance": is_zero(balance_after)}
                    )
                    formatted.append(TransactionGroup(entry=shown, amount=step.amount))
                elif step.type == DisplayStepType.ZERO_SEPARATOR:
                    formatted.append(ZeroBalanceGroup(message=step.message))
                elif step.type == DisplayStepType.FAVOR:
                    formatted.append(FavorBalanceGroup(amount=step.amount, message=step.message))

        return formatted
