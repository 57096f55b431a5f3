"""Debt ledger accumulator.

Walks a client's sales and payments in chronological order and annotates
each with the running balance. The balance is signed internally: a negative
running total means the client has paid more than they owe (saldo a favor).
"""

import logging
from decimal import Decimal

from fiado.engines.tolerance import ZERO, as_decimal, is_negative, is_positive, is_zero
from fiado.models.ledger import ClientBalance, DebtCalculation, DebtImpact, LedgerEntry
from fiado.models.transaction_event import PaymentEvent, SaleEvent
from fiado.normalization.events import EventNormalizer, filter_active_events

logger = logging.getLogger(__name__)


class DebtCalculator:
    """Computes running balances, final debt and favor balance for one client."""

    def __init__(self, normalizer: EventNormalizer | None = None) -> None:
        self.normalizer = normalizer or EventNormalizer()

    def calculate(self, events: object) -> DebtCalculation:
        """Calculate the client's ledger from raw or typed events, in any order.

        Anything other than a list (or tuple) of records yields an empty,
        zero-debt result: callers pass data straight from storage.

        Returns:
            DebtCalculation with entries oldest-first.
        """
        if events is None:
            logger.warning("calculate called with no events; returning zero result")
            return DebtCalculation()
        if not isinstance(events, (list, tuple)):
            logger.warning(
                "calculate expected a list of events, got %s; returning zero result",
                type(events).__name__,
            )
            return DebtCalculation()

        normalized = self.normalizer.normalize(events)
        # sorted() is stable: events sharing a timestamp keep their input order
        ordered = sorted(filter_active_events(normalized.events), key=lambda e: e.fecha)

        running_total = ZERO
        entries: list[LedgerEntry] = []
        zero_balance_points: list[int] = []

        for index, event in enumerate(ordered):
            previous_total = running_total
            running_total += event.signed_amount
            zero_now = is_zero(running_total)

            entries.append(
                LedgerEntry(event=event, running_total=running_total, is_zero_balance=zero_now)
            )
            if zero_now or (is_positive(previous_total) and is_negative(running_total)):
                zero_balance_points.append(index)

        result = DebtCalculation(
            total_debt=max(ZERO, running_total),
            favor_balance=-running_total if running_total < 0 else ZERO,
            events=entries,
            zero_balance_points=zero_balance_points,
        )
        logger.debug(
            "Ledger computed: %d events (%d rejected), debt=%s favor=%s",
            len(entries),
            len(normalized.rejected),
            result.total_debt,
            result.favor_balance,
        )
        return result

    def recalculate(self, events: object) -> ClientBalance:
        """Balance fields the store persists on the client after any event change."""
        calculation = self.calculate(events)
        return ClientBalance(
            deuda_actual=calculation.net_balance,
            ultima_transaccion=calculation.last_transaction_at,
        )

    def impact(self, current_debt: Decimal | int | float | str, event: SaleEvent | PaymentEvent) -> DebtImpact:
        """Effect of adding one event on top of ``current_debt``."""
        current = as_decimal(current_debt)
        change = event.signed_amount
        new_debt = current + change
        return DebtImpact(
            new_debt=max(ZERO, new_debt),
            debt_change=change,
            reaches_zero=current > 0 and is_zero(new_debt),
            creates_overpayment=current > 0 and is_negative(new_debt),
        )
