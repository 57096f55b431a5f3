"""Consistency checks over a client's transaction events.

Findings are returned as messages, never raised; the caller decides whether
to show them.
"""

from fiado.engines.debt import DebtCalculator
from fiado.engines.tolerance import is_negative, is_zero
from fiado.models.ledger import ConsistencyReport
from fiado.models.transaction_event import SaleEvent


def validate_sale_total(sale: SaleEvent) -> bool:
    """True if the stored total matches quantity times unit price."""
    return is_zero(sale.total_venta - sale.expected_total)


class ConsistencyValidator:
    """Re-runs the ledger and reports integrity problems."""

    def __init__(self, calculator: DebtCalculator | None = None) -> None:
        self.calculator = calculator or DebtCalculator()

    def validate(self, events: object) -> ConsistencyReport:
        if not isinstance(events, (list, tuple)):
            return ConsistencyReport(
                is_valid=False,
                errors=[f"Expected a list of events, got {type(events).__name__}"],
            )

        errors: list[str] = []
        # Normalized once; the calculator passes typed events straight through
        normalized = self.calculator.normalizer.normalize(events)
        calculation = self.calculator.calculate(normalized.events)

        for entry in calculation.events:
            if is_negative(entry.running_total):
                errors.append(f"Negative debt detected at event {entry.id}: {entry.running_total}")

        # Soft-deleted sales are checked too
        for event in normalized.events:
            if isinstance(event, SaleEvent) and not validate_sale_total(event):
                errors.append(f"Sale total mismatch in event {event.id}")
        for rejected in normalized.rejected:
            errors.append(
                f"Malformed record at position {rejected.position}"
                f" (id={rejected.record_id}): {rejected.reason}"
            )

        return ConsistencyReport(is_valid=not errors, errors=errors)
