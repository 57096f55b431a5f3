"""Event normalization: raw records to typed, time-canonical events."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime

from pydantic import ValidationError

from fiado.models.enums import TransactionType
from fiado.models.ledger import RejectedRecord
from fiado.models.timestamps import coerce_timestamp
from fiado.models.transaction_event import PaymentEvent, SaleEvent, transaction_event_adapter

logger = logging.getLogger(__name__)


@dataclass
class NormalizationResult:
    """Events that parsed, in input order, plus the records that did not."""

    events: list[SaleEvent | PaymentEvent] = field(default_factory=list)
    rejected: list[RejectedRecord] = field(default_factory=list)


class EventNormalizer:
    """Turns event-like records into SaleEvent/PaymentEvent models.

    Timestamps are coerced by the models themselves; this class decides what
    to do with records that cannot become events at all. Such records are
    reported, never raised, because event lists come from external storage.
    """

    def normalize(self, raw_events: Iterable[object]) -> NormalizationResult:
        result = NormalizationResult()
        for position, record in enumerate(raw_events):
            if isinstance(record, (SaleEvent, PaymentEvent)):
                result.events.append(record)
                continue
            if not isinstance(record, Mapping):
                result.rejected.append(
                    RejectedRecord(
                        position=position,
                        reason=f"unsupported record type {type(record).__name__}",
                    )
                )
                continue
            try:
                result.events.append(transaction_event_adapter.validate_python(dict(record)))
            except ValidationError as exc:
                result.rejected.append(
                    RejectedRecord(
                        position=position,
                        record_id=_record_id(record),
                        reason=_summarize(exc),
                    )
                )

        for rejected in result.rejected:
            logger.warning(
                "Skipping malformed event record at position %d (id=%s): %s",
                rejected.position,
                rejected.record_id,
                rejected.reason,
            )
        return result


def _record_id(record: Mapping) -> str | None:
    value = record.get("id")
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value)


def _summarize(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(p) for p in error["loc"]) or "record"
        parts.append(f"{location}: {error['msg']}")
    return "; ".join(parts)


# --- Filtering and ordering helpers ---


def filter_active_events(events: list[SaleEvent | PaymentEvent]) -> list[SaleEvent | PaymentEvent]:
    """Drop soft-deleted events."""
    return [event for event in events if not event.borrado]


def filter_events_by_type(
    events: list[SaleEvent | PaymentEvent], tipo: TransactionType
) -> list[SaleEvent | PaymentEvent]:
    return [event for event in events if event.tipo == tipo]


def filter_events_by_date_range(
    events: list[SaleEvent | PaymentEvent], start: datetime, end: datetime
) -> list[SaleEvent | PaymentEvent]:
    """Events whose ``fecha`` falls within [start, end], inclusive."""
    start, end = coerce_timestamp(start), coerce_timestamp(end)
    return [event for event in events if start <= event.fecha <= end]


def sort_events_by_date(
    events: list[SaleEvent | PaymentEvent], ascending: bool = False
) -> list[SaleEvent | PaymentEvent]:
    """Sort by event time, newest first unless ``ascending``. Ties keep input order."""
    return sorted(events, key=lambda event: event.fecha, reverse=not ascending)
