"""Normalization layer: raw event records to canonical events."""

from fiado.normalization.events import (
    EventNormalizer,
    NormalizationResult,
    filter_active_events,
    filter_events_by_date_range,
    filter_events_by_type,
    sort_events_by_date,
)

__all__ = [
    "EventNormalizer",
    "NormalizationResult",
    "filter_active_events",
    "filter_events_by_date_range",
    "filter_events_by_type",
    "sort_events_by_date",
]
