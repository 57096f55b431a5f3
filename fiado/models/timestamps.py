"""Canonical timestamps for transaction events.

Event times reach the ledger in several encodings depending on where the
record came from: live server timestamps, their JSON-serialized
``{seconds, nanoseconds}`` form, wall-clock datetimes, epoch milliseconds or
ISO-8601 strings written by the importers. Everything is coerced to a
timezone-aware UTC ``datetime``.

Unrecognized values become the epoch (1970-01-01 UTC) instead of raising, so a
record with a broken date sorts to the very start of the history.
"""

import logging
from datetime import date, datetime, time, timedelta, timezone
from typing import Annotated, Any

from pydantic import BeforeValidator

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _from_seconds(seconds: float, nanoseconds: float) -> datetime:
    return EPOCH + timedelta(seconds=seconds, microseconds=nanoseconds / 1000)


def _seconds_pair(value: Any) -> tuple[float, float] | None:
    """Extract (seconds, nanoseconds) from a mapping or timestamp-like object."""
    if isinstance(value, dict):
        for sec_key, ns_key in (("seconds", "nanoseconds"), ("_seconds", "_nanoseconds")):
            seconds, nanos = value.get(sec_key), value.get(ns_key)
            if _is_number(seconds) and _is_number(nanos):
                return seconds, nanos
        return None
    seconds = getattr(value, "seconds", None)
    nanos = getattr(value, "nanoseconds", None)
    if _is_number(seconds) and _is_number(nanos):
        return seconds, nanos
    return None


def coerce_timestamp(value: Any) -> datetime:
    """Convert any supported timestamp encoding to an aware UTC datetime."""
    if value is None or value == "":
        return EPOCH
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)

    try:
        pair = _seconds_pair(value)
        if pair is not None:
            return _from_seconds(*pair)
        if _is_number(value):
            return EPOCH + timedelta(milliseconds=value)
        if isinstance(value, str):
            text = value.strip()
            # Digit-only text is epoch milliseconds, as in the CSV importer
            if text.isdigit():
                return EPOCH + timedelta(milliseconds=int(text))
            return coerce_timestamp(datetime.fromisoformat(text))
    except (ValueError, OverflowError) as exc:
        logger.warning("Timestamp %r could not be converted (%s); using epoch 0", value, exc)
        return EPOCH

    logger.warning("Unrecognized timestamp encoding %r; using epoch 0", value)
    return EPOCH


def coerce_optional_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    return coerce_timestamp(value)


def to_millis(value: datetime) -> int:
    """Epoch milliseconds of a canonical timestamp."""
    return (value - EPOCH) // timedelta(milliseconds=1)


Timestamp = Annotated[datetime, BeforeValidator(coerce_timestamp)]
OptionalTimestamp = Annotated[datetime | None, BeforeValidator(coerce_optional_timestamp)]
