"""Base adapter interface for event file ingestion."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

from fiado.normalization.events import EventNormalizer


@dataclass
class ImportResult:
    """Bundles the raw event records read from one file."""

    source: str
    file_path: Path
    records: list[dict] = field(default_factory=list)


class BaseAdapter(ABC):
    """Abstract base class for all ingestion adapters."""

    source: str = ""

    @abstractmethod
    def parse(self, file_path: Path) -> ImportResult:
        """Parse a file and return its event records, untyped."""
        ...

    def validate(self, data: ImportResult) -> list[str]:
        """Validate parsed records. Returns a list of validation error messages."""
        errors: list[str] = []
        normalized = EventNormalizer().normalize(data.records)
        for rejected in normalized.rejected:
            errors.append(f"Record {rejected.position + 1} (id={rejected.record_id}): {rejected.reason}")
        for event in normalized.events:
            if not event.cliente_id:
                errors.append(f"Event {event.id} has no clienteId")
        return errors
