"""Event file ingestion adapters."""

from pathlib import Path

from fiado.exceptions import EventFileError
from fiado.ingestion.base import BaseAdapter, ImportResult
from fiado.ingestion.csv_events import CSVEventAdapter
from fiado.ingestion.json_events import JSONEventAdapter

_ADAPTERS: dict[str, type[BaseAdapter]] = {
    ".json": JSONEventAdapter,
    ".csv": CSVEventAdapter,
}


def adapter_for(file_path: Path) -> BaseAdapter:
    """Pick the adapter for a file by its extension."""
    adapter_cls = _ADAPTERS.get(file_path.suffix.lower())
    if adapter_cls is None:
        raise EventFileError(str(file_path), f"unsupported file type '{file_path.suffix}' (use .json or .csv)")
    return adapter_cls()


__all__ = [
    "BaseAdapter",
    "CSVEventAdapter",
    "ImportResult",
    "JSONEventAdapter",
    "adapter_for",
]
