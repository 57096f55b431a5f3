"""CSV adapter: one event per row, camelCase column headers."""

import csv
from pathlib import Path

from fiado.exceptions import EventFileError
from fiado.ingestion.base import BaseAdapter, ImportResult

_REQUIRED_COLUMNS = {"id", "tipo"}
_TIMESTAMP_COLUMNS = {"fecha", "creado", "editado"}
_TRUE_VALUES = {"true", "1", "si", "sí", "yes", "y"}
_FALSE_VALUES = {"false", "0", "no", "n"}


def _parse_bool(value: str, row_number: int, file_path: Path) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise EventFileError(str(file_path), f"row {row_number}: invalid borrado value {value!r}")


def _parse_timestamp_cell(value: str) -> str | int:
    """Digit-only cells are epoch milliseconds; anything else is left for ISO parsing."""
    stripped = value.strip()
    if stripped.isdigit():
        return int(stripped)
    return stripped


class CSVEventAdapter(BaseAdapter):
    """Reads spreadsheet exports of sales and payments.

    Empty cells are treated as absent, so a payment row may leave the sale
    columns blank and vice versa.
    """

    source = "csv"

    def parse(self, file_path: Path) -> ImportResult:
        if not file_path.exists():
            raise EventFileError(str(file_path), "file not found")

        text = file_path.read_text(encoding="utf-8-sig")
        reader = csv.DictReader(text.splitlines())
        columns = set(reader.fieldnames or [])
        missing = _REQUIRED_COLUMNS - columns
        if missing:
            raise EventFileError(str(file_path), f"missing columns: {', '.join(sorted(missing))}")

        records: list[dict] = []
        # Header is line 1
        for row_number, row in enumerate(reader, start=2):
            record: dict = {}
            for key, value in row.items():
                if key is None or value is None or not value.strip():
                    continue
                if key == "borrado":
                    record[key] = _parse_bool(value, row_number, file_path)
                elif key in _TIMESTAMP_COLUMNS:
                    record[key] = _parse_timestamp_cell(value)
                else:
                    record[key] = value.strip()
            if record:
                records.append(record)

        return ImportResult(source=self.source, file_path=file_path, records=records)
