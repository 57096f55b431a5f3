"""JSON adapter: a list of event records, or an object with an ``events`` list."""

import json
from pathlib import Path

from fiado.exceptions import EventFileError
from fiado.ingestion.base import BaseAdapter, ImportResult


class JSONEventAdapter(BaseAdapter):
    """Reads event records exported from the document store as JSON."""

    source = "json"

    def parse(self, file_path: Path) -> ImportResult:
        if not file_path.exists():
            raise EventFileError(str(file_path), "file not found")

        try:
            raw = json.loads(file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise EventFileError(str(file_path), f"invalid JSON ({exc.msg} at line {exc.lineno})") from exc

        if isinstance(raw, dict):
            raw = raw.get("events")
        if not isinstance(raw, list):
            raise EventFileError(str(file_path), "expected a list of events or an object with an 'events' list")

        records = [record for record in raw if isinstance(record, dict)]
        if len(records) != len(raw):
            raise EventFileError(str(file_path), "every event must be a JSON object")

        return ImportResult(source=self.source, file_path=file_path, records=records)
