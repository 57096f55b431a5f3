"""Custom exceptions for Fiado.

The ledger engine itself never raises for bad data; these belong to the
adapters around it (event files, the SQLite store, the CLI).
"""


class FiadoError(Exception):
    """Base exception for Fiado errors."""


class DataValidationError(FiadoError):
    """Raised when input data fails validation."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error on '{field}': {message}")


class EventFileError(FiadoError):
    """Raised when an event file cannot be read or parsed."""

    def __init__(self, file_path: str, message: str):
        self.file_path = file_path
        super().__init__(f"Event file error for {file_path}: {message}")


class ClientNotFoundError(FiadoError):
    """Raised when a client id is not present in the ledger store."""

    def __init__(self, client_id: str):
        self.client_id = client_id
        super().__init__(f"Client not found: {client_id}")


class EventNotFoundError(FiadoError):
    """Raised when an event id is not present in the ledger store."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Event not found: {event_id}")
