"""Report generation for Fiado."""

from fiado.reports.formatting import format_currency, format_date, format_datetime, time_since
from fiado.reports.statement import StatementGenerator

__all__ = [
    "StatementGenerator",
    "format_currency",
    "format_date",
    "format_datetime",
    "time_since",
]
