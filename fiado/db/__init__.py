"""Ledger store: SQLite persistence for clients and events."""

from fiado.db.repository import LedgerRepository
from fiado.db.schema import create_schema
from fiado.db.sync import BalanceSync

__all__ = ["BalanceSync", "LedgerRepository", "create_schema"]
