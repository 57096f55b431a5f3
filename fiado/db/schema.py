"""SQLite database schema definition."""

import sqlite3
from pathlib import Path

SCHEMA_VERSION = 1

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS schema_version (
    version INTEGER PRIMARY KEY,
    applied_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE TABLE IF NOT EXISTS clients (
    id TEXT PRIMARY KEY,
    nombre TEXT NOT NULL,
    deuda_actual TEXT NOT NULL DEFAULT '0',
    ultima_transaccion TEXT,
    creado TEXT NOT NULL DEFAULT (datetime('now')),
    actualizado TEXT
);

CREATE TABLE IF NOT EXISTS transaction_events (
    id TEXT PRIMARY KEY,
    cliente_id TEXT NOT NULL REFERENCES clients(id),
    tipo TEXT NOT NULL,
    fecha TEXT NOT NULL,
    borrado INTEGER NOT NULL DEFAULT 0,
    payload TEXT NOT NULL,
    imported_at TEXT NOT NULL DEFAULT (datetime('now'))
);

CREATE INDEX IF NOT EXISTS idx_transaction_events_cliente
    ON transaction_events (cliente_id, fecha);
"""


def create_schema(db_path: Path) -> sqlite3.Connection:
    """Create the database schema. Returns the connection.

    The connection may be shared between threads; LedgerRepository serializes
    its use.
    """
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA foreign_keys=ON")
    conn.executescript(SCHEMA_SQL)
    conn.execute(
        "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
        (SCHEMA_VERSION,),
    )
    conn.commit()
    return conn
