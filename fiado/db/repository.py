"""Data access layer for the ledger store."""

import json
import sqlite3
import threading
from datetime import datetime
from decimal import Decimal

from fiado.exceptions import ClientNotFoundError, EventNotFoundError
from fiado.models.client import Client
from fiado.models.ledger import ClientBalance
from fiado.models.transaction_event import PaymentEvent, SaleEvent


class LedgerRepository:
    """CRUD operations for clients and their transaction events.

    Events are stored whole as JSON (wire keys) so that a later read hands
    the ledger engine exactly what was imported.

    One connection may be used from several threads: every statement and its
    commit run under a connection-level lock.
    """

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn
        self._conn_lock = threading.RLock()

    # --- Clients ---

    def upsert_client(self, client_id: str, nombre: str | None = None) -> None:
        """Create the client if missing; rename it when ``nombre`` is given."""
        with self._conn_lock:
            self.conn.execute(
                """INSERT INTO clients (id, nombre) VALUES (?, ?)
                   ON CONFLICT(id) DO UPDATE SET
                       nombre = COALESCE(?, clients.nombre),
                       actualizado = datetime('now')""",
                (client_id, nombre or client_id, nombre),
            )
            self.conn.commit()

    def get_client(self, client_id: str) -> Client:
        with self._conn_lock:
            row = self.conn.execute(
                "SELECT id, nombre, deuda_actual, ultima_transaccion FROM clients WHERE id = ?",
                (client_id,),
            ).fetchone()
        if row is None:
            raise ClientNotFoundError(client_id)
        return self._client_from_row(row)

    def list_clients(self) -> list[Client]:
        with self._conn_lock:
            rows = self.conn.execute(
                "SELECT id, nombre, deuda_actual, ultima_transaccion FROM clients ORDER BY nombre"
            ).fetchall()
        return [self._client_from_row(row) for row in rows]

    def update_client_balance(self, client_id: str, balance: ClientBalance) -> None:
        """Persist the recalculated balance fields on a client."""
        with self._conn_lock:
            cursor = self.conn.execute(
                """UPDATE clients
                   SET deuda_actual = ?, ultima_transaccion = ?, actualizado = datetime('now')
                   WHERE id = ?""",
                (
                    str(balance.deuda_actual),
                    balance.ultima_transaccion.isoformat() if balance.ultima_transaccion else None,
                    client_id,
                ),
            )
            if cursor.rowcount == 0:
                self.conn.rollback()
                raise ClientNotFoundError(client_id)
            self.conn.commit()

    # --- Transaction events ---

    def save_event(self, event: SaleEvent | PaymentEvent) -> str:
        """Insert or replace an event by id. Returns the event ID."""
        with self._conn_lock:
            self._write_event(event)
            self.conn.commit()
        return event.id

    def save_events(self, events: list[SaleEvent | PaymentEvent]) -> int:
        """Insert or replace a batch of events in one transaction. Returns the count."""
        with self._conn_lock:
            for event in events:
                self._write_event(event)
            self.conn.commit()
        return len(events)

    def get_client_events(self, client_id: str, include_deleted: bool = True) -> list[dict]:
        """Stored event records for a client, as wire-format dicts."""
        query = "SELECT payload FROM transaction_events WHERE cliente_id = ?"
        if not include_deleted:
            query += " AND borrado = 0"
        with self._conn_lock:
            rows = self.conn.execute(query + " ORDER BY rowid", (client_id,)).fetchall()
        return [json.loads(row[0]) for row in rows]

    def soft_delete_event(self, event_id: str) -> str:
        """Mark an event as deleted. Returns the owning client ID."""
        with self._conn_lock:
            row = self.conn.execute(
                "SELECT cliente_id, payload FROM transaction_events WHERE id = ?", (event_id,)
            ).fetchone()
            if row is None:
                raise EventNotFoundError(event_id)
            payload = json.loads(row[1])
            payload["borrado"] = True
            self.conn.execute(
                "UPDATE transaction_events SET borrado = 1, payload = ? WHERE id = ?",
                (json.dumps(payload), event_id),
            )
            self.conn.commit()
        return row[0]

    def _write_event(self, event: SaleEvent | PaymentEvent) -> None:
        if not event.cliente_id:
            raise ValueError(f"Event {event.id} has no clienteId")
        self.conn.execute(
            "INSERT OR IGNORE INTO clients (id, nombre) VALUES (?, ?)",
            (event.cliente_id, event.cliente_id),
        )
        self.conn.execute(
            """INSERT OR REPLACE INTO transaction_events
               (id, cliente_id, tipo, fecha, borrado, payload)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                event.id,
                event.cliente_id,
                event.tipo,
                event.fecha.isoformat(),
                int(event.borrado),
                event.model_dump_json(by_alias=True),
            ),
        )

    @staticmethod
    def _client_from_row(row: tuple) -> Client:
        return Client(
            id=row[0],
            nombre=row[1],
            deuda_actual=Decimal(row[2]),
            ultima_transaccion=datetime.fromisoformat(row[3]) if row[3] else None,
        )
