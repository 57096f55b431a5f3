"""Per-client balance recalculation against the ledger store.

Every change to a client's events is followed by a read-recompute-write of
the client's balance. Two of those running at once for the same client can
both read the old events and the slower write wins, so recalculations are
serialized per client.
"""

import logging
import threading
import weakref

from fiado.db.repository import LedgerRepository
from fiado.engines.debt import DebtCalculator
from fiado.models.ledger import ClientBalance
from fiado.models.transaction_event import PaymentEvent, SaleEvent

logger = logging.getLogger(__name__)


class BalanceSync:
    """Keeps ``clients.deuda_actual`` and ``ultima_transaccion`` in step with the events."""

    def __init__(self, repo: LedgerRepository, calculator: DebtCalculator | None = None) -> None:
        self.repo = repo
        self.calculator = calculator or DebtCalculator()
        # A client's lock lives only while some caller holds a reference to it
        self._locks: weakref.WeakValueDictionary = weakref.WeakValueDictionary()
        self._registry_lock = threading.Lock()

    def _lock_for(self, client_id: str):
        with self._registry_lock:
            lock = self._locks.get(client_id)
            if lock is None:
                lock = threading.RLock()
                self._locks[client_id] = lock
            return lock

    def recalculate(self, client_id: str) -> ClientBalance:
        """Recompute and persist one client's balance from all their events."""
        with self._lock_for(client_id):
            events = self.repo.get_client_events(client_id)
            balance = self.calculator.recalculate(events)
            self.repo.update_client_balance(client_id, balance)
        logger.info("Client %s balance recalculated: %s", client_id, balance.deuda_actual)
        return balance

    def record_event(self, event: SaleEvent | PaymentEvent) -> ClientBalance:
        """Store a new or edited event and update its client's balance."""
        if not event.cliente_id:
            raise ValueError(f"Event {event.id} has no clienteId")
        with self._lock_for(event.cliente_id):
            self.repo.save_event(event)
            return self.recalculate(event.cliente_id)

    def delete_event(self, event_id: str) -> ClientBalance:
        """Soft-delete an event and update its client's balance."""
        client_id = self.repo.soft_delete_event(event_id)
        return self.recalculate(client_id)

    def sync_all(self) -> dict[str, ClientBalance]:
        """Recalculate every stored client. Returns balances by client id."""
        balances: dict[str, ClientBalance] = {}
        for client in self.repo.list_clients():
            balances[client.id] = self.recalculate(client.id)
        return balances
