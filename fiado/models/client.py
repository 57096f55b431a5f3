"""Client record as kept by the ledger store."""

from datetime import datetime
from decimal import Decimal

from fiado.models.base import WireModel


class Client(WireModel):
    id: str
    nombre: str
    deuda_actual: Decimal = Decimal("0")
    ultima_transaccion: datetime | None = None

    @property
    def has_favor_balance(self) -> bool:
        return self.deuda_actual < 0
