"""Sale and payment events: the tagged union the ledger is built from."""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Literal
from uuid import uuid4

from pydantic import BeforeValidator, ConfigDict, Field, TypeAdapter

from fiado.models.base import WireModel
from fiado.models.timestamps import EPOCH, OptionalTimestamp, Timestamp


def _id_to_str(value: object) -> object:
    """Ids are opaque: numeric ids from older exports are kept as their text."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return value


def _flag(value: object) -> object:
    # Stored records may carry null for an unset flag
    return False if value is None else value


EventId = Annotated[str, BeforeValidator(_id_to_str)]
OptionalEventId = Annotated[str | None, BeforeValidator(_id_to_str)]
Flag = Annotated[bool, BeforeValidator(_flag)]


class EventBase(WireModel):
    """Fields shared by every transaction event.

    Wire records use camelCase keys (``clienteId``); attributes are snake_case.
    Keys the ledger does not know about are kept as extras.
    """

    model_config = ConfigDict(extra="allow")

    id: EventId
    cliente_id: OptionalEventId = None
    fecha: Timestamp = EPOCH
    notas: str | None = None
    creado: Timestamp = EPOCH
    editado: OptionalTimestamp = None
    borrado: Flag = False


class SaleEvent(EventBase):
    tipo: Literal["venta"] = "venta"
    producto: str
    producto_color: str | None = None
    cantidad: Decimal = Field(gt=0)
    costo_unitario: Decimal = Field(ge=0)
    ganancia_unitaria: Decimal = Field(ge=0)
    total_venta: Decimal = Field(ge=0)

    @property
    def amount(self) -> Decimal:
        return self.total_venta

    @property
    def signed_amount(self) -> Decimal:
        """Effect on the client's balance: sales increase debt."""
        return self.total_venta

    @property
    def expected_total(self) -> Decimal:
        return calculate_sale_total(self.cantidad, self.costo_unitario, self.ganancia_unitaria)

    @classmethod
    def create(
        cls,
        cliente_id: str,
        producto: str,
        cantidad: Decimal,
        costo_unitario: Decimal,
        ganancia_unitaria: Decimal,
        fecha: datetime | None = None,
        producto_color: str | None = None,
        notas: str | None = None,
    ) -> "SaleEvent":
        """Build a new sale with its total computed from the unit prices."""
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid4()),
            cliente_id=cliente_id,
            fecha=fecha or now,
            creado=now,
            producto=producto,
            producto_color=producto_color,
            cantidad=cantidad,
            costo_unitario=costo_unitario,
            ganancia_unitaria=ganancia_unitaria,
            total_venta=calculate_sale_total(cantidad, costo_unitario, ganancia_unitaria),
            notas=notas,
        )


class PaymentEvent(EventBase):
    tipo: Literal["pago"] = "pago"
    monto_pago: Decimal = Field(gt=0)

    @property
    def amount(self) -> Decimal:
        return self.monto_pago

    @property
    def signed_amount(self) -> Decimal:
        """Effect on the client's balance: payments reduce debt."""
        return -self.monto_pago

    @classmethod
    def create(
        cls,
        cliente_id: str,
        monto_pago: Decimal,
        fecha: datetime | None = None,
        notas: str | None = None,
    ) -> "PaymentEvent":
        now = datetime.now(timezone.utc)
        return cls(
            id=str(uuid4()),
            cliente_id=cliente_id,
            fecha=fecha or now,
            creado=now,
            monto_pago=monto_pago,
            notas=notas,
        )


TransactionEvent = Annotated[SaleEvent | PaymentEvent, Field(discriminator="tipo")]

transaction_event_adapter: TypeAdapter[SaleEvent | PaymentEvent] = TypeAdapter(TransactionEvent)


def calculate_sale_total(cantidad: Decimal, costo_unitario: Decimal, ganancia_unitaria: Decimal) -> Decimal:
    """Sale total: quantity times unit price (cost plus profit)."""
    return _dec(cantidad) * (_dec(costo_unitario) + _dec(ganancia_unitaria))


def _dec(value: Decimal | int | float | str) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))
