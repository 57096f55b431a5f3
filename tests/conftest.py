"""Shared test fixtures for Fiado."""

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from fiado.models.transaction_event import PaymentEvent, SaleEvent

BASE_TIME = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)
BASE_MILLIS = int(BASE_TIME.timestamp() * 1000)
MINUTE_MS = 60_000


@pytest.fixture
def make_sale() -> Callable[..., dict]:
    """Factory for raw sale records, ``minutes`` after BASE_TIME."""

    def _make(event_id: str, total, minutes: int = 0, **overrides) -> dict:
        record = {
            "id": event_id,
            "clienteId": "cli-001",
            "tipo": "venta",
            "fecha": BASE_MILLIS + minutes * MINUTE_MS,
            "creado": BASE_MILLIS + minutes * MINUTE_MS,
            "borrado": False,
            "producto": "Pan casero",
            "cantidad": 1,
            "costoUnitario": total,
            "gananciaUnitaria": 0,
            "totalVenta": total,
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def make_payment() -> Callable[..., dict]:
    """Factory for raw payment records, ``minutes`` after BASE_TIME."""

    def _make(event_id: str, amount, minutes: int = 0, **overrides) -> dict:
        record = {
            "id": event_id,
            "clienteId": "cli-001",
            "tipo": "pago",
            "fecha": BASE_MILLIS + minutes * MINUTE_MS,
            "creado": BASE_MILLIS + minutes * MINUTE_MS,
            "borrado": False,
            "montoPago": amount,
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def sample_sale() -> SaleEvent:
    return SaleEvent(
        id="venta-001",
        cliente_id="cli-001",
        fecha=BASE_TIME,
        creado=BASE_TIME,
        producto="Docena de facturas",
        producto_color="#ffcc00",
        cantidad=Decimal("2"),
        costo_unitario=Decimal("1000"),
        ganancia_unitaria=Decimal("500"),
        total_venta=Decimal("3000"),
    )


@pytest.fixture
def sample_payment() -> PaymentEvent:
    return PaymentEvent(
        id="pago-001",
        cliente_id="cli-001",
        fecha=datetime(2024, 3, 2, 9, 30, tzinfo=timezone.utc),
        creado=datetime(2024, 3, 2, 9, 30, tzinfo=timezone.utc),
        monto_pago=Decimal("1500"),
    )


@pytest.fixture
def overpaid_history(make_sale, make_payment) -> list[dict]:
    """Sale of 300 then a payment of 500: 200 ends up as favor balance."""
    return [make_sale("v1", 300, minutes=0), make_payment("p1", 500, minutes=10)]
