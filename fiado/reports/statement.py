"""Client statement generator: a formatted history rendered as text."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from fiado.models.history import HistoryGroup, signed_total
from fiado.models.ledger import DebtCalculation, LedgerEntry
from fiado.models.transaction_event import SaleEvent
from fiado.reports.formatting import format_currency, format_date, format_datetime

TEMPLATE_DIR = Path(__file__).parent / "templates"


def describe_entry(entry: LedgerEntry) -> str:
    """One-line description of the event behind a ledger entry."""
    event = entry.event
    if isinstance(event, SaleEvent):
        return f"{event.producto} x{event.cantidad.normalize():f}"
    return "Pago recibido"


class StatementGenerator:
    """Generates a client's newest-first account statement."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)), trim_blocks=True, lstrip_blocks=True)
        self.env.filters["currency"] = format_currency
        self.env.filters["date"] = format_date
        self.env.filters["datetime"] = format_datetime
        self.env.filters["describe"] = describe_entry

    def render(
        self,
        calculation: DebtCalculation,
        groups: list[HistoryGroup],
        client_name: str | None = None,
    ) -> str:
        """Render the statement using the Jinja2 template."""
        template = self.env.get_template("statement.txt")
        return template.render(
            client_name=client_name,
            calculation=calculation,
            groups=groups,
            net_movement=signed_total(groups),
        )
