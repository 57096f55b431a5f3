"""Typer CLI interface for Fiado."""

import json
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import NoReturn

import typer

from fiado.exceptions import DataValidationError, FiadoError

BANNER = r"""
   _________________
  |  LIBRETA FIADO  |
  |-----------------|
  | venta    + $300 |
  | pago     - $150 |
  |-----------------|
  | debe       $150 |
  |_________________|
"""

DEFAULT_DB = Path.home() / ".fiado" / "fiado.db"

app = typer.Typer(
    name="fiado",
    help="Fiado: client debt ledger for sales on credit.",
)


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log engine details to stderr"),
) -> None:
    """Fiado: client debt ledger for sales on credit."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if ctx.invoked_subcommand is None:
        typer.echo(BANNER)
        raise typer.Exit()


def _fail(exc: Exception) -> NoReturn:
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(1)


def _load_records(file: Path, client: str | None) -> list[dict]:
    """Read raw event records from a JSON/CSV file, optionally for one client."""
    from fiado.ingestion import adapter_for

    result = adapter_for(file).parse(file)
    if client is None:
        return result.records
    return [r for r in result.records if str(r.get("clienteId", r.get("cliente_id"))) == client]


def _parse_amount(field: str, raw: str) -> Decimal:
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise DataValidationError(field, f"not a number: {raw!r}") from None
    if not value.is_finite():
        raise DataValidationError(field, f"not a finite amount: {raw!r}")
    return value


def _dump(data: object) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


@app.command()
def balance(
    file: Path = typer.Argument(..., help="Event file (.json or .csv)"),
    client: str | None = typer.Option(None, "--client", "-c", help="Only events of this clienteId"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Compute the current debt and favor balance for a list of events."""
    from fiado.engines.debt import DebtCalculator
    from fiado.reports.formatting import format_currency, format_datetime

    try:
        records = _load_records(file, client)
    except FiadoError as exc:
        _fail(exc)

    calculation = DebtCalculator().calculate(records)

    if json_output:
        _dump(
            {
                "totalDebt": str(calculation.total_debt),
                "favorBalance": str(calculation.favor_balance),
                "deudaActual": str(calculation.net_balance),
                "events": len(calculation.events),
                "zeroBalancePoints": calculation.zero_balance_points,
            }
        )
        return

    typer.echo(f"Events:         {len(calculation.events)}")
    typer.echo(f"Total debt:     {format_currency(calculation.total_debt)}")
    typer.echo(f"Favor balance:  {format_currency(calculation.favor_balance)}")
    last = calculation.last_transaction_at
    if last is not None:
        typer.echo(f"Last movement:  {format_datetime(last)}")


@app.command()
def history(
    file: Path = typer.Argument(..., help="Event file (.json or .csv)"),
    client: str | None = typer.Option(None, "--client", "-c", help="Only events of this clienteId"),
    detailed: bool = typer.Option(
        False,
        "--detailed",
        "-d",
        help="Split every overpaying payment, not only the one that crossed zero",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output display groups as JSON"),
) -> None:
    """Show a client's history newest first, with zero-balance and favor markers."""
    from pydantic import TypeAdapter

    from fiado.engines.debt import DebtCalculator
    from fiado.engines.history import DetailedHistoryFormatter, SummaryHistoryFormatter
    from fiado.models.history import HistoryGroup
    from fiado.reports.statement import StatementGenerator

    try:
        records = _load_records(file, client)
    except FiadoError as exc:
        _fail(exc)

    calculation = DebtCalculator().calculate(records)
    formatter = DetailedHistoryFormatter() if detailed else SummaryHistoryFormatter()
    groups = formatter.format(calculation)

    if json_output:
        adapter = TypeAdapter(list[HistoryGroup])
        _dump(adapter.dump_python(groups, mode="json", by_alias=True))
        return

    typer.echo(StatementGenerator().render(calculation, groups, client_name=client))


@app.command()
def validate(
    file: Path = typer.Argument(..., help="Event file (.json or .csv)"),
    client: str | None = typer.Option(None, "--client", "-c", help="Only events of this clienteId"),
) -> None:
    """Check events for negative balances, sale total mismatches and malformed records."""
    from fiado.engines.consistency import ConsistencyValidator

    try:
        records = _load_records(file, client)
    except FiadoError as exc:
        _fail(exc)

    report = ConsistencyValidator().validate(records)
    if report.is_valid:
        typer.echo(f"OK: {len(records)} record(s) consistent")
        return

    typer.echo(f"Found {len(report.errors)} problem(s):")
    for error in report.errors:
        typer.echo(f"  - {error}")
    raise typer.Exit(1)


@app.command()
def split(
    debt: str = typer.Argument(..., help="Debt outstanding before the payment"),
    payment: str = typer.Argument(..., help="Payment amount"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show how a payment divides between the debt and favor balance."""
    from fiado.engines.payment_split import PaymentSplitter
    from fiado.reports.formatting import format_currency

    try:
        current_debt = _parse_amount("debt", debt)
        amount = _parse_amount("payment", payment)
        if amount <= 0:
            raise DataValidationError("payment", "must be greater than zero")
    except FiadoError as exc:
        _fail(exc)

    visualization = PaymentSplitter().visualize(current_debt, amount)

    if json_output:
        _dump(visualization.model_dump(mode="json", by_alias=True))
        return

    result = visualization.split
    typer.echo(f"Applied to debt:  {format_currency(result.debt_payment)}")
    typer.echo(f"Favor balance:    {format_currency(result.favor_payment)}")
    typer.echo(f"Overpayment:      {'yes' if result.is_overpayment else 'no'}")
    typer.echo(f"Reaches zero:     {'yes' if result.zero_balance_reached else 'no'}")
    typer.echo("")
    for step in visualization.display_events:
        amount_text = f" {format_currency(step.amount)}" if step.amount is not None else ""
        typer.echo(f"  [{step.type.value}] {step.message}{amount_text}")


@app.command(name="import")
def import_cmd(
    file: Path = typer.Argument(..., help="Event file (.json or .csv)"),
    db: Path = typer.Option(
        DEFAULT_DB,
        "--db",
        envvar="FIADO_DB",
        help="Path to the SQLite database file",
    ),
) -> None:
    """Import events into the ledger store and update every affected client's balance.

    Events are keyed by id: importing the same file twice replaces the
    stored events instead of duplicating them.
    """
    from fiado.db.repository import LedgerRepository
    from fiado.db.schema import create_schema
    from fiado.db.sync import BalanceSync
    from fiado.ingestion import adapter_for
    from fiado.normalization.events import EventNormalizer
    from fiado.reports.formatting import format_currency

    try:
        adapter = adapter_for(file)
        result = adapter.parse(file)
    except FiadoError as exc:
        _fail(exc)

    errors = adapter.validate(result)
    if errors:
        typer.echo(f"Validation errors in {file.name}:", err=True)
        for error in errors:
            typer.echo(f"  - {error}", err=True)
        raise typer.Exit(1)

    events = EventNormalizer().normalize(result.records).events

    db.parent.mkdir(parents=True, exist_ok=True)
    conn = create_schema(db)
    try:
        repo = LedgerRepository(conn)
        repo.save_events(events)
        balance_sync = BalanceSync(repo)
        client_ids = sorted({event.cliente_id for event in events if event.cliente_id})
        balances = {client_id: balance_sync.recalculate(client_id) for client_id in client_ids}
    finally:
        conn.close()

    typer.echo(f"Imported {len(events)} event(s) from {file.name} into {db.name}")
    for client_id, client_balance in balances.items():
        typer.echo(f"  {client_id}: {format_currency(client_balance.deuda_actual)}")


@app.command()
def clients(
    db: Path = typer.Option(
        DEFAULT_DB,
        "--db",
        envvar="FIADO_DB",
        help="Path to the SQLite database file",
    ),
) -> None:
    """List stored clients with their balances."""
    from rich.console import Console
    from rich.table import Table

    from fiado.db.repository import LedgerRepository
    from fiado.db.schema import create_schema
    from fiado.reports.formatting import format_currency, time_since

    if not db.exists():
        typer.echo("Error: No database found. Import events first with `fiado import`.", err=True)
        raise typer.Exit(1)

    conn = create_schema(db)
    try:
        stored = LedgerRepository(conn).list_clients()
    finally:
        conn.close()

    table = Table(title="Clientes")
    table.add_column("Cliente")
    table.add_column("Nombre")
    table.add_column("Debe", justify="right")
    table.add_column("A favor", justify="right")
    table.add_column("Último movimiento")
    for client in stored:
        owed = client.deuda_actual if client.deuda_actual > 0 else Decimal("0")
        favor = -client.deuda_actual if client.has_favor_balance else Decimal("0")
        table.add_row(
            client.id,
            client.nombre,
            format_currency(owed),
            format_currency(favor),
            time_since(client.ultima_transaccion) if client.ultima_transaccion else "-",
        )
    Console().print(table)


@app.command()
def sync(
    db: Path = typer.Option(
        DEFAULT_DB,
        "--db",
        envvar="FIADO_DB",
        help="Path to the SQLite database file",
    ),
) -> None:
    """Recalculate every stored client's balance from their events."""
    from fiado.db.repository import LedgerRepository
    from fiado.db.schema import create_schema
    from fiado.db.sync import BalanceSync
    from fiado.reports.formatting import format_currency

    if not db.exists():
        typer.echo("Error: No database found. Import events first with `fiado import`.", err=True)
        raise typer.Exit(1)

    conn = create_schema(db)
    try:
        balances = BalanceSync(LedgerRepository(conn)).sync_all()
    finally:
        conn.close()

    typer.echo(f"Synced {len(balances)} client(s)")
    for client_id, client_balance in balances.items():
        typer.echo(f"  {client_id}: {format_currency(client_balance.deuda_actual)}")
