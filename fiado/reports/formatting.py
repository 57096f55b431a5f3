"""Display formatting for amounts and dates (es-AR conventions)."""

from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

_MONTHS = ["ene", "feb", "mar", "abr", "may", "jun", "jul", "ago", "sept", "oct", "nov", "dic"]


def format_currency(amount: Decimal | int | float) -> str:
    """Format an amount as pesos: ``$ 1.234,5`` (0 to 2 decimals)."""
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    integer, _, fraction = f"{abs(value):.2f}".partition(".")
    fraction = fraction.rstrip("0")

    groups = []
    while len(integer) > 3:
        groups.insert(0, integer[-3:])
        integer = integer[:-3]
    groups.insert(0, integer)

    text = ".".join(groups)
    if fraction:
        text += "," + fraction
    return f"{sign}$ {text}"


def format_date(value: datetime) -> str:
    """``5 ene 2024``"""
    return f"{value.day} {_MONTHS[value.month - 1]} {value.year}"


def format_datetime(value: datetime) -> str:
    """``5 ene 2024, 14:30``"""
    return f"{format_date(value)}, {value:%H:%M}"


def _plural(n: int, singular: str, plural: str) -> str:
    return f"{n} {singular if n == 1 else plural}"


def time_since(value: datetime, now: datetime | None = None) -> str:
    """Elapsed time in words: ``hace 3 días``, ``hace 2 meses y 4 días``, ``hace 1 año``.

    Months are 30 days and years 365, which is close enough for a list of clients.
    """
    now = now or datetime.now(timezone.utc)
    days = abs((now - value).days)

    if days < 30:
        return f"hace {_plural(days, 'día', 'días')}"
    if days < 365:
        months, rest = divmod(days, 30)
        text = f"hace {_plural(months, 'mes', 'meses')}"
        if rest:
            text += f" y {_plural(rest, 'día', 'días')}"
        return text
    years = days // 365
    months = (days % 365) // 30
    text = f"hace {_plural(years, 'año', 'años')}"
    if months:
        text += f" y {_plural(months, 'mes', 'meses')}"
    return text
