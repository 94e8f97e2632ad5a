"""Display formatting for amounts, dates and percentages (pt-BR conventions)."""

import datetime as dt
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union


def quantize_half_up(value: Decimal, places: int) -> Decimal:
    """
    Round half-up to a fixed number of decimal places.

    The working precision grows with the value, so very large amounts
    round instead of raising decimal.InvalidOperation.
    """
    value = Decimal(value)
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + places + 2)
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def format_currency(value: Decimal, symbol: str = "R$", signed: bool = False) -> str:
    """
    Format an amount as "R$ 1.234,56".

    Negative amounts get a leading minus ("-R$ 12,00"). With signed=True,
    non-negative amounts get a leading plus.
    """
    value = quantize_half_up(value, 2)
    sign = "-" if value < 0 else ("+" if signed else "")
    # Swap separators: 1,234.56 -> 1.234,56
    body = f"{value.copy_abs():,.2f}".translate(str.maketrans(",.", ".,"))
    return f"{sign}{symbol} {body}"


def format_date(value: Union[dt.date, str]) -> str:
    """Format a date (or ISO string) as dd/mm/yyyy."""
    if isinstance(value, str):
        value = dt.date.fromisoformat(value)
    return value.strftime("%d/%m/%Y")


def format_percentage(value: Decimal, places: int = 1, signed: bool = False) -> str:
    """Format a percentage with a decimal comma: 60,1%."""
    value = quantize_half_up(value, places)
    sign = "+" if signed and value >= 0 else ""
    return f"{sign}{value:.{places}f}%".replace(".", ",")
