"""
Money and quantity helpers.

All amounts are Decimal. Rounding happens at every step (line total,
each sum, each derived value) rather than once at the end, so results
match what the user sees on every intermediate screen.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation, localcontext
from typing import Iterable, Union

Number = Union[Decimal, int, float, str]

DEFAULT_PRECISION = 28
CENT = Decimal("0.01")
ZERO = Decimal("0.00")

# Currencies offered in the settings screen
CURRENCY_SYMBOLS: dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "CHF": "CHF",
    "SEK": "kr",
    "NOK": "kr",
    "DKK": "kr",
    "PLN": "zł",
}


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal without binary float artefacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise ValueError(f"Not a number: {value!r}") from e


def _exact_context(*values: Decimal, extra: int = 0):
    """
    A decimal context wide enough to add the values without rounding.

    Amounts have no upper bound, so the default 28 digits are not
    enough: quantize() raises once the result would not fit.
    """
    integer_digits = fraction_digits = 0
    for value in values:
        if not value.is_finite():
            continue
        integer_digits = max(integer_digits, value.adjusted() + 1)
        fraction_digits = max(fraction_digits, -value.as_tuple().exponent)
    precision = integer_digits + fraction_digits + extra + 2
    return localcontext(Context(prec=max(DEFAULT_PRECISION, precision)))


def round2(value: Number) -> Decimal:
    """Round to cents, half away from zero."""
    value = to_decimal(value)
    with _exact_context(value):
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def line_total(quantity: Number, unit_price: Number) -> Decimal:
    q, p = to_decimal(quantity), to_decimal(unit_price)
    digits = len(q.as_tuple().digits) + len(p.as_tuple().digits)
    with localcontext(Context(prec=max(DEFAULT_PRECISION, digits))):
        product = q * p
    return round2(product)


def split_total(total: Number, quantity: Number) -> Decimal:
    """
    Unit price for a total paid for `quantity` items.

    Divides by max(quantity, 1) so a zero quantity keeps the whole total.
    """
    total = to_decimal(total)
    divisor = max(to_decimal(quantity), Decimal(1))
    with _exact_context(total, extra=4):
        unit_price = total / divisor
    return round2(unit_price)


def sum_amounts(values: Iterable[Number]) -> Decimal:
    amounts = [to_decimal(v) for v in values]
    with _exact_context(*amounts, extra=len(str(len(amounts)))):
        total = sum(amounts, ZERO)
    return round2(total)

def format_money(amount: Number, symbol: str = "€", code: str = "EUR") -> str:
    """
    Render an amount the Flemish way: "€ 1.234,50".

    Falls back to the currency code when no symbol is known.
    """
    value = round2(amount)
    sign = "-" if value < 0 else ""
    whole, fraction = f"{value.copy_abs():,.2f}".split(".")
    whole = whole.replace(",", ".")
    prefix = symbol or code
    return f"{prefix} {sign}{whole},{fraction}"


def pretty_quantity(quantity: Number) -> str:
    """'2' for whole quantities, '1.50' otherwise."""
    q = to_decimal(quantity)
    if q == q.to_integral_value():
        return str(int(q))
    return f"{q:.2f}"


def currency_symbol(code: str) -> str:
    return CURRENCY_SYMBOLS.get(code.upper(), code.upper())


def month_key(moment: Union[date, datetime]) -> str:
    """Accounting month tag, e.g. '2025-09'."""
    return f"{moment.year:04d}-{moment.month:02d}"


def next_month_key(moment: Union[date, datetime]) -> str:
    if moment.month == 12:
        return f"{moment.year + 1:04d}-01"
    return f"{moment.year:04d}-{moment.month + 1:02d}"
