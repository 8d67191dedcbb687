"""
Numeric token extraction from free text.

A number is a run of digits with at most one ',' or '.' followed by
more digits. Comma and dot are both read as the decimal point.
"""

import re
from decimal import Decimal
from typing import NamedTuple, Optional


_NUMBER_RE = re.compile(r"\b(\d+(?:[.,]\d+)?)")

PRICE_SEPARATORS = (" voor ", " for ")


class NumberToken(NamedTuple):
    """A number found in text, with its position in that text."""
    value: Decimal
    raw: str
    start: int
    end: int


def normalize_currency_marks(text: str) -> str:
    """Put spaces around '€' so '€10' and '10€' read as plain numbers."""
    return text.replace("€", " € ")


def parse_number(raw: str) -> Decimal:
    return Decimal(raw.replace(",", "."))


def first_number(text: str, offset: int = 0) -> Optional[NumberToken]:
    """First numeric token at or after `offset`."""
    match = _NUMBER_RE.search(text, offset)
    if not match:
        return None
    raw = match.group(1)
    return NumberToken(
        value=parse_number(raw),
        raw=raw,
        start=match.start(1),
        end=match.end(1),
    )


def find_separator(text: str) -> Optional[tuple[int, int]]:
    """
    Locate ' voor ' (or else ' for ').

    Returns:
        (start, end) of the first occurrence, or None
    """
    for separator in PRICE_SEPARATORS:
        index = text.find(separator)
        if index >= 0:
            return index, index + len(separator)
    return None


def find_price(text: str) -> Optional[NumberToken]:
    """
    The price in an add command.

    Prefers the first number after ' voor '/' for '. When nothing
    numeric follows the separator (or there is none), falls back to
    the first number anywhere, which may be the quantity itself.
    """
    separator = find_separator(text)
    if separator:
        token = first_number(text, separator[1])
        if token:
            return token
    return first_number(text)
