"""
Chat Command Parser

Turns one line of free text into an Intent. Matching is
case-insensitive on the stripped text.

DESIGN DECISION: Intent detection is an ordered list of rules and the
first match wins. Several rules can match the same sentence
("totaal in Aldi deze maand" is both a store and a month question),
so the order below is part of the contract:

1. add        - starts with 'voeg toe ' / 'add '
2. by store   - 'totaal in ', 'totaal bij ', 'total in ', 'total at '
3. per store  - 'totaal per winkel', 'total per store', 'per winkel totaal'
4. week       - 'totaal deze week', 'total this week', exactly 'totaal week'
5. month      - 'totaal deze maand', 'totaal maand', 'total this month'
6. plain      - exactly 'totaal'/'total', or 'totaal' without week/maand
7. otherwise  - unrecognized

The parser never raises and keeps no state between calls.
"""

from typing import Callable, NamedTuple, Optional

from boodschappen.models.grocery import DEFAULT_STORE
from boodschappen.models.intent import (
    AddItemIntent,
    Intent,
    TotalQueryIntent,
    TotalScope,
    UnrecognizedIntent,
    UnrecognizedReason,
)
from boodschappen.money import split_total
from boodschappen.parsing.numbers import (
    find_price,
    find_separator,
    first_number,
    normalize_currency_marks,
)
from boodschappen.parsing.stores import extract_store_name


ADD_PREFIXES = ("voeg toe ", "add ")
STORE_TOTAL_MARKERS = ("totaal in ", "totaal bij ", "total in ", "total at ")
ALL_STORES_MARKERS = ("totaal per winkel", "total per store", "per winkel totaal")
WEEK_MARKERS = ("totaal deze week", "total this week")
MONTH_MARKERS = ("totaal deze maand", "totaal maand", "total this month")
EACH_MARKERS = (" elk ", " per stuk ", " each ")
UNIT_WORDS = {"stuks", "stuk", "x", "×"}


class DispatchRule(NamedTuple):
    """One step of the intent cascade."""
    name: str
    matches: Callable[[str], bool]
    build: Callable[[str, str], Intent]


def _contains_any(text: str, markers: tuple[str, ...]) -> bool:
    return any(marker in text for marker in markers)


def is_add_command(lower: str) -> bool:
    return lower.startswith(ADD_PREFIXES)


def is_store_total(lower: str) -> bool:
    return _contains_any(lower, STORE_TOTAL_MARKERS)


def is_all_stores_total(lower: str) -> bool:
    return _contains_any(lower, ALL_STORES_MARKERS)


def is_week_total(lower: str) -> bool:
    return _contains_any(lower, WEEK_MARKERS) or lower == "totaal week"


def is_month_total(lower: str) -> bool:
    return _contains_any(lower, MONTH_MARKERS) or lower == "totaal maand"


def is_plain_total(lower: str) -> bool:
    if lower in ("totaal", "total"):
        return True
    return "totaal" in lower and "week" not in lower and "maand" not in lower


def _clean_item_name(raw: str) -> str:
    """Drop unit words ('stuks', 'x', ...) around the item name."""
    words = raw.replace("×", " × ").split()
    while words and words[-1].lower() in UNIT_WORDS:
        words.pop()
    while words and words[0].lower() in UNIT_WORDS:
        words.pop(0)
    return " ".join(words)


def parse_add_command(text: str) -> Optional[AddItemIntent]:
    """
    Read 'voeg toe <qty> <name> voor [elk] <price> [euro] [in|bij <store>]'.

    - 'voor 10 euro' is a total price, split over the quantity
      (divided by max(qty, 1) so a zero quantity does not divide by zero)
    - 'voor elk 5 euro' / 'per stuk' / 'each' is a price per unit

    Returns:
        The intent, or None when quantity, price or name is missing
    """
    original = normalize_currency_marks(text.strip())
    lower = original.lower()
    # Only slice names out of the original when offsets line up
    source = original if len(original) == len(lower) else lower

    quantity_token = first_number(lower)
    if quantity_token is None:
        return None
    price_token = find_price(lower)
    if price_token is None:
        return None

    quantity = quantity_token.value
    if _contains_any(f" {lower} ", EACH_MARKERS):
        unit_price = price_token.value
    else:
        unit_price = split_total(price_token.value, quantity)

    separator = find_separator(lower)
    if separator is None or separator[0] <= quantity_token.end:
        return None
    name = _clean_item_name(source[quantity_token.end:separator[0]])
    if not name:
        return None

    store = extract_store_name(lower) or DEFAULT_STORE

    return AddItemIntent(
        name=name,
        quantity=quantity,
        unit_price=unit_price,
        store=store,
    )


def _build_add(original: str, lower: str) -> Intent:
    intent = parse_add_command(original)
    if intent is None:
        return UnrecognizedIntent(reason=UnrecognizedReason.ADD_SYNTAX_INVALID)
    return intent


def _build_store_total(original: str, lower: str) -> Intent:
    store = extract_store_name(lower)
    if not store:
        return UnrecognizedIntent(reason=UnrecognizedReason.STORE_NAME_MISSING)
    return TotalQueryIntent(scope=TotalScope.BY_STORE, store=store)


def _scope_builder(scope: TotalScope) -> Callable[[str, str], Intent]:
    def build(original: str, lower: str) -> Intent:
        return TotalQueryIntent(scope=scope)
    return build


DISPATCH_RULES: tuple[DispatchRule, ...] = (
    DispatchRule("add_item", is_add_command, _build_add),
    DispatchRule("store_total", is_store_total, _build_store_total),
    DispatchRule(
        "all_stores_total",
        is_all_stores_total,
        _scope_builder(TotalScope.ALL_STORES_BREAKDOWN),
    ),
    DispatchRule("week_total", is_week_total, _scope_builder(TotalScope.THIS_WEEK)),
    DispatchRule("month_total", is_month_total, _scope_builder(TotalScope.THIS_MONTH)),
    DispatchRule("plain_total", is_plain_total, _scope_builder(TotalScope.CURRENT_VIEW)),
)


class CommandParser:
    """
    Parses chat commands into intents.

    Stateless; one instance can be shared by every caller.
    """

    def __init__(self, rules: tuple[DispatchRule, ...] = DISPATCH_RULES):
        self._rules = rules

    def dispatch(self, text: str) -> tuple[Optional[str], Intent]:
        """
        Parse `text` and report which rule handled it.

        Returns:
            (rule name, intent); the name is None when no rule matched
            or the text was empty
        """
        original = (text or "").strip()
        if not original:
            return None, UnrecognizedIntent(reason=UnrecognizedReason.EMPTY_INPUT)

        lower = original.lower()
        for rule in self._rules:
            if rule.matches(lower):
                return rule.name, rule.build(original, lower)
        return None, UnrecognizedIntent(reason=UnrecognizedReason.GENERIC)

    def parse(self, text: str) -> Intent:
        return self.dispatch(text)[1]
