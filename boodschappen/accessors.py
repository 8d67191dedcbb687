"""
Ledger Accessors

The capability interface the chat interpreter needs from its host.
It keeps the parser, formatter and interpreter free of storage and
settings concerns: any ledger that can list items, add one, report its
month carry and name its currency will do.
"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Callable, Sequence

from boodschappen.models.grocery import GroceryItem


class LedgerAccessors(ABC):
    """What the interpreter may read and do."""

    @abstractmethod
    def get_items(self) -> Sequence[GroceryItem]:
        """Snapshot of the live basket."""
        pass

    @abstractmethod
    def add_item(
        self,
        name: str,
        quantity: Decimal,
        unit_price: Decimal,
        store: str,
    ) -> None:
        pass

    @abstractmethod
    def get_month_carry(self) -> Decimal:
        """Total of the weeks already closed this month."""
        pass

    @abstractmethod
    def currency_symbol(self) -> str:
        """e.g. '€'"""
        pass

    @abstractmethod
    def currency_code(self) -> str:
        """ISO 4217 code, e.g. 'EUR'"""
        pass


class CallbackAccessors(LedgerAccessors):
    """Accessors assembled from plain callables."""

    def __init__(
        self,
        get_items: Callable[[], Sequence[GroceryItem]],
        add_item: Callable[[str, Decimal, Decimal, str], None],
        get_month_carry: Callable[[], Decimal],
        currency_symbol: Callable[[], str] = lambda: "€",
        currency_code: Callable[[], str] = lambda: "EUR",
    ):
        self._get_items = get_items
        self._add_item = add_item
        self._get_month_carry = get_month_carry
        self._currency_symbol = currency_symbol
        self._currency_code = currency_code

    def get_items(self) -> Sequence[GroceryItem]:
        return self._get_items()

    def add_item(self, name: str, quantity: Decimal, unit_price: Decimal, store: str) -> None:
        self._add_item(name, quantity, unit_price, store)

    def get_month_carry(self) -> Decimal:
        return self._get_month_carry()

    def currency_symbol(self) -> str:
        return self._currency_symbol()

    def currency_code(self) -> str:
        return self._currency_code()
