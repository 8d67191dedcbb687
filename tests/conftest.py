"""Shared fixtures for the Boodschappen tests."""

from datetime import datetime
from decimal import Decimal

import pytest

from boodschappen.accessors import CallbackAccessors
from boodschappen.interpreter import GroceryChatInterpreter
from boodschappen.ledger import Ledger
from boodschappen.models.grocery import GroceryItem
from boodschappen.orchestrator import LedgerHandlers
from boodschappen.services.storage import InMemoryLedgerStorage


class FakeClock:
    """A clock the test moves by hand."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 17, 12, 0))


@pytest.fixture
def ledger(clock):
    return Ledger(clock=clock)


@pytest.fixture
def storage():
    return InMemoryLedgerStorage()


@pytest.fixture
def interpreter(ledger):
    return GroceryChatInterpreter(accessors=LedgerHandlers(ledger))


@pytest.fixture
def make_item():
    """Factory for items with string-typed amounts."""

    def factory(name, quantity="1", unit_price="0", store="Algemeen", **kwargs):
        return GroceryItem(
            name=name,
            quantity=Decimal(quantity),
            unit_price=Decimal(unit_price),
            store=store,
            **kwargs,
        )

    return factory


@pytest.fixture
def static_accessors():
    """Factory for read-only accessors over a fixed item list.

    Added items are collected in `accessors.added`.
    """

    def factory(items, month_carry="0.00"):
        added = []
        accessors = CallbackAccessors(
            get_items=lambda: list(items),
            add_item=lambda name, qty, price, store: added.append((name, qty, price, store)),
            get_month_carry=lambda: Decimal(month_carry),
        )
        accessors.added = added
        return accessors

    return factory
