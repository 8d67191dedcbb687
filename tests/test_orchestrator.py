"""Tests for the host wiring: load, persist, month check, chat."""

from datetime import datetime
from decimal import Decimal

import pytest

from boodschappen.config import get_settings
from boodschappen.models.grocery import DEFAULT_STORES, GroceryItem, LedgerState, Preferences
from boodschappen.orchestrator import (
    LedgerHandlers,
    create_app_components,
    create_storage,
    load_state,
    persisting_listener,
)
from boodschappen.services.storage import (
    CorruptStateError,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    StorageError,
)


class FailingStorage(InMemoryLedgerStorage):

    def save(self, state):
        raise StorageError("disk full")


class CorruptStorage(InMemoryLedgerStorage):

    def load(self):
        raise CorruptStateError("garbage")


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("BOODSCHAPPEN_STORAGE_STATE_PATH", str(tmp_path / "state.json"))
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class TestCreateAppComponents:

    def test_chat_mutations_are_persisted(self, storage, clock):
        ledger, interpreter, used = create_app_components(storage=storage, clock=clock)
        assert used is storage

        interpreter.respond("voeg toe 2 appels voor 10 euro in Aldi")

        saved = storage.load()
        assert [i.name for i in saved.items] == ["appels"]
        assert saved.month == "2026-10"

    def test_fresh_state_uses_default_currency(self, storage, clock, monkeypatch):
        monkeypatch.setenv("BOODSCHAPPEN_CHAT_DEFAULT_CURRENCY", "gbp")
        get_settings.cache_clear()

        ledger, interpreter, _ = create_app_components(storage=storage, clock=clock)

        assert ledger.state.preferences.currency == "GBP"
        assert interpreter.respond("totaal deze week") == "Totaal deze week: £ 0,00."

    def test_stale_state_is_rolled_over_on_start(self, clock):
        stale = LedgerState(
            month="2026-09",
            month_carry=Decimal("55.00"),
            items=[
                GroceryItem(name="melk", unit_price=Decimal("1.00")),
                GroceryItem(name="huur", unit_price=Decimal("700"), recurring=True),
            ],
        )
        storage = InMemoryLedgerStorage(stale)

        ledger, _, _ = create_app_components(storage=storage, clock=clock)

        assert storage.save_count == 1
        saved = storage.load()
        assert saved.month == "2026-10"
        assert saved.month_carry == Decimal("0.00")
        assert [i.name for i in saved.items] == ["huur"]

    def test_json_backend_from_settings(self, clock, tmp_path):
        ledger, _, storage = create_app_components(clock=clock)
        assert isinstance(storage, JsonFileLedgerStorage)

        ledger.add_item("brood", 1, "2.00")
        assert (tmp_path / "state.json").exists()

        reloaded, _, _ = create_app_components(clock=clock)
        assert [i.name for i in reloaded.items] == ["brood"]

    def test_failed_save_does_not_break_chat(self, clock):
        ledger, interpreter, _ = create_app_components(storage=FailingStorage(), clock=clock)
        reply = interpreter.respond("voeg toe 1 kaas voor 4 euro")
        assert reply.startswith("Toegevoegd: 1 × kaas in Algemeen.")
        assert len(ledger.items) == 1


class TestLoadState:

    def test_empty_storage_gives_fresh_state(self, storage):
        state = load_state(storage, default_currency="USD", now=datetime(2026, 3, 4))
        assert state.month == "2026-03"
        assert state.preferences.currency == "USD"
        assert state.items == []

    def test_corrupt_state_is_replaced(self):
        state = load_state(CorruptStorage(), now=datetime(2026, 3, 4))
        assert state.items == []

    def test_empty_store_list_is_restored(self):
        saved = LedgerState(month="2026-10", preferences=Preferences(stores=[]))
        state = load_state(InMemoryLedgerStorage(saved))
        assert state.preferences.stores == DEFAULT_STORES


class TestWiringHelpers:

    def test_create_storage_memory(self, monkeypatch):
        monkeypatch.setenv("BOODSCHAPPEN_STORAGE_BACKEND", "memory")
        get_settings.cache_clear()
        assert isinstance(create_storage(), InMemoryLedgerStorage)

    def test_persisting_listener_swallows_storage_errors(self):
        persist = persisting_listener(FailingStorage())
        persist(LedgerState(month="2026-10"))

    def test_ledger_handlers(self, ledger):
        handlers = LedgerHandlers(ledger)
        handlers.add_item("kaas", Decimal("1"), Decimal("4.00"), "Aldi")
        ledger.update_preferences(currency="CHF")

        assert [i.name for i in handlers.get_items()] == ["kaas"]
        assert handlers.get_month_carry() == Decimal("0.00")
        assert handlers.currency_code() == "CHF"
        assert handlers.currency_symbol() == "CHF"
