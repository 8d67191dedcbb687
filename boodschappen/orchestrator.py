"""
Host Wiring for Boodschappen

This module plays the part of the surrounding application:
- loads the ledger state from storage (fresh state if none/unreadable)
- persists the whole state after every mutation
- runs the lazy month check on start-up (the "foreground" trigger)
- exposes the ledger to the chat through the accessor interface

DESIGN DECISION: A failed save is logged, not raised, so the user
still gets a reply. The state in memory stays authoritative and the
next mutation writes it again.
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Sequence

from boodschappen.accessors import LedgerAccessors
from boodschappen.audit import AuditLogger, configure_logging
from boodschappen.config import Settings, get_settings
from boodschappen.interpreter import GroceryChatInterpreter
from boodschappen.ledger import Ledger
from boodschappen.models.grocery import DEFAULT_STORES, GroceryItem, LedgerState, Preferences
from boodschappen.money import currency_symbol, month_key
from boodschappen.services.storage import (
    CorruptStateError,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    StorageError,
)


class LedgerHandlers(LedgerAccessors):
    """Chat accessors backed by a Ledger and its preferences."""

    def __init__(self, ledger: Ledger):
        self._ledger = ledger

    def get_items(self) -> Sequence[GroceryItem]:
        return self._ledger.items

    def add_item(self, name: str, quantity: Decimal, unit_price: Decimal, store: str) -> None:
        self._ledger.add_item(name, quantity, unit_price, store)

    def get_month_carry(self) -> Decimal:
        return self._ledger.month_carry

    def currency_symbol(self) -> str:
        return currency_symbol(self.currency_code())

    def currency_code(self) -> str:
        return self._ledger.state.preferences.currency


def create_storage(settings: Optional[Settings] = None) -> LedgerStorageInterface:
    """Build the storage backend named in the settings."""
    storage_settings = (settings or get_settings()).storage
    if storage_settings.backend == "memory":
        return InMemoryLedgerStorage()
    return JsonFileLedgerStorage(
        storage_settings.resolved_state_path,
        write_attempts=storage_settings.write_attempts,
    )


def load_state(
    storage: LedgerStorageInterface,
    default_currency: str = "EUR",
    now: Optional[datetime] = None,
    audit_logger: Optional[AuditLogger] = None,
) -> LedgerState:
    """
    Load the saved state, or start fresh.

    An unreadable state is logged and replaced by a fresh one.
    """
    try:
        state = storage.load()
    except CorruptStateError as e:
        if audit_logger:
            audit_logger.log_error("CorruptStateError", str(e))
        state = None

    if state is None:
        state = LedgerState(
            month=month_key(now or datetime.now()),
            preferences=Preferences(currency=default_currency),
        )
    if not state.preferences.stores:
        state.preferences.stores = list(DEFAULT_STORES)
    return state


def persisting_listener(
    storage: LedgerStorageInterface,
    audit_logger: Optional[AuditLogger] = None,
) -> Callable[[LedgerState], None]:
    """Ledger on_change hook that writes the full state."""

    def persist(state: LedgerState) -> None:
        try:
            storage.save(state)
        except StorageError as e:
            if audit_logger:
                audit_logger.log_storage_error(str(e))
            return
        if audit_logger:
            audit_logger.log_state_saved(len(state.items), state.month)

    return persist


def create_app_components(
    storage: Optional[LedgerStorageInterface] = None,
    clock: Callable[[], datetime] = datetime.now,
    settings: Optional[Settings] = None,
) -> tuple[Ledger, GroceryChatInterpreter, LedgerStorageInterface]:
    """
    Factory function to create all application components.

    Args:
        storage: Storage to use; built from settings when omitted
        clock: Source of "now" for month bookkeeping
        settings: Settings to use; the cached settings when omitted

    Returns:
        (ledger, interpreter, storage)
    """
    settings = settings or get_settings()
    configure_logging(settings.app.log_level)
    audit_logger = AuditLogger()

    storage = storage or create_storage(settings)
    state = load_state(
        storage,
        default_currency=settings.chat.default_currency,
        now=clock(),
        audit_logger=audit_logger,
    )

    ledger = Ledger(
        state=state,
        clock=clock,
        on_change=persisting_listener(storage, audit_logger),
        audit_logger=audit_logger,
    )
    ledger.ensure_current_month()

    interpreter = GroceryChatInterpreter(
        accessors=LedgerHandlers(ledger),
        audit_logger=audit_logger,
    )

    return ledger, interpreter, storage
