"""
Ledger State Machine

Owns the live basket, the active accounting month and the month carry
(the total of weeks already closed this month).

ROLLOVER RULES:
- close_week():  fold the basket total into month_carry, purge the basket
- close_month(): purge the basket, reset month_carry, open the next month
- clear_month(): like close_month() but stays in the calendar month
- Calendar month change: purge and reset lazily, on the next call

Recurring items survive every purge. month_carry only grows through
close_week(); it never contains the live basket.

Every public entry point runs the lazy month check first.
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Iterable, Optional

from boodschappen.audit import AuditLogger
from boodschappen.models.grocery import (
    ALL_STORES_FILTER,
    DEFAULT_STORE,
    DEFAULT_STORES,
    GroceryItem,
    LedgerState,
    Preferences,
)
from boodschappen.money import (
    Number,
    ZERO,
    month_key,
    next_month_key,
    sum_amounts,
    to_decimal,
)
from boodschappen.parsing.stores import canonical_store


StateListener = Callable[[LedgerState], None]


class Ledger:
    """
    The grocery ledger.

    Args:
        state: Loaded state, or None for a fresh ledger
        clock: Returns "now"; injected so tests control the calendar
        on_change: Called with the state after every mutation
        audit_logger: Receives one event per mutation
    """

    def __init__(
        self,
        state: Optional[LedgerState] = None,
        clock: Callable[[], datetime] = datetime.now,
        on_change: Optional[StateListener] = None,
        audit_logger: Optional[AuditLogger] = None,
    ):
        self._clock = clock
        self._state = state or LedgerState(month=month_key(clock()))
        self._on_change = on_change
        self._audit_logger = audit_logger

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def state(self) -> LedgerState:
        self.ensure_current_month()
        return self._state

    @property
    def items(self) -> list[GroceryItem]:
        """Snapshot of the live basket in insertion order."""
        self.ensure_current_month()
        return list(self._state.items)

    @property
    def month_key(self) -> str:
        self.ensure_current_month()
        return self._state.month

    @property
    def month_carry(self) -> Decimal:
        self.ensure_current_month()
        return self._state.month_carry

    @property
    def stores(self) -> list[str]:
        self.ensure_current_month()
        return list(self._state.preferences.stores)

    def get_item(self, item_id: str) -> Optional[GroceryItem]:
        self.ensure_current_month()
        for item in self._state.items:
            if item.id == item_id:
                return item
        return None

    # ------------------------------------------------------------------
    # Month bookkeeping
    # ------------------------------------------------------------------

    def ensure_current_month(self, now: Optional[datetime] = None) -> bool:
        """
        Roll over when the calendar month differs from the active month.

        A month picked by hand (close_month, set_month) is kept while
        the calendar is still in the month it was picked in. Idempotent
        within a month.

        Returns:
            True if a rollover happened
        """
        current = month_key(now or self._clock())
        previous = self._state.month
        if current == previous or current == self._state.month_chosen_in:
            return False

        purged = self._purge_non_recurring()
        self._state.month_carry = ZERO
        self._state.month = current
        self._state.month_chosen_in = None
        if self._audit_logger:
            self._audit_logger.log_month_rolled_over(previous, current, purged)
        self._changed()
        return True

    def close_week(self) -> Decimal:
        """
        Fold the basket into the month ("next week").

        Returns:
            The week total that was added to month_carry
        """
        self.ensure_current_month()
        week_total = sum_amounts(item.line_total for item in self._state.items)
        self._state.month_carry = sum_amounts([self._state.month_carry, week_total])
        self._purge_non_recurring()
        if self._audit_logger:
            self._audit_logger.log_week_closed(week_total, self._state.month_carry)
        self._changed()
        return week_total

    def close_month(self) -> str:
        """
        Start the following calendar month ("next month").

        Returns:
            The new month key
        """
        self.ensure_current_month()
        previous = self._state.month
        now = self._clock()
        self._purge_non_recurring()
        self._state.month_carry = ZERO
        self._state.month = next_month_key(now)
        self._state.month_chosen_in = month_key(now)
        if self._audit_logger:
            self._audit_logger.log_month_closed(previous, self._state.month)
        self._changed()
        return self._state.month

    def clear_month(self) -> None:
        """Wipe the current month without advancing it."""
        self.ensure_current_month()
        self._purge_non_recurring()
        self._state.month_carry = ZERO
        self._state.month = month_key(self._clock())
        self._state.month_chosen_in = None
        if self._audit_logger:
            self._audit_logger.log_month_cleared(self._state.month)
        self._changed()

    def set_month(self, moment: datetime, reset_items: bool = True) -> None:
        """Pick the active month by hand (the month picker)."""
        if reset_items:
            self._purge_non_recurring()
            self._state.month_carry = ZERO
        self._state.month = month_key(moment)
        self._state.month_chosen_in = month_key(self._clock())
        self._changed()

    # ------------------------------------------------------------------
    # Items
    # ------------------------------------------------------------------

    def add_item(
        self,
        name: str,
        quantity: Number,
        unit_price: Number,
        store: str = "",
        recurring: bool = False,
    ) -> GroceryItem:
        """
        Append an item to the basket.

        Negative quantity or price is clamped to 0, never rejected.
        An empty store becomes "Algemeen"; unseen stores are registered.
        """
        self.ensure_current_month()
        store = (store or "").strip() or DEFAULT_STORE
        item = GroceryItem(
            name=name.strip(),
            quantity=max(ZERO, to_decimal(quantity)),
            unit_price=max(ZERO, to_decimal(unit_price)),
            store=store,
            recurring=recurring,
            created_at=self._clock(),
        )
        if store not in self._state.preferences.stores:
            self._state.preferences.stores.append(store)
        self._state.items.append(item)
        if self._audit_logger:
            self._audit_logger.log_item_added(item.id, item.name, item.store, item.line_total)
        self._changed()
        return item

    def update_item(self, item: GroceryItem) -> bool:
        """Replace the item with the same id. No-op if it is gone."""
        self.ensure_current_month()
        for index, existing in enumerate(self._state.items):
            if existing.id == item.id:
                self._state.items[index] = item
                if self._audit_logger:
                    self._audit_logger.log_item_updated(item.id)
                self._changed()
                return True
        return False

    def remove_item(self, item_id: str) -> bool:
        self.ensure_current_month()
        before = len(self._state.items)
        self._state.items = [i for i in self._state.items if i.id != item_id]
        if len(self._state.items) == before:
            return False
        if self._audit_logger:
            self._audit_logger.log_item_removed(item_id)
        self._changed()
        return True

    def visible_items(self, store_filter: Optional[str] = None) -> list[GroceryItem]:
        """
        The current view.

        Without a filter (or with "Alle") this is the whole basket in
        insertion order; with a store it is that store's items sorted
        by (store, name).
        """
        self.ensure_current_month()
        items = list(self._state.items)
        if store_filter and store_filter != ALL_STORES_FILTER:
            items = [i for i in items if i.store == store_filter]
            items.sort(key=lambda i: (i.store, i.name))
        return items

    # ------------------------------------------------------------------
    # Totals
    # ------------------------------------------------------------------

    def total_of_view(self, items: Iterable[GroceryItem]) -> Decimal:
        self.ensure_current_month()
        return sum_amounts(item.line_total for item in items)

    def total_all_stores(self) -> Decimal:
        self.ensure_current_month()
        return self.total_of_view(self._state.items)

    def total_by_store(self, store: str) -> Decimal:
        """Sum of items whose store matches `store` after canonicalisation."""
        self.ensure_current_month()
        target = canonical_store(store)
        return sum_amounts(
            item.line_total
            for item in self._state.items
            if canonical_store(item.store) == target
        )

    def total_all_stores_breakdown(self) -> dict[str, Decimal]:
        """Per-store totals keyed by display name, sorted case-insensitively."""
        self.ensure_current_month()
        return breakdown_by_store(self._state.items)

    def total_this_month(self) -> Decimal:
        self.ensure_current_month()
        return sum_amounts([self._state.month_carry, self.total_of_view(self._state.items)])

    # ------------------------------------------------------------------
    # Stores and preferences
    # ------------------------------------------------------------------

    def add_store(self, name: str) -> bool:
        self.ensure_current_month()
        name = name.strip()
        if not name:
            return False
        known = [s.lower() for s in self._state.preferences.stores]
        if name.lower() in known:
            return False
        self._state.preferences.stores.append(name)
        self._changed()
        return True

    def remove_store(self, name: str) -> bool:
        """Forget a store; its items move to "Algemeen"."""
        self.ensure_current_month()
        if name == DEFAULT_STORE:
            return False
        self._state.preferences.stores = [
            s for s in self._state.preferences.stores if s != name
        ]
        for item in self._state.items:
            if item.store == name:
                item.store = DEFAULT_STORE
        self._changed()
        return True

    def reset_stores_to_default(self) -> None:
        self.ensure_current_month()
        self._state.preferences.stores = list(DEFAULT_STORES)
        known = set(DEFAULT_STORES)
        for item in self._state.items:
            if item.store not in known:
                item.store = DEFAULT_STORE
        self._changed()

    def update_preferences(self, **changes) -> None:
        """Change settings, e.g. update_preferences(currency="USD")."""
        self.ensure_current_month()
        self._state.preferences = Preferences.model_validate(
            {**self._state.preferences.model_dump(), **changes}
        )
        self._changed()

    def purge_all(self) -> None:
        """Delete all data: items, month bookkeeping and settings."""
        self._state = LedgerState(month=month_key(self._clock()))
        self._changed()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _purge_non_recurring(self) -> int:
        before = len(self._state.items)
        self._state.items = [i for i in self._state.items if i.recurring]
        return before - len(self._state.items)

    def _changed(self) -> None:
        if self._on_change:
            self._on_change(self._state)


def breakdown_by_store(items: Iterable[GroceryItem]) -> dict[str, Decimal]:
    """Group line totals by the store's display name."""
    grouped: dict[str, list[Decimal]] = {}
    for item in items:
        grouped.setdefault(item.store, []).append(item.line_total)
    return {
        store: sum_amounts(grouped[store])
        for store in sorted(grouped, key=str.casefold)
    }
