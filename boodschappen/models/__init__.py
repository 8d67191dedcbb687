"""
Data Models Package

Pydantic models for the ledger state, parsed chat intents and audit events.
"""

from boodschappen.models.grocery import (
    ALL_STORES_FILTER,
    DEFAULT_STORE,
    DEFAULT_STORES,
    GroceryItem,
    LedgerState,
    Preferences,
    Theme,
    new_item_id,
)
from boodschappen.models.intent import (
    AddItemIntent,
    Intent,
    StoreTotal,
    TotalQueryIntent,
    TotalScope,
    TotalsResult,
    UnrecognizedIntent,
    UnrecognizedReason,
)
from boodschappen.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "ALL_STORES_FILTER",
    "DEFAULT_STORE",
    "DEFAULT_STORES",
    "GroceryItem",
    "LedgerState",
    "Preferences",
    "Theme",
    "new_item_id",
    # Intent models
    "AddItemIntent",
    "Intent",
    "StoreTotal",
    "TotalQueryIntent",
    "TotalScope",
    "TotalsResult",
    "UnrecognizedIntent",
    "UnrecognizedReason",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
