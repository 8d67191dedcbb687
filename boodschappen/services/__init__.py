"""Services package."""

from boodschappen.services.storage import (
    CorruptStateError,
    InMemoryLedgerStorage,
    JsonFileLedgerStorage,
    LedgerStorageInterface,
    StorageError,
)

__all__ = [
    "CorruptStateError",
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
    "LedgerStorageInterface",
    "StorageError",
]
