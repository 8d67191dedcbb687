"""
Storage Services Package

Provides the abstract ledger storage interface and its implementations.
"""

from boodschappen.services.storage.interface import (
    CorruptStateError,
    LedgerStorageInterface,
    StorageError,
)
from boodschappen.services.storage.json_file import JsonFileLedgerStorage
from boodschappen.services.storage.memory import InMemoryLedgerStorage

__all__ = [
    # Interfaces
    "LedgerStorageInterface",
    # Exceptions
    "CorruptStateError",
    "StorageError",
    # Implementations
    "InMemoryLedgerStorage",
    "JsonFileLedgerStorage",
]
