"""
Abstract Storage Interface

DESIGN DECISION: The ledger is persisted as one record. Every mutation
writes the whole state again; there is no delta format. This interface
lets the host pick a JSON file, keep everything in memory for tests,
or plug in something else later without touching the ledger.
"""

from abc import ABC, abstractmethod
from typing import Optional

from boodschappen.models.grocery import LedgerState


class LedgerStorageInterface(ABC):
    """Anything that can load and save a LedgerState."""

    @abstractmethod
    def load(self) -> Optional[LedgerState]:
        """
        Load the persisted state.

        Returns:
            The state, or None if nothing was saved yet

        Raises:
            CorruptStateError: If a saved state exists but cannot be read
        """
        pass

    @abstractmethod
    def save(self, state: LedgerState) -> bool:
        """
        Replace the persisted state.

        Returns:
            True if saved successfully

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    def clear(self) -> None:
        """Delete everything that was saved (the 'delete all data' action)."""
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class CorruptStateError(StorageError):
    """A saved state exists but is not a valid ledger record."""
    pass
