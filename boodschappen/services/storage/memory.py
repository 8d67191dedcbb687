"""In-memory storage, used by tests and the 'memory' backend."""

from typing import Optional

from boodschappen.models.grocery import LedgerState
from boodschappen.services.storage.interface import LedgerStorageInterface


class InMemoryLedgerStorage(LedgerStorageInterface):
    """Keeps a deep copy of the last saved state."""

    def __init__(self, state: Optional[LedgerState] = None):
        self._state = state.model_copy(deep=True) if state else None
        self.save_count = 0

    def load(self) -> Optional[LedgerState]:
        return self._state.model_copy(deep=True) if self._state else None

    def save(self, state: LedgerState) -> bool:
        self._state = state.model_copy(deep=True)
        self.save_count += 1
        return True

    def clear(self) -> None:
        self._state = None
