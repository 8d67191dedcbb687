"""
JSON File Storage Implementation

The ledger state is written as a single JSON document. Writes go to a
temporary file next to the target which then replaces it, so a crash
mid-write leaves the previous state intact.

Transient write errors (locked file, full disk that frees up, network
home directories) are retried a few times before giving up.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError
from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from boodschappen.models.grocery import LedgerState
from boodschappen.services.storage.interface import (
    CorruptStateError,
    LedgerStorageInterface,
    StorageError,
)


class JsonFileLedgerStorage(LedgerStorageInterface):
    """Persists the ledger as one JSON file."""

    def __init__(
        self,
        path: Union[str, Path],
        write_attempts: int = 3,
        max_wait_seconds: float = 2.0,
    ):
        self._path = Path(path).expanduser()
        self._write_attempts = write_attempts
        self._max_wait = max_wait_seconds

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Optional[LedgerState]:
        if not self._path.exists():
            return None
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Could not read {self._path}: {e}") from e
        try:
            return LedgerState.model_validate_json(raw)
        except ValidationError as e:
            raise CorruptStateError(
                f"Saved state at {self._path} is not a valid ledger: {e.error_count()} errors"
            ) from e

    def save(self, state: LedgerState) -> bool:
        payload = state.model_dump_json(indent=2)
        retrying = Retrying(
            stop=stop_after_attempt(self._write_attempts),
            wait=wait_exponential(multiplier=0.1, max=self._max_wait),
            retry=retry_if_exception_type(OSError),
            reraise=False,
        )
        try:
            retrying(self._write, payload)
        except RetryError as e:
            cause = e.last_attempt.exception()
            raise StorageError(f"Could not write {self._path}: {cause}") from cause
        return True

    def _write(self, payload: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.",
            suffix=".tmp",
            dir=str(self._path.parent),
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp_name, self._path)
        except OSError:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

    def clear(self) -> None:
        try:
            self._path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageError(f"Could not delete {self._path}: {e}") from e
