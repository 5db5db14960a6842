"""Request-scoped, append-only collection of pipeline errors."""

from __future__ import annotations

import threading
from typing import List

from feedmixer.contracts import ErrorRecord
from feedmixer.errors import FeedMixerError


class ErrorAggregator:
    """Collects ``(code, message)`` pairs from concurrently running pipelines.

    Appends are serialized with a lock so that writers running in separate
    threads never lose entries. There is no removal; create one per request.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._records: List[ErrorRecord] = []

    def add(self, code: int, message: str) -> None:
        record = ErrorRecord(code=code, message=message)
        with self._lock:
            self._records.append(record)

    def add_error(self, error: FeedMixerError, context: str = "") -> None:
        """Record ``error`` using its own code, optionally prefixed by ``context``."""
        message = f"{context}: {error.message}" if context else error.message
        self.add(error.code, message)

    def is_empty(self) -> bool:
        with self._lock:
            return not self._records

    def records(self) -> List[ErrorRecord]:
        """Return a snapshot of every recorded entry in insertion order."""
        with self._lock:
            return list(self._records)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)


__all__ = ["ErrorAggregator"]
