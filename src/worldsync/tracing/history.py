"""Pass history storage.

HistoryStore is the storage protocol; PassHistory is the bounded in-memory
implementation the orchestrator uses by default.
"""

from __future__ import annotations

from collections import deque
from typing import Protocol, runtime_checkable

from worldsync.tracing.models import PassRecord


@runtime_checkable
class HistoryStore(Protocol):
    """Protocol for storing and retrieving pass records.

    Implementations may be bounded; older records may be evicted when the limit
    is reached.
    """

    def record_pass(self, record: PassRecord) -> None:
        """Store a pass record."""
        ...

    def recent(self, count: int) -> list[PassRecord]:
        """Up to `count` most recent records, oldest first."""
        ...

    def clear(self) -> None:
        """Clear all stored history."""
        ...

    @property
    def pass_count(self) -> int:
        """Number of records currently stored."""
        ...


class PassHistory:
    """Bounded in-memory HistoryStore.

    Args:
        max_passes: Records kept; the oldest is evicted first.
    """

    def __init__(self, max_passes: int = 256) -> None:
        if max_passes < 1:
            raise ValueError(f"max_passes must be positive, got {max_passes}")
        self._records: deque[PassRecord] = deque(maxlen=max_passes)

    def record_pass(self, record: PassRecord) -> None:
        self._records.append(record)

    def recent(self, count: int) -> list[PassRecord]:
        if count <= 0:
            return []
        return list(self._records)[-count:]

    def clear(self) -> None:
        self._records.clear()

    @property
    def pass_count(self) -> int:
        return len(self._records)
