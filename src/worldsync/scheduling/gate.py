"""Wall-clock tick gate.

The host calls into the orchestrator once per frame. The gate decouples the
orchestration cadence from the frame rate: it opens on the very first check and
afterwards only once a fixed interval has elapsed since it last opened.

Usage:
    gate = TickGate(interval_ms=200)
    gate.advance()
    if gate.should_proceed():
        ...
"""

from __future__ import annotations

import time
from collections.abc import Callable


class TickGate:
    """Fixed-rate gate keyed on a monotonic clock.

    Args:
        interval_ms: Minimum milliseconds between two open results.
        clock: Monotonic clock in seconds.
    """

    def __init__(
        self,
        interval_ms: int = 200,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval_ms < 0:
            raise ValueError(f"interval_ms must be non-negative, got {interval_ms}")
        self._interval = interval_ms / 1000.0
        self._clock = clock
        self._last_open: float | None = None
        self._frame_count = 0

    @property
    def frame_count(self) -> int:
        """Host callbacks seen so far."""
        return self._frame_count

    @property
    def interval_ms(self) -> int:
        return round(self._interval * 1000)

    def advance(self) -> int:
        """Count one host callback. Returns the new frame count."""
        self._frame_count += 1
        return self._frame_count

    def should_proceed(self) -> bool:
        now = self._clock()
        if self._last_open is None or now - self._last_open >= self._interval:
            self._last_open = now
            return True
        return False

    def reset(self) -> None:
        """Open on the next check regardless of elapsed time."""
        self._last_open = None
