"""Notifier protocol for on-screen messages.

Usage:
    notifier.notify([("Alice", NotifyColor.PLAYER), (" sent you a ", NotifyColor.WHITE)])
    notifier.notify_simple("Connected to server", NotifyColor.SERVER)
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Protocol, runtime_checkable


class NotifyColor(Enum):
    """Color tags for message segments, as (r, g, b, a)."""

    WHITE = (1.0, 1.0, 1.0, 1.0)
    PLAYER = (0.4, 0.9, 1.0, 1.0)  # cyan
    ITEM = (0.5, 1.0, 0.5, 1.0)  # green (filler)
    PROGRESSION = (0.75, 0.53, 1.0, 1.0)  # purple
    USEFUL = (0.4, 0.6, 1.0, 1.0)  # blue
    TRAP = (1.0, 0.4, 0.4, 1.0)  # red
    LOCATION = (1.0, 0.9, 0.4, 1.0)  # gold
    ENTRANCE = (0.4, 0.7, 1.0, 1.0)  # steel blue
    SERVER = (0.93, 0.93, 0.82, 1.0)  # warm white


Segment = tuple[str, NotifyColor]
"""One colored run of text within a message."""


@runtime_checkable
class Notifier(Protocol):
    """Fire-and-forget message surface.

    Calls must be safe before the surface is ready; they may be queued or
    dropped but never raise.
    """

    def notify(self, segments: Sequence[Segment]) -> None:
        """Show a message made of colored segments."""
        ...

    def notify_simple(self, text: str, color: NotifyColor = NotifyColor.WHITE) -> None:
        """Show a single-color message."""
        ...
