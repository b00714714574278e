"""Queued notifier.

Holds messages until a display sink is attached, then delivers them in order.
Without a sink, messages are logged and kept in a bounded backlog.

Usage:
    notifier = QueuedNotifier()
    notifier.notify_simple("Connected", NotifyColor.SERVER)  # queued
    notifier.attach(display.show)                            # delivered now
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Sequence

from loguru import logger

from worldsync.notify.protocol import NotifyColor, Segment

Message = tuple[Segment, ...]


class QueuedNotifier:
    """Notifier that buffers until its display is ready.

    Args:
        sink: Display callable receiving one message at a time.
        max_pending: Messages kept while no sink is attached; oldest are dropped.
        max_delivered: Recently delivered messages kept in `delivered`.
    """

    def __init__(
        self,
        sink: Callable[[Message], None] | None = None,
        max_pending: int = 32,
        max_delivered: int = 64,
    ) -> None:
        self._sink = sink
        self._pending: deque[Message] = deque(maxlen=max_pending)
        self.delivered: deque[Message] = deque(maxlen=max_delivered)

    @property
    def ready(self) -> bool:
        return self._sink is not None

    def attach(self, sink: Callable[[Message], None]) -> None:
        """Attach a display and flush queued messages to it."""
        self._sink = sink
        while self._pending:
            self._deliver(self._pending.popleft())

    def detach(self) -> None:
        self._sink = None

    def notify(self, segments: Sequence[Segment]) -> None:
        message = tuple(segments)
        if not message:
            return
        logger.info("Notify: {}", "".join(text for text, _ in message))
        if self._sink is None:
            self._pending.append(message)
            return
        self._deliver(message)

    def notify_simple(self, text: str, color: NotifyColor = NotifyColor.WHITE) -> None:
        self.notify([(text, color)])

    def pending(self) -> list[Message]:
        return list(self._pending)

    def _deliver(self, message: Message) -> None:
        try:
            self._sink(message)  # type: ignore[misc]
        except Exception:
            # Display failures must never reach the caller.
            logger.opt(exception=True).warning("Notification display failed")
            return
        self.delivered.append(message)
