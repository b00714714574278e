"""On-screen notification surface."""

from worldsync.notify.local import Message, QueuedNotifier
from worldsync.notify.protocol import Notifier, NotifyColor, Segment

__all__ = [
    "Notifier",
    "NotifyColor",
    "Segment",
    "Message",
    "QueuedNotifier",
]
