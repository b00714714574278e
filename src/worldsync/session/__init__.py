"""Multiworld session client interface."""

from worldsync.session.local import LocalSessionClient
from worldsync.session.protocol import (
    ConnectionEstablished,
    DeathLinkReceived,
    ItemReceived,
    SessionClient,
    SessionEvent,
)

__all__ = [
    "SessionClient",
    "SessionEvent",
    "ItemReceived",
    "ConnectionEstablished",
    "DeathLinkReceived",
    "LocalSessionClient",
]
