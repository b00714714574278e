"""Session client protocol and inbound event models.

The session client speaks the multiworld protocol. The core only drains its
inbound events and issues three kinds of outbound calls.

Usage:
    for event in client.poll():
        ...
    client.send_location_check(0x540000)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from worldsync.core.identity import ItemId, LocationId


@dataclass(frozen=True, slots=True)
class ItemReceived:
    """The session released one copy of an item category to this player."""

    item_id: ItemId
    sender: str | None = None


@dataclass(frozen=True, slots=True)
class ConnectionEstablished:
    """Handshake completed. The session will replay every received item next.

    Attributes:
        death_link: DeathLink toggle from the slot data, None to keep the local setting.
    """

    death_link: bool | None = None


@dataclass(frozen=True, slots=True)
class DeathLinkReceived:
    """Another player died and broadcast it."""

    source: str
    cause: str = ""


SessionEvent = ItemReceived | ConnectionEstablished | DeathLinkReceived
"""Union of inbound events, applied in the order received."""


@runtime_checkable
class SessionClient(Protocol):
    """Network client for the multiworld session.

    Implementations must never block: poll() returns whatever arrived since
    the last call, possibly nothing.
    """

    def poll(self) -> list[SessionEvent]:
        """Drain inbound events received since the previous call."""
        ...

    def send_location_check(self, location_id: LocationId) -> None:
        """Report a found location."""
        ...

    def send_death_link(self, cause: str) -> None:
        """Broadcast a local death."""
        ...

    def send_goal_complete(self) -> None:
        """Report that this player reached their goal."""
        ...
