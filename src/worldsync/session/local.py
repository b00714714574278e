"""Local loopback session client.

Queues inbound events pushed by the caller and records every outbound call.
Suitable for scripted sessions and testing.

Usage:
    client = LocalSessionClient()
    client.push(ConnectionEstablished(), ItemReceived(0x540000, sender="Alice"))
    orchestrator = Orchestrator(world=world, session=client)
"""

from __future__ import annotations

from collections import deque

from worldsync.core.identity import LocationId
from worldsync.session.protocol import SessionEvent


class LocalSessionClient:
    """In-memory SessionClient.

    Attributes:
        location_checks: Location ids sent, in order.
        death_links: Cause texts sent, in order.
        goals_sent: Number of goal-complete reports.
    """

    def __init__(self) -> None:
        self._inbox: deque[SessionEvent] = deque()
        self.location_checks: list[LocationId] = []
        self.death_links: list[str] = []
        self.goals_sent = 0

    def push(self, *events: SessionEvent) -> None:
        """Queue inbound events for the next poll()."""
        self._inbox.extend(events)

    def poll(self) -> list[SessionEvent]:
        events = list(self._inbox)
        self._inbox.clear()
        return events

    def send_location_check(self, location_id: LocationId) -> None:
        self.location_checks.append(location_id)

    def send_death_link(self, cause: str) -> None:
        self.death_links.append(cause)

    def send_goal_complete(self) -> None:
        self.goals_sent += 1
