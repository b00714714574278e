"""DeathLink: couple local deaths to remote death broadcasts, both ways.

Outgoing: a local death hook queues a broadcast, unless the death was caused
by replaying a remote one (echo guard).

Incoming: a remote death is replayed by moving an existing mine onto the
player. The move is a plain property write followed by a transform recompute
that skips overlap notification, so nothing in the world's side-effect
pipeline runs on our call stack. The world's own per-frame simulation then
detects the contact and kills the player naturally.

If the current region has no mine, the event is deferred until the next world
transition re-arms it.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Any

from loguru import logger

from worldsync.notify import Notifier, NotifyColor
from worldsync.session import SessionClient
from worldsync.state import SessionState
from worldsync.world import names
from worldsync.world.protocol import Vector, WorldError, WorldInterface


class DeathLinkHandler:
    """Two-way bridge between the local death event and remote DeathLink events.

    Args:
        cause: Text broadcast with outgoing deaths.
        clock: Monotonic clock in seconds, used by the echo guard.
    """

    def __init__(
        self,
        cause: str = "Died in The Talos Principle",
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._cause = cause
        self._clock = clock

    # Outgoing

    def on_local_death(self, state: SessionState) -> bool:
        """Death hook. Returns True if an outgoing broadcast was queued."""
        if not state.death_link_enabled:
            return False

        if state.echo.armed:
            if state.echo.consume(self._clock()):
                logger.debug("DeathLink: death caused by incoming DeathLink, not re-broadcasting")
                return False
            logger.warning("DeathLink: echo guard expired, treating death as local")

        logger.info("DeathLink: player died, queueing outgoing DeathLink")
        state.pending_outgoing.set()
        return True

    def process_outgoing(self, state: SessionState, session: SessionClient | None) -> bool:
        """Send a queued local death, exactly once. Returns True if sent."""
        if not state.pending_outgoing.exchange():
            return False
        if session is None or not state.death_link_enabled:
            return False
        session.send_death_link(self._cause)
        return True

    # Incoming

    def expire_echo(self, state: SessionState) -> None:
        """Drop an echo guard whose expected local death never arrived."""
        if state.echo.expired(self._clock()):
            logger.warning("DeathLink: relocated mine never killed the player, clearing echo guard")
            state.echo.disarm()

    def process_incoming(
        self,
        state: SessionState,
        world: WorldInterface,
        notifier: Notifier | None = None,
    ) -> bool:
        """Replay a pending remote death. Returns True if a mine was moved onto the player."""
        if not state.death_link_enabled or not state.incoming.take():
            return False

        source, cause = state.incoming.source, state.incoming.cause
        logger.info("DeathLink: processing incoming death from '{}'", source)

        pawn = self._find_player(world)
        if pawn is None:
            return False

        try:
            if world.get_property(pawn, names.IS_DEAD):
                logger.debug("DeathLink: player already dead, skipping")
                return False
        except WorldError:
            pass  # no death flag on this build; assume alive

        location = self.read_position(world, pawn)
        mine = self.find_mine(world) if location is not None else None

        delivered = False
        if mine is not None and location is not None:
            state.echo.arm(self._clock())  # consumed by the death hook
            try:
                delivered = self.relocate(world, mine, location)
            except WorldError as e:
                logger.warning("DeathLink: moving mine failed: {}", e)
            if not delivered:
                state.echo.disarm()

        if not delivered:
            logger.info("DeathLink: no mines in current region, deferring to next transition")
            if notifier is not None:
                notifier.notify(
                    [("Death", NotifyColor.TRAP), (" is coming for you.", NotifyColor.WHITE)]
                )
            state.incoming.defer()
            return False

        if notifier is not None:
            if cause:
                notifier.notify([(cause, NotifyColor.TRAP)])
            else:
                notifier.notify([(source, NotifyColor.PLAYER), (" killed you!", NotifyColor.TRAP)])
        return True

    def _find_player(self, world: WorldInterface) -> Any | None:
        try:
            controller = world.find_first(names.PLAYER_CONTROLLER)
            if controller is None:
                logger.warning("DeathLink: no player controller found")
                return None
            pawn = world.get_property(controller, names.PAWN)
        except WorldError as e:
            logger.warning("DeathLink: error finding player: {}", e)
            return None
        if pawn is None:
            logger.warning("DeathLink: no pawn found")
        return pawn

    @staticmethod
    def find_mine(world: WorldInterface) -> Any | None:
        """First mine in the current region, trying each mine category in order."""
        for category in names.MINE_CATEGORIES:
            try:
                mines = world.find_all(category)
            except WorldError:
                continue
            if mines:
                logger.debug("DeathLink: found mine of class '{}'", category)
                return mines[0]
        return None

    @staticmethod
    def read_position(world: WorldInterface, actor: Any) -> Vector | None:
        """Actor position via its root component. None if unreadable."""
        try:
            root = world.get_property(actor, names.ROOT_COMPONENT)
            if root is None:
                return None
            x, y, z = world.get_property(root, names.RELATIVE_LOCATION)
        except (WorldError, TypeError, ValueError):
            return None
        return (float(x), float(y), float(z))

    @staticmethod
    def relocate(world: WorldInterface, actor: Any, location: Vector) -> bool:
        """Move an actor without running overlap callbacks.

        Writes the relative location, then toggles the absolute-location flag on
        and off. Each toggle recomputes the world transform; toggling twice
        guarantees a recompute even if the flag already had the first value.
        """
        root = world.get_property(actor, names.ROOT_COMPONENT)
        if root is None:
            logger.warning("DeathLink: mine has no root component")
            return False
        world.set_property(root, names.RELATIVE_LOCATION, location)
        world.call(root, names.SET_ABSOLUTE, True, False, False)
        world.call(root, names.SET_ABSOLUTE, False, False, False)
        logger.debug("DeathLink: moved mine to {}", location)
        return True
