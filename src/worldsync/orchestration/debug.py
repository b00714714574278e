"""Debug commands triggered by one-shot flags.

The host binds keys (or a console command) to SessionState.debug_dump_requested
and debug_test_requested; the orchestrator runs the matching command on its
next pass.
"""

from __future__ import annotations

from loguru import logger

from worldsync.notify import Notifier, NotifyColor
from worldsync.state import SessionState
from worldsync.sync import InventorySync, Placement
from worldsync.tracing import HistoryStore
from worldsync.world.protocol import WorldInterface


class DebugCommands:
    """Inventory dump and notification test.

    Args:
        inventory: Reconciliation engine, used to acquire and dump the collection.
        placement: Placement collaborator, dumped alongside the inventory.
        history: Pass history; the most recent records are included in dumps.
        recent_passes: Number of pass records included in a dump.
    """

    def __init__(
        self,
        inventory: InventorySync,
        placement: Placement | None = None,
        history: HistoryStore | None = None,
        recent_passes: int = 10,
    ) -> None:
        self._inventory = inventory
        self._placement = placement
        self._history = history
        self._recent_passes = recent_passes

    def process(
        self, state: SessionState, world: WorldInterface, notifier: Notifier | None
    ) -> list[str]:
        """Run any requested commands. Returns the dump lines, empty if no dump ran."""
        lines: list[str] = []
        if state.debug_dump_requested.exchange():
            lines = self.dump(state, world)
        if state.debug_test_requested.exchange() and notifier is not None:
            self.test_notifications(notifier)
        return lines

    def dump(self, state: SessionState, world: WorldInterface) -> list[str]:
        logger.info("=== Inventory dump ===")
        self._inventory.acquire_collection(state, world)
        lines = self._inventory.dump(state)

        extra: list[str] = []
        if self._placement is not None:
            extra.extend(self._placement.dump())
        if self._history is not None:
            records = self._history.recent(self._recent_passes)
            extra.append(f"=== Recent passes ({len(records)}) ===")
            for record in records:
                extra.append(f"  {record.summary()}")
                extra.extend(
                    f"    {step}: {error}" for step, error in record.failures.items()
                )
        for line in extra:
            logger.info(line)
        return lines + extra

    @staticmethod
    def test_notifications(notifier: Notifier) -> None:
        logger.info("=== Notification test ===")
        notifier.notify(
            [
                ("Alice", NotifyColor.PLAYER),
                (" sent you a ", NotifyColor.WHITE),
                ("Red L", NotifyColor.TRAP),
            ]
        )
        notifier.notify(
            [
                ("Bob", NotifyColor.PLAYER),
                (" sent you a ", NotifyColor.WHITE),
                ("Golden T", NotifyColor.PROGRESSION),
            ]
        )
        notifier.notify([("You found a ", NotifyColor.WHITE), ("Green J", NotifyColor.ITEM)])
        notifier.notify_simple("AP Connected to server", NotifyColor.SERVER)
