"""Inventory reconciliation: keep the world's collection equal to the granted set.

The world's collection map is keyed by world-encoded object ids and holds a
"used" marker per entry. Reconciliation removes entries that were not granted,
inserts granted entries that are missing, and never touches keys the
IdentifierMap does not recognize (they belong to the base game or other mods).

Usage:
    inventory = InventorySync(mapping)
    inventory.grant_item(state, "DJ1")
    collection = inventory.acquire_collection(state, world)
    if collection is not None:
        report = inventory.enforce(state, collection)
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from worldsync.core.identity import ObjectId, is_sigil, is_star
from worldsync.core.types import Borrowed
from worldsync.mapping import IdentifierMap
from worldsync.state import SessionState
from worldsync.world import names
from worldsync.world.protocol import CollectionView, WorldError, WorldInterface

UNUSED = False
"""Marker stored for a granted object that has not been placed yet."""


@dataclass(slots=True)
class ReconcileReport:
    """Changes made by one reconciliation pass."""

    removed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    reset: list[str] = field(default_factory=list)
    skipped: bool = False

    def mutated(self) -> bool:
        return bool(self.removed or self.added or self.reset)


class InventorySync:
    """Reconciliation engine between SessionState.granted_items and the world.

    Args:
        mapping: Identifier tables used to recognize and translate keys.
    """

    def __init__(self, mapping: IdentifierMap) -> None:
        self._mapping = mapping

    def acquire_collection(
        self, state: SessionState, world: WorldInterface
    ) -> Borrowed[CollectionView] | None:
        """Look up the live collection from scratch and hold it for this pass.

        Any previously held handle is dropped first; it may already be reclaimed.
        """
        state.release_collection()
        try:
            accessor = world.find_asset(names.PROGRESS_DEFAULT_OBJECT)
            context = world.find_first(names.PLAYER_CONTROLLER) or world.find_first(
                names.GAME_INSTANCE
            )
            if accessor is None or context is None:
                logger.debug("Progress object not available yet")
                return None
            progress = world.call(accessor, names.PROGRESS_GETTER, context)
            if progress is None:
                logger.warning("Could not find progress object")
                return None
            collection = world.get_property(progress, names.COLLECTION_PROPERTY)
            len(collection)  # must be readable before it is handed out
        except WorldError as e:
            logger.warning("Could not find progress object: {}", e)
            return None

        state.hold_collection(collection)
        return collection

    def grant_item(self, state: SessionState, object_id: ObjectId) -> bool:
        """Add an object to the granted set. Returns True if it was new.

        The world is not touched here; the next enforce() pass applies it.
        """
        if object_id in state.granted_items:
            return False
        state.granted_items.add(object_id)
        logger.debug("Item granted: {}", object_id)
        return True

    def revoke_item(self, state: SessionState, object_id: ObjectId) -> None:
        """Remove an object from the granted and checked sets (desync recovery)."""
        state.granted_items.discard(object_id)
        state.checked_locations.discard(object_id)
        logger.debug("Item revoked: {}", object_id)

    def enforce(
        self, state: SessionState, collection: Borrowed[CollectionView] | None = None
    ) -> ReconcileReport:
        """Force a collection into agreement with the granted set.

        `collection` defaults to the one held for this pass by acquire_collection().

        Per-entry failures are logged and skipped. The pass aborts only when the
        collection cannot be iterated at all.
        """
        report = ReconcileReport()
        if collection is None:
            collection = state.collection()
        if not state.sync_active or collection is None:
            report.skipped = True
            return report

        try:
            to_remove = self._find_ungranted(state, collection)
        except WorldError as e:
            logger.warning("Error iterating collection during enforcement: {}", e)
            report.skipped = True
            return report

        for world_key in to_remove:
            try:
                del collection[world_key]
            except (WorldError, KeyError) as e:
                logger.debug("Removal of {} failed: {}", world_key, e)
                report.failed.append(world_key)
                continue
            report.removed.append(world_key)
        if report.removed:
            logger.debug(
                "Enforced: removed {}/{} non-granted items", len(report.removed), len(to_remove)
            )

        for object_id in sorted(state.granted_items):
            world_key = self._mapping.to_world_key(object_id)
            try:
                if world_key not in collection:
                    collection[world_key] = UNUSED
                    report.added.append(world_key)
            except WorldError as e:
                logger.debug("Insertion of {} failed: {}", world_key, e)
                report.failed.append(world_key)

        if state.reusable_objects:
            self._reset_used(collection, report)

        return report

    def _find_ungranted(self, state: SessionState, collection: CollectionView) -> list[str]:
        to_remove: list[str] = []
        for world_key in collection:
            if not world_key:
                continue
            object_id = self._mapping.from_world_key(world_key)
            if not self._mapping.is_known_object(object_id):
                continue
            if not state.randomize_sigils and is_sigil(object_id):
                continue
            if not state.randomize_stars and is_star(object_id):
                continue
            # Stars are granted in world encoding ("**5"), everything else by object id.
            lookup = world_key if is_star(object_id) else object_id
            if lookup not in state.granted_items:
                to_remove.append(world_key)
        return to_remove

    def _reset_used(self, collection: CollectionView, report: ReconcileReport) -> None:
        try:
            keys = list(collection)
        except WorldError as e:
            logger.debug("Reusable reset skipped: {}", e)
            return
        for world_key in keys:
            if not self._mapping.is_known_object(self._mapping.from_world_key(world_key)):
                continue
            try:
                if collection[world_key]:
                    collection[world_key] = UNUSED
                    report.reset.append(world_key)
            except (WorldError, KeyError) as e:
                logger.debug("Reusable reset of {} failed: {}", world_key, e)

    def dump(self, state: SessionState) -> list[str]:
        """Log the held collection, granted set and checked set. Returns the lines."""
        lines: list[str] = []
        collection = state.collection()
        if collection is None:
            lines.append("No progress object for dump")
        else:
            try:
                entries = [(key, collection[key]) for key in collection]
            except WorldError as e:
                entries = []
                lines.append(f"Error iterating collection during dump: {e}")
            lines.append(f"=== Collection ({len(entries)} entries) ===")
            for key, used in entries:
                status = "true (used)" if used else "false (unused)"
                lines.append(f"  {key!r} ({self._mapping.from_world_key(key)}) = {status}")
        lines.append(f"=== Granted items ({len(state.granted_items)}) ===")
        lines.extend(f"  {object_id}" for object_id in sorted(state.granted_items))
        lines.append(f"=== Checked locations ({len(state.checked_locations)}) ===")
        lines.extend(f"  {object_id}" for object_id in sorted(state.checked_locations))
        for line in lines:
            logger.info(line)
        return lines
