"""Pickup placement: detect in-world pickups and keep their visibility right.

The Placement protocol is what the orchestrator consumes. PickupTracker is the
concrete implementation for worlds whose pickups expose an instance-info triple
(type, shape, number) and hide/unhide functions.

Pickup detection works on state transitions: a pickup that starts animating or
becomes hidden has just been collected by the player. Each pickup is reported
at most once until it becomes collectable and visible again.

Visibility:
    - Location not yet checked: the pickup must be collectable, so it is shown.
    - Location checked but object not granted here: hidden, so it does not
      reappear after a reload.
Each object's applied state is cached so the world is touched only on change.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Literal, Protocol, runtime_checkable

from loguru import logger
from typing_extensions import TypeAliasType

from worldsync.core.identity import ObjectId, format_object_id
from worldsync.mapping import IdentifierMap
from worldsync.state import SessionState
from worldsync.world import names
from worldsync.world.protocol import WorldError, WorldInterface

ReportCallback = TypeAliasType("ReportCallback", Callable[[ObjectId], None])
Visibility = TypeAliasType("Visibility", Literal["visible", "hidden"])


@runtime_checkable
class Placement(Protocol):
    """Visibility/placement collaborator driven once per gated pass."""

    def scan(self, state: SessionState, world: WorldInterface, report: ReportCallback) -> None:
        """Detect pickups collected since the last scan and report their object ids."""
        ...

    def refresh(self, state: SessionState, world: WorldInterface) -> None:
        """Apply visibility for every pickup in the current region."""
        ...

    def process_pending_opens(self, state: SessionState, world: WorldInterface) -> None:
        """Retry show operations that failed on an earlier pass."""
        ...

    def invalidate(self) -> None:
        """Forget everything tied to the current region (world transition)."""
        ...

    def dump(self) -> list[str]:
        """Debug listing of tracked pickups."""
        ...


@dataclass(slots=True)
class TrackedPickup:
    object_id: ObjectId
    was_animating: bool | None
    was_hidden: bool | None
    reported: bool = False


class PickupTracker:
    """Placement implementation over a region's pickup entities.

    Args:
        mapping: Identifier tables; pickups it does not know are ignored.
    """

    def __init__(self, mapping: IdentifierMap) -> None:
        self._mapping = mapping
        self._tracked: dict[str, TrackedPickup] = {}
        self._applied: dict[ObjectId, Visibility] = {}
        self._pending_opens: set[ObjectId] = set()

    @property
    def pending_opens(self) -> frozenset[ObjectId]:
        return frozenset(self._pending_opens)

    def applied(self, object_id: ObjectId) -> Visibility | None:
        return self._applied.get(object_id)

    def tracked_count(self) -> int:
        return len(self._tracked)

    # Placement

    def scan(self, state: SessionState, world: WorldInterface, report: ReportCallback) -> None:
        seen: set[str] = set()
        for key, item, object_id in self._pickups(world):
            seen.add(key)
            animating = self._read_flag(world, item, names.IS_ANIMATING)
            hidden = self._read_flag(world, item, names.HIDDEN)

            info = self._tracked.get(key)
            if info is None:
                info = TrackedPickup(object_id, animating, hidden)
                self._tracked[key] = info
                logger.debug(
                    "Tracking {} (animating={}, hidden={})", object_id, animating, hidden
                )
                # Already animating on first sight: being picked up right now.
                if animating is True:
                    self._report(info, report)
                continue

            if not info.reported and (
                (animating is True and info.was_animating is False)
                or (hidden is True and info.was_hidden is False)
            ):
                self._report(info, report)

            # Visible again after being restored: allow detecting the next pickup.
            if (
                info.reported
                and self._collectable(state, object_id)
                and animating is False
                and hidden is False
            ):
                info.reported = False

            info.was_animating = animating
            info.was_hidden = hidden

        for key in [key for key in self._tracked if key not in seen]:
            del self._tracked[key]

    def refresh(self, state: SessionState, world: WorldInterface) -> None:
        for _, item, object_id in self._pickups(world):
            if self._collectable(state, object_id):
                if self._applied.get(object_id) != "visible":
                    self._show(world, item, object_id)
            elif self._mapping.to_world_key(object_id) not in state.granted_items:
                # Checked here, but the object went to another player.
                if self._applied.get(object_id) != "hidden":
                    self._hide(world, item, object_id)

    def process_pending_opens(self, state: SessionState, world: WorldInterface) -> None:
        if not self._pending_opens:
            return
        for _, item, object_id in self._pickups(world):
            if object_id not in self._pending_opens:
                continue
            if not self._collectable(state, object_id):
                self._pending_opens.discard(object_id)
                continue
            self._show(world, item, object_id)

    def invalidate(self) -> None:
        self._tracked.clear()
        self._applied.clear()
        self._pending_opens.clear()

    def dump(self) -> list[str]:
        lines = [f"=== Tracked pickups ({len(self._tracked)}) ==="]
        for key, info in sorted(self._tracked.items()):
            lines.append(
                f"  {info.object_id} [{self._applied.get(info.object_id, '-')}]"
                f" reported={info.reported} ({key})"
            )
        if self._pending_opens:
            lines.append(f"  pending opens: {', '.join(sorted(self._pending_opens))}")
        return lines

    # Helpers

    def _collectable(self, state: SessionState, object_id: ObjectId) -> bool:
        return object_id not in state.checked_locations

    def _report(self, info: TrackedPickup, report: ReportCallback) -> None:
        info.reported = True
        # Cached state no longer matches what the world did to the pickup.
        self._applied.pop(info.object_id, None)
        logger.info("Location checked: {}", info.object_id)
        report(info.object_id)

    def _show(self, world: WorldInterface, item: Any, object_id: ObjectId) -> None:
        try:
            world.call(item, names.UNHIDE_PICKUP)
        except WorldError as e:
            logger.debug("Unhide of {} failed, queued for retry: {}", object_id, e)
            self._pending_opens.add(object_id)
            return
        self._pending_opens.discard(object_id)
        self._applied[object_id] = "visible"

    def _hide(self, world: WorldInterface, item: Any, object_id: ObjectId) -> None:
        try:
            world.call(item, names.HIDE_PICKUP)
        except WorldError:
            try:
                world.set_property(item, names.HIDDEN, True)
            except WorldError as e:
                logger.debug("Hide of {} failed: {}", object_id, e)
                return
        self._applied[object_id] = "hidden"

    def _pickups(self, world: WorldInterface) -> list[tuple[str, Any, ObjectId]]:
        """(tracking key, entity, object id) for every known pickup in the region."""
        try:
            items = world.find_all(names.PICKUP_ITEM)
        except WorldError as e:
            logger.debug("Pickup lookup failed: {}", e)
            return []

        found = []
        for item in items:
            try:
                key = world.full_name(item)
                info = world.get_property(item, names.INSTANCE_INFO)
            except WorldError:
                continue
            object_id = self._object_id(info)
            if object_id is None or not self._mapping.is_known_object(object_id):
                continue
            found.append((key, item, object_id))
        return found

    @staticmethod
    def _object_id(info: Any) -> ObjectId | None:
        if not isinstance(info, Mapping):
            return None
        try:
            return format_object_id(
                int(info.get("Type", 0)), int(info.get("Shape", 0)), int(info.get("Number", 0))
            )
        except (TypeError, ValueError):
            return None

    @staticmethod
    def _read_flag(world: WorldInterface, item: Any, prop: str) -> bool | None:
        try:
            return bool(world.get_property(item, prop))
        except WorldError:
            return None
