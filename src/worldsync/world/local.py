"""Local in-memory world implementation.

Simple dict-based world suitable for offline runs and testing. Entities are
plain property bags; functions are Python callables. A minimal step()
simulates the one piece of engine behavior the core relies on: a mine whose
transform sits on the player kills the player.

Usage:
    world = LocalWorld()
    collection = world.install_progress()
    pawn = world.install_player((0.0, 0.0, 0.0))
    world.spawn_mine((100.0, 0.0, 0.0))
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Mapping, MutableMapping
from typing import Any

from worldsync.core.identity import parse_object_id
from worldsync.world import names
from worldsync.world.protocol import (
    FunctionMissingError,
    PropertyMissingError,
    StaleHandleError,
    Vector,
    WorldError,
)


class LocalEntity:
    """In-memory entity: a category, a name, properties and callable functions."""

    def __init__(
        self,
        category: str,
        name: str,
        properties: dict[str, Any] | None = None,
        functions: dict[str, Callable[..., Any]] | None = None,
    ) -> None:
        self.category = category
        self.name = name
        self.properties: dict[str, Any] = properties or {}
        self.functions: dict[str, Callable[..., Any]] = functions or {}
        self.valid = True

    def __repr__(self) -> str:
        return f"LocalEntity({self.category!r}, {self.name!r})"


class LocalCollection(MutableMapping[str, bool]):
    """Collection map that can be invalidated like a reclaimed engine container.

    Attributes:
        mutations: Count of writes and removals, for idempotence checks.
        fail_removal_of: Keys whose removal raises WorldError.
    """

    def __init__(self, entries: Mapping[str, bool] | None = None) -> None:
        self._entries: dict[str, bool] = dict(entries or {})
        self._valid = True
        self.mutations = 0
        self.fail_removal_of: set[str] = set()

    def invalidate(self) -> None:
        self._valid = False

    def _check(self) -> None:
        if not self._valid:
            raise StaleHandleError("Collection was reclaimed")

    def __getitem__(self, key: str) -> bool:
        self._check()
        return self._entries[key]

    def __setitem__(self, key: str, value: bool) -> None:
        self._check()
        self._entries[key] = value
        self.mutations += 1

    def __delitem__(self, key: str) -> None:
        self._check()
        if key in self.fail_removal_of:
            raise WorldError(f"Removal of {key!r} failed")
        del self._entries[key]
        self.mutations += 1

    def __iter__(self) -> Iterator[str]:
        self._check()
        return iter(list(self._entries))

    def __len__(self) -> int:
        self._check()
        return len(self._entries)

    def snapshot(self) -> dict[str, bool]:
        """Plain copy of the entries, bypassing validity checks."""
        return dict(self._entries)


class LocalWorld:
    """In-memory world implementing WorldInterface.

    Structure:
        _entities[category] = [entity, ...]
        _assets[path] = entity
    """

    def __init__(self) -> None:
        self._entities: dict[str, list[LocalEntity]] = {}
        self._assets: dict[str, LocalEntity] = {}
        self._death_listeners: list[Callable[[], None]] = []
        self._counter = 0

    # Building the world

    def spawn(
        self,
        category: str,
        name: str | None = None,
        properties: dict[str, Any] | None = None,
        functions: dict[str, Callable[..., Any]] | None = None,
    ) -> LocalEntity:
        """Create an entity and make it findable by category."""
        self._counter += 1
        entity = LocalEntity(
            category,
            name or f"{category}_{self._counter}",
            properties=properties,
            functions=functions,
        )
        self._entities.setdefault(category, []).append(entity)
        return entity

    def destroy(self, entity: LocalEntity) -> None:
        """Remove an entity. Later access through old references raises StaleHandleError."""
        entity.valid = False
        bucket = self._entities.get(entity.category, [])
        if entity in bucket:
            bucket.remove(entity)

    def register_asset(self, path: str, entity: LocalEntity) -> None:
        self._assets[path] = entity

    def unregister_asset(self, path: str) -> None:
        self._assets.pop(path, None)

    def spawn_component(self, location: Vector) -> LocalEntity:
        """Scene component whose world transform updates only through SetAbsolute."""
        component = self.spawn(
            "SceneComponent",
            properties={names.RELATIVE_LOCATION: location, "WorldLocation": location},
        )

        def set_absolute(location_flag: bool, rotation_flag: bool, scale_flag: bool) -> None:
            component.properties["bAbsoluteLocation"] = location_flag
            component.properties["WorldLocation"] = component.properties[names.RELATIVE_LOCATION]

        component.functions[names.SET_ABSOLUTE] = set_absolute
        return component

    def install_progress(self, entries: Mapping[str, bool] | None = None) -> LocalCollection:
        """Create the progress object, its accessor and a player controller."""
        collection = LocalCollection(entries)
        progress = self.spawn("TalosProgress", properties={names.COLLECTION_PROPERTY: collection})
        accessor = LocalEntity(
            "TalosProgress",
            names.PROGRESS_DEFAULT_OBJECT,
            functions={names.PROGRESS_GETTER: lambda context: progress},
        )
        self.register_asset(names.PROGRESS_DEFAULT_OBJECT, accessor)
        if self.find_first(names.PLAYER_CONTROLLER) is None:
            self.spawn(names.PLAYER_CONTROLLER, properties={names.PAWN: None})
        return collection

    def install_player(self, location: Vector = (0.0, 0.0, 0.0)) -> LocalEntity:
        """Create a live pawn at `location` and attach it to the player controller."""
        pawn = self.spawn(
            "TalosCharacter",
            properties={
                names.IS_DEAD: False,
                names.ROOT_COMPONENT: self.spawn_component(location),
            },
        )
        controller = self.find_first(names.PLAYER_CONTROLLER)
        if controller is None:
            controller = self.spawn(names.PLAYER_CONTROLLER)
        controller.properties[names.PAWN] = pawn
        return pawn

    def spawn_mine(
        self, location: Vector, category: str = names.MINE_CATEGORIES[0]
    ) -> LocalEntity:
        return self.spawn(
            category, properties={names.ROOT_COMPONENT: self.spawn_component(location)}
        )

    def spawn_pickup(
        self, object_id: str, *, hidden: bool = False, animating: bool = False
    ) -> LocalEntity:
        """Pickup entity carrying the (type, shape, number) triple of `object_id`."""
        parsed = parse_object_id(object_id)
        if parsed is None:
            raise ValueError(f"Cannot encode {object_id!r} as a pickup")
        type_value, shape_value, number = parsed
        pickup = self.spawn(
            names.PICKUP_ITEM,
            properties={
                names.INSTANCE_INFO: {"Type": type_value, "Shape": shape_value, "Number": number},
                names.IS_ANIMATING: animating,
                names.HIDDEN: hidden,
            },
        )

        def hide() -> None:
            pickup.properties[names.HIDDEN] = True

        def unhide() -> None:
            pickup.properties[names.HIDDEN] = False
            pickup.properties[names.IS_ANIMATING] = False

        pickup.functions[names.HIDE_PICKUP] = hide
        pickup.functions[names.UNHIDE_PICKUP] = unhide
        return pickup

    def collect_pickup(self, pickup: LocalEntity) -> None:
        """Simulate the player walking into a pickup."""
        pickup.properties[names.IS_ANIMATING] = True
        pickup.properties[names.HIDDEN] = True

    def on_death(self, listener: Callable[[], None]) -> None:
        """Register a hook fired when the simulated player dies."""
        self._death_listeners.append(listener)

    def step(self) -> bool:
        """Advance the simulation one frame. Returns True if the player died."""
        controller = self.find_first(names.PLAYER_CONTROLLER)
        pawn = controller.properties.get(names.PAWN) if controller else None
        if pawn is None or pawn.properties.get(names.IS_DEAD):
            return False
        target = pawn.properties[names.ROOT_COMPONENT].properties["WorldLocation"]
        for category in names.MINE_CATEGORIES:
            for mine in self._entities.get(category, []):
                if mine.properties[names.ROOT_COMPONENT].properties["WorldLocation"] == target:
                    self.kill_player()
                    return True
        return False

    def kill_player(self) -> None:
        """Put the player in the terminal state and fire death hooks."""
        controller = self.find_first(names.PLAYER_CONTROLLER)
        pawn = controller.properties.get(names.PAWN) if controller else None
        if pawn is not None:
            pawn.properties[names.IS_DEAD] = True
        for listener in self._death_listeners:
            listener()

    def revive_player(self) -> None:
        controller = self.find_first(names.PLAYER_CONTROLLER)
        pawn = controller.properties.get(names.PAWN) if controller else None
        if pawn is not None:
            pawn.properties[names.IS_DEAD] = False

    # WorldInterface

    def find_all(self, category: str) -> list[LocalEntity]:
        return list(self._entities.get(category, []))

    def find_first(self, category: str) -> LocalEntity | None:
        bucket = self._entities.get(category)
        return bucket[0] if bucket else None

    def get_property(self, entity: LocalEntity, name: str) -> Any:
        _check_valid(entity)
        try:
            return entity.properties[name]
        except KeyError:
            raise PropertyMissingError(f"{entity.name} has no property {name!r}") from None

    def set_property(self, entity: LocalEntity, name: str, value: Any) -> None:
        _check_valid(entity)
        if name not in entity.properties:
            raise PropertyMissingError(f"{entity.name} has no property {name!r}")
        entity.properties[name] = value

    def call(self, entity: LocalEntity, function: str, *args: Any) -> Any:
        _check_valid(entity)
        fn = entity.functions.get(function)
        if fn is None:
            raise FunctionMissingError(f"{entity.name} has no function {function!r}")
        return fn(*args)

    def full_name(self, entity: LocalEntity) -> str:
        _check_valid(entity)
        return f"{entity.category} {entity.name}"

    def find_asset(self, path: str) -> LocalEntity | None:
        return self._assets.get(path)

    def entities(self) -> Iterable[LocalEntity]:
        for bucket in self._entities.values():
            yield from bucket


def _check_valid(entity: LocalEntity) -> None:
    if not entity.valid:
        raise StaleHandleError(f"{entity.name} was destroyed")
