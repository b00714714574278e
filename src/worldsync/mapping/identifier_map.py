"""Identifier translation between the remote session and the local world.

IdentifierMap is a stateful service: its tables are built once and never change,
but it tracks how many copies of each item category have been received so far
this session.

Usage:
    mapping = IdentifierMap()
    mapping.resolve_next_object(0x540000)  # "DJ1"
    mapping.resolve_next_object(0x540000)  # "DJ2"
    mapping.location_id_for("DJ3")         # 0x540000
    mapping.to_world_key("SL5")            # "**5"
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from loguru import logger

from worldsync.core.identity import (
    ALL_SIGILS,
    ALL_STARS,
    ALL_TETROMINOES,
    BASE_LOCATION_ID,
    ITEM_CATEGORIES,
    STAR_PREFIX,
    UNKNOWN_LOCATION,
    ItemCategory,
    ItemId,
    LocationId,
    ObjectId,
    extract_number,
    extract_prefix,
)


class IdentifierMap:
    """Bidirectional tables between remote ids and local object ids.

    Maintains three translations:
        - remote item id -> category -> ordered object sequence
        - local object id <-> remote location id
        - local object id <-> world-encoded key (stars only)

    Args:
        categories: Remote item categories, in item id order.
        tetrominoes: Tetromino object ids in location order.
        sigils: Sigil object ids in location order.
        stars: Star object ids in location order.
        base_location_id: First location id.
    """

    def __init__(
        self,
        categories: Iterable[ItemCategory] = ITEM_CATEGORIES,
        tetrominoes: Iterable[ObjectId] = ALL_TETROMINOES,
        sigils: Iterable[ObjectId] = ALL_SIGILS,
        stars: Iterable[ObjectId] = ALL_STARS,
        base_location_id: LocationId = BASE_LOCATION_ID,
    ) -> None:
        self._categories: dict[ItemId, ItemCategory] = {c.item_id: c for c in categories}
        self._prefix_names: dict[str, str] = {
            c.prefix: c.display_name for c in self._categories.values()
        }
        self._sequences: dict[str, tuple[ObjectId, ...]] = {}
        self._location_by_object: dict[ObjectId, LocationId] = {}
        self._object_by_location: dict[LocationId, ObjectId] = {}
        self._world_key_by_object: dict[ObjectId, str] = {}
        self._object_by_world_key: dict[str, ObjectId] = {}
        self._received: dict[str, int] = defaultdict(int)

        tetrominoes = tuple(tetrominoes)
        sigils = tuple(sigils)
        stars = tuple(stars)
        self._build_sequences(tetrominoes + sigils, len(stars))
        self._build_locations(tetrominoes + sigils + stars, base_location_id)
        self._build_world_keys(stars)

        logger.debug(
            "Mappings built: {} locations, {} item types, {} world-key translations",
            len(self._location_by_object),
            len(self._categories),
            len(self._world_key_by_object),
        )

    def _build_sequences(self, objects: tuple[ObjectId, ...], star_count: int) -> None:
        grouped: dict[str, list[ObjectId]] = defaultdict(list)
        for object_id in objects:
            prefix = extract_prefix(object_id)
            if prefix:
                grouped[prefix].append(object_id)
        # Stable sort keeps declaration order for equal numbers.
        for prefix, seq in grouped.items():
            self._sequences[prefix] = tuple(sorted(seq, key=extract_number))
        # Both star sub-prefixes grant from one merged sequence.
        self._sequences[STAR_PREFIX] = tuple(f"{STAR_PREFIX}{n}" for n in range(1, star_count + 1))

    def _build_locations(self, objects: tuple[ObjectId, ...], base: LocationId) -> None:
        for offset, object_id in enumerate(objects):
            if object_id in self._location_by_object:
                raise ValueError(f"Duplicate object id in location table: {object_id}")
            self._location_by_object[object_id] = base + offset
            self._object_by_location[base + offset] = object_id

    def _build_world_keys(self, stars: tuple[ObjectId, ...]) -> None:
        # The world stores stars with '*' for both type and shape letters.
        for star_id in stars:
            world_key = f"{STAR_PREFIX}{extract_number(star_id)}"
            self._world_key_by_object[star_id] = world_key
            self._object_by_world_key[world_key] = star_id

    # Item resolution

    def resolve_next_object(self, item_id: ItemId) -> ObjectId | None:
        """Resolve the next concrete object granted by a remote item.

        The N-th receipt of a category grants the N-th element of its sequence.

        Args:
            item_id: Remote item id.

        Returns:
            The granted object id, or None if the item is unknown or more copies
            were received than objects exist.
        """
        category = self._categories.get(item_id)
        if category is None:
            logger.warning("Unknown remote item id: {} ({:#x})", item_id, item_id)
            return None

        seq = self._sequences.get(category.prefix, ())
        if not seq:
            logger.warning("No object sequence for prefix {}", category.prefix)
            return None

        self._received[category.prefix] += 1
        count = self._received[category.prefix]
        if count > len(seq):
            logger.warning(
                "Received more {} items ({}) than exist ({}), ignoring",
                category.prefix,
                count,
                len(seq),
            )
            return None

        object_id = seq[count - 1]
        logger.debug(
            "Resolved item {:#x} -> {} [{} {}/{}]",
            item_id,
            object_id,
            category.prefix,
            count,
            len(seq),
        )
        return object_id

    def reset_counters(self) -> None:
        """Zero all received counts. Call before the session replays its history."""
        self._received.clear()
        logger.debug("Item received counters reset")

    def received_count(self, prefix: str) -> int:
        return self._received.get(prefix, 0)

    def sequence(self, prefix: str) -> tuple[ObjectId, ...]:
        """Ordered object sequence granted for a category prefix."""
        return self._sequences.get(prefix, ())

    # Locations

    def location_id_for(self, object_id: ObjectId) -> LocationId:
        """Location id for an object, or UNKNOWN_LOCATION (-1)."""
        return self._location_by_object.get(object_id, UNKNOWN_LOCATION)

    def object_id_for(self, location_id: LocationId) -> ObjectId:
        """Object id for a location id, or an empty string."""
        return self._object_by_location.get(location_id, "")

    def is_known_object(self, object_id: ObjectId) -> bool:
        return object_id in self._location_by_object

    def all_location_ids(self) -> list[LocationId]:
        return sorted(self._object_by_location)

    def all_item_ids(self) -> list[ItemId]:
        return sorted(self._categories)

    # World encoding

    def to_world_key(self, object_id: ObjectId) -> str:
        """Translate a mod-encoded id (``"SL5"``) to its world key (``"**5"``).

        Ids whose encodings match are returned unchanged.
        """
        return self._world_key_by_object.get(object_id, object_id)

    def from_world_key(self, world_key: str) -> ObjectId:
        """Translate a world key back to a mod-encoded id.

        Unrecognized keys are returned unchanged.
        """
        return self._object_by_world_key.get(world_key, world_key)

    # Display

    def category_for(self, item_id: ItemId) -> ItemCategory | None:
        return self._categories.get(item_id)

    def display_name(self, item_id: ItemId) -> str:
        """Human-readable name for a remote item id (``"Green J"``), or ``""``."""
        category = self._categories.get(item_id)
        return category.display_name if category else ""

    def display_name_for_object(self, object_id: ObjectId) -> str:
        """Human-readable name for an object id (``"DJ3"`` -> ``"Green J"``)."""
        return self._prefix_names.get(extract_prefix(object_id), "")
