"""Identifier models.

Usage:
    category = ItemCategory(item_id=0x540000, prefix="DJ", display_name="Green J")
    category.owns("DJ3")  # True
"""

from __future__ import annotations

from dataclasses import dataclass

ItemId = int
"""Remote item identifier (one per category)."""

LocationId = int
"""Remote location identifier (one per physical object)."""

ObjectId = str
"""Local object identifier in mod encoding, e.g. ``"DJ3"`` or ``"SL5"``."""

UNKNOWN_LOCATION: LocationId = -1
"""Sentinel returned for objects that have no remote location."""


@dataclass(frozen=True, slots=True)
class ItemCategory:
    """A remote item type and the local object prefix it grants from."""

    item_id: ItemId
    prefix: str
    display_name: str

    def owns(self, object_id: ObjectId) -> bool:
        """Check if an object id belongs to this category's sequence."""
        from worldsync.core.identity.operations import extract_prefix

        return extract_prefix(object_id) == self.prefix
