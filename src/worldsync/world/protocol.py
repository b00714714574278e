"""World interface protocol for swappable game-world backends.

The world interface abstracts the host game's object model:
- Entity lookup by category
- Property read/write by name
- Function invocation by name
- Full-name and static-asset lookup

Usage:
    world = LocalWorld()
    orchestrator = Orchestrator(world=world)
"""

from __future__ import annotations

from collections.abc import MutableMapping
from typing import Any, Protocol, runtime_checkable

Vector = tuple[float, float, float]
"""World-space position (x, y, z)."""

CollectionView = MutableMapping[str, bool]
"""The world's collection map: world-encoded key -> "used" marker.

Views are borrowed: valid for the pass that acquired them only. A world may
hand out a fresh wrapper object on every read.
"""


class WorldError(Exception):
    """A world-interface call failed. State is unknown; retry next pass."""


class StaleHandleError(WorldError):
    """The world reclaimed an entity or collection between passes."""


class PropertyMissingError(WorldError):
    """The entity has no property with the requested name."""


class FunctionMissingError(WorldError):
    """The entity has no function with the requested name."""


@runtime_checkable
class WorldInterface(Protocol):
    """Abstract game-world interface. Implementations wrap the host engine.

    Every method may raise WorldError. Callers treat that as transient and
    retry on a later pass from a fresh lookup.
    """

    def find_all(self, category: str) -> list[Any]:
        """All live entities of a category."""
        ...

    def find_first(self, category: str) -> Any | None:
        """First live entity of a category, or None."""
        ...

    def get_property(self, entity: Any, name: str) -> Any:
        """Read a named property."""
        ...

    def set_property(self, entity: Any, name: str, value: Any) -> None:
        """Write a named property without triggering side effects."""
        ...

    def call(self, entity: Any, function: str, *args: Any) -> Any:
        """Invoke a named function on an entity and return its result."""
        ...

    def full_name(self, entity: Any) -> str:
        """Fully qualified entity name."""
        ...

    def find_asset(self, path: str) -> Any | None:
        """Static object loaded at `path`, or None if not in memory."""
        ...
