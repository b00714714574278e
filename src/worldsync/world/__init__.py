"""Game-world interface.

Architecture Note:
    world/ defines how the core reaches into the host game. The real
    implementation lives in the host; LocalWorld is an in-memory stand-in for
    offline runs and tests.
"""

from worldsync.world.local import LocalCollection, LocalEntity, LocalWorld
from worldsync.world.protocol import (
    CollectionView,
    FunctionMissingError,
    PropertyMissingError,
    StaleHandleError,
    Vector,
    WorldError,
    WorldInterface,
)

__all__ = [
    "WorldInterface",
    "CollectionView",
    "Vector",
    "WorldError",
    "StaleHandleError",
    "PropertyMissingError",
    "FunctionMissingError",
    "LocalWorld",
    "LocalEntity",
    "LocalCollection",
]
