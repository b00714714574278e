"""Static identifier tables.

Declaration order is part of the compatibility contract with the remote
session: location ids and item ids are assigned by enumerating these tables
in order from the base offsets. Never reorder entries.
"""

from __future__ import annotations

from worldsync.core.identity.models import ItemCategory

BASE_ITEM_ID = 0x540000
BASE_LOCATION_ID = 0x540000

STAR_PREFIX = "**"

# All tetrominoes in the game, grouped by world.
ALL_TETROMINOES: tuple[str, ...] = (
    # World A1
    "DJ3", "MT1", "DZ1", "DJ2", "DJ1", "ML1", "DI1",
    # World A2
    "ML2", "DL1", "DZ2",
    # World A3
    "MT2", "DZ3", "NL1", "MT3",
    # World A4
    "MZ1", "MZ2", "MT4", "MT5",
    # World A5
    "NZ1", "DI2", "DT1", "DT2", "DL2",
    # World A6
    "DZ4", "NL2", "NL3", "NZ2",
    # World A7
    "NL4", "DL3", "NT1", "NO1", "DT3",
    # World B1
    "ML3", "MZ3", "MS1", "MT6", "MT7",
    # World B2
    "NL5", "MS2", "MT8", "MZ4",
    # World B3
    "MT9", "MJ1", "NT2", "NL6",
    # World B4
    "NT3", "NT4", "DT4", "DJ4", "NL7", "NL8",
    # World B5
    "NI1", "NL9", "NS1", "DJ5", "NZ3",
    # World B6
    "NI2", "MT10", "ML4",
    # World B7
    "NJ1", "NI3", "MO1", "MI1",
    # World C1
    "NZ4", "NJ2", "NI4", "NT5",
    # World C2
    "NZ5", "NO2", "NT6", "NS2",
    # World C3
    "NJ3", "NO3", "NZ6", "NT7",
    # World C4
    "NT8", "NI5", "NS3", "NT9",
    # World C5
    "NI6", "NO4", "NO5", "NT10",
    # World C6
    "NS4", "NJ4", "NO6",
    # World C7
    "NT11", "NO7", "NT12", "NL10",
)

ALL_SIGILS: tuple[str, ...] = tuple(f"HL{n}" for n in range(1, 25))

# Stars keep the remote world's ordering, which is not numeric.
ALL_STARS: tuple[str, ...] = (
    "SL5", "SL2", "SZ3", "SL1", "SL4", "SL7",
    "SL6", "SZ8", "SL9", "SL10", "SL11", "SL12",
    "SL13", "SZ24", "SZ14", "SZ15", "SL16", "SL17",
    "SL18", "SL19", "SL20", "SL21", "SL22", "SL23",
    "SL27", "SL29", "SL30", "SZ26", "SL25", "SL28",
)

# Remote item categories, numbered from BASE_ITEM_ID in this order.
ITEM_CATEGORIES: tuple[ItemCategory, ...] = tuple(
    ItemCategory(item_id=BASE_ITEM_ID + offset, prefix=prefix, display_name=name)
    for offset, (prefix, name) in enumerate(
        [
            ("DJ", "Green J"),
            ("DZ", "Green Z"),
            ("DI", "Green I"),
            ("DL", "Green L"),
            ("DT", "Green T"),
            ("MT", "Golden T"),
            ("ML", "Golden L"),
            ("MZ", "Golden Z"),
            ("MS", "Golden S"),
            ("MJ", "Golden J"),
            ("MO", "Golden O"),
            ("MI", "Golden I"),
            ("NL", "Red L"),
            ("NZ", "Red Z"),
            ("NT", "Red T"),
            ("NI", "Red I"),
            ("NJ", "Red J"),
            ("NO", "Red O"),
            ("NS", "Red S"),
            ("HL", "Purple Sigil"),
            (STAR_PREFIX, "Star"),
        ]
    )
)
