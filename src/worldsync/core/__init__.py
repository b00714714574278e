"""Core functionalities: stateless identifier tables and operations.

Architecture Note:
    core/ contains pure, stateless building blocks with no runtime state
    mutation. For stateful services, see mapping/, state/, sync/ and
    orchestration/.
"""

from worldsync.core.identity import (
    ALL_SIGILS,
    ALL_STARS,
    ALL_TETROMINOES,
    BASE_ITEM_ID,
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
    format_object_id,
    is_bonus_puzzle,
    is_sigil,
    is_star,
    parse_object_id,
)
from worldsync.core.types import Borrowed

__all__ = [
    # Types
    "Borrowed",
    "ItemId",
    "LocationId",
    "ObjectId",
    # Identity
    "ItemCategory",
    "UNKNOWN_LOCATION",
    "extract_prefix",
    "extract_number",
    "is_sigil",
    "is_star",
    "is_bonus_puzzle",
    "format_object_id",
    "parse_object_id",
    # Tables
    "ALL_TETROMINOES",
    "ALL_SIGILS",
    "ALL_STARS",
    "ITEM_CATEGORIES",
    "BASE_ITEM_ID",
    "BASE_LOCATION_ID",
    "STAR_PREFIX",
]
