from worldsync.core.identity.models import (
    UNKNOWN_LOCATION,
    ItemCategory,
    ItemId,
    LocationId,
    ObjectId,
)
from worldsync.core.identity.operations import (
    extract_number,
    extract_prefix,
    format_object_id,
    is_bonus_puzzle,
    is_sigil,
    is_star,
    parse_object_id,
)
from worldsync.core.identity.tables import (
    ALL_SIGILS,
    ALL_STARS,
    ALL_TETROMINOES,
    BASE_ITEM_ID,
    BASE_LOCATION_ID,
    ITEM_CATEGORIES,
    STAR_PREFIX,
)

__all__ = [
    "ItemId",
    "LocationId",
    "ObjectId",
    "ItemCategory",
    "UNKNOWN_LOCATION",
    "extract_prefix",
    "extract_number",
    "is_sigil",
    "is_star",
    "is_bonus_puzzle",
    "format_object_id",
    "parse_object_id",
    "ALL_TETROMINOES",
    "ALL_SIGILS",
    "ALL_STARS",
    "ITEM_CATEGORIES",
    "BASE_ITEM_ID",
    "BASE_LOCATION_ID",
    "STAR_PREFIX",
]
