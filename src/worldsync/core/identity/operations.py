"""Pure operations on object identifiers.

Object ids in mod encoding are a letter prefix followed by a number: the first
letter is the object type, the second its shape (``"DJ3"`` is Door-type, J-shape,
number 3). Stars use ``"**"`` as prefix in world encoding.
"""

from __future__ import annotations

from worldsync.core.identity.models import ObjectId

TYPE_LETTERS: dict[int, str] = {
    1: "D",  # Door
    2: "M",  # Mechanic
    4: "N",  # Nexus
    8: "S",  # Secret
    16: "E",  # Alternative ending
    32: "A",  # Arcade
    64: "H",  # Help
}

SHAPE_LETTERS: dict[int, str] = {
    1: "I",
    2: "J",
    4: "L",
    8: "O",
    16: "S",
    32: "T",
    64: "Z",
}

_LETTER_TYPES = {letter: value for value, letter in TYPE_LETTERS.items()}
_LETTER_SHAPES = {letter: value for value, letter in SHAPE_LETTERS.items()}


def _prefix_length(object_id: str) -> int:
    i = 0
    while i < len(object_id) and (object_id[i].isalpha() or object_id[i] == "*"):
        i += 1
    return i


def extract_prefix(object_id: ObjectId) -> str:
    """Letter prefix of an object id (``"DJ3"`` -> ``"DJ"``, ``"**5"`` -> ``"**"``)."""
    return object_id[: _prefix_length(object_id)]


def extract_number(object_id: ObjectId) -> int:
    """Numeric suffix of an object id, 0 when there is none or it is malformed."""
    suffix = object_id[_prefix_length(object_id) :]
    return int(suffix) if suffix.isdigit() else 0


def is_sigil(object_id: ObjectId) -> bool:
    """Purple sigils use the ``HL`` prefix."""
    return len(object_id) >= 3 and object_id.startswith("HL")


def is_star(object_id: ObjectId) -> bool:
    """Stars are ``**N`` in world encoding and ``SL{n}``/``SZ{n}`` in mod encoding."""
    if len(object_id) < 3:
        return False
    return object_id.startswith("**") or object_id[:2] in ("SL", "SZ")


def is_bonus_puzzle(object_id: ObjectId) -> bool:
    """Bonus puzzles use the ``ES``, ``EL`` or ``EO`` prefixes."""
    return len(object_id) >= 3 and object_id[:2] in ("ES", "EL", "EO")


def format_object_id(type_value: int, shape_value: int, number: int) -> ObjectId:
    """Build an object id from the world's (type, shape, number) bit-flag triple.

    Unknown flags are rendered as ``T{n}``/``S{n}`` so they never collide with a
    known id.
    """
    type_letter = TYPE_LETTERS.get(type_value, f"T{type_value}")
    shape_letter = SHAPE_LETTERS.get(shape_value, f"S{shape_value}")
    return f"{type_letter}{shape_letter}{number}"


def parse_object_id(object_id: ObjectId) -> tuple[int, int, int] | None:
    """Inverse of format_object_id. Returns None for ids it cannot parse."""
    if len(object_id) < 3:
        return None
    type_value = _LETTER_TYPES.get(object_id[0])
    shape_value = _LETTER_SHAPES.get(object_id[1])
    number = object_id[2:]
    if type_value is None or shape_value is None or not number.isdigit():
        return None
    return type_value, shape_value, int(number)
