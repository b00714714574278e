"""Tests for IdentifierMap.

Critical Invariants:
- The N-th receipt of a category resolves to the N-th object by number
- Exhausted or unknown categories resolve to None without raising
- reset_counters() makes a replay resolve identically
- Location ids and world keys are bijections
"""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from worldsync.core.identity import (
    ALL_SIGILS,
    ALL_STARS,
    ALL_TETROMINOES,
    BASE_ITEM_ID,
    BASE_LOCATION_ID,
    ITEM_CATEGORIES,
    UNKNOWN_LOCATION,
    ItemCategory,
    extract_number,
)
from worldsync.mapping import IdentifierMap

GREEN_J = BASE_ITEM_ID
STAR_ITEM = BASE_ITEM_ID + 20
SIGIL_ITEM = BASE_ITEM_ID + 19

ALL_OBJECTS = ALL_TETROMINOES + ALL_SIGILS + ALL_STARS


# Resolution


def test_green_j_three_times_then_fourth_resolves(mapping):
    """0x540000 received three times resolves to DJ1, DJ2, DJ3 in order."""
    assert [mapping.resolve_next_object(GREEN_J) for _ in range(3)] == ["DJ1", "DJ2", "DJ3"]


def test_resolution_exhausts_to_none(mapping):
    """CRITICAL: receiving more copies than objects exist is ignored, not an error."""
    seq = mapping.sequence("DJ")
    resolved = [mapping.resolve_next_object(GREEN_J) for _ in range(len(seq))]
    assert resolved == list(seq)
    assert mapping.resolve_next_object(GREEN_J) is None
    assert mapping.resolve_next_object(GREEN_J) is None


def test_exhausted_small_table_returns_none_after_three():
    mapping = IdentifierMap(
        categories=[ItemCategory(GREEN_J, "DJ", "Green J")],
        tetrominoes=["DJ3", "DJ1", "DJ2"],
        sigils=[],
        stars=[],
    )
    assert [mapping.resolve_next_object(GREEN_J) for _ in range(4)] == [
        "DJ1",
        "DJ2",
        "DJ3",
        None,
    ]


def test_unknown_item_id_resolves_to_none_and_warns(mapping, log_messages):
    assert mapping.resolve_next_object(0x123) is None
    assert any(level == "WARNING" for level, _ in log_messages)


def test_unknown_item_does_not_disturb_other_counts(mapping):
    mapping.resolve_next_object(GREEN_J)
    mapping.resolve_next_object(0x999999)
    assert mapping.resolve_next_object(GREEN_J) == "DJ2"


@pytest.mark.parametrize("category", ITEM_CATEGORIES, ids=lambda c: c.prefix)
def test_every_sequence_is_ascending_by_number(mapping, category):
    seq = mapping.sequence(category.prefix)
    assert seq, category.prefix
    numbers = [extract_number(object_id) for object_id in seq]
    assert numbers == sorted(numbers)


def test_stars_resolve_from_one_unified_sequence(mapping):
    """Both star sub-prefixes grant from one merged sequence in world encoding."""
    resolved = [mapping.resolve_next_object(STAR_ITEM) for _ in range(len(ALL_STARS))]
    assert resolved == [f"**{n}" for n in range(1, len(ALL_STARS) + 1)]
    assert mapping.resolve_next_object(STAR_ITEM) is None


def test_sigils_resolve_in_number_order(mapping):
    assert [mapping.resolve_next_object(SIGIL_ITEM) for _ in range(3)] == ["HL1", "HL2", "HL3"]


@given(st.lists(st.sampled_from([c.item_id for c in ITEM_CATEGORIES]), max_size=60))
@settings(max_examples=50)
def test_replay_after_reset_is_identical(receipts):
    """CRITICAL: without a reset before replay, resolution desyncs permanently."""
    mapping = IdentifierMap()
    first = [mapping.resolve_next_object(item_id) for item_id in receipts]
    mapping.reset_counters()
    second = [mapping.resolve_next_object(item_id) for item_id in receipts]
    assert first == second


def test_received_count_tracks_and_resets(mapping):
    mapping.resolve_next_object(GREEN_J)
    mapping.resolve_next_object(GREEN_J)
    assert mapping.received_count("DJ") == 2
    mapping.reset_counters()
    assert mapping.received_count("DJ") == 0


# Locations


def test_locations_are_contiguous_in_table_order(mapping):
    assert mapping.location_id_for(ALL_TETROMINOES[0]) == BASE_LOCATION_ID
    assert mapping.location_id_for(ALL_SIGILS[0]) == BASE_LOCATION_ID + len(ALL_TETROMINOES)
    assert mapping.location_id_for(ALL_STARS[0]) == BASE_LOCATION_ID + len(ALL_TETROMINOES) + len(
        ALL_SIGILS
    )
    assert mapping.all_location_ids() == list(
        range(BASE_LOCATION_ID, BASE_LOCATION_ID + len(ALL_OBJECTS))
    )


@given(st.sampled_from(ALL_OBJECTS))
def test_location_round_trip_from_object(object_id):
    mapping = IdentifierMap()
    assert mapping.object_id_for(mapping.location_id_for(object_id)) == object_id


def test_location_round_trip_from_every_location(mapping):
    for location_id in mapping.all_location_ids():
        assert mapping.location_id_for(mapping.object_id_for(location_id)) == location_id


def test_unknown_lookups_return_sentinels(mapping):
    assert mapping.location_id_for("XX1") == UNKNOWN_LOCATION
    assert mapping.object_id_for(0x1) == ""
    assert not mapping.is_known_object("XX1")


def test_duplicate_object_rejected():
    with pytest.raises(ValueError, match="Duplicate"):
        IdentifierMap(tetrominoes=["DJ1", "DJ1"], sigils=[], stars=[])


def test_all_item_ids(mapping):
    assert mapping.all_item_ids() == [c.item_id for c in ITEM_CATEGORIES]


# World keys


def test_star_world_keys(mapping):
    assert mapping.to_world_key("SL5") == "**5"
    assert mapping.to_world_key("SZ24") == "**24"
    assert mapping.from_world_key("**5") == "SL5"


def test_non_star_world_keys_are_identity(mapping):
    assert mapping.to_world_key("DJ3") == "DJ3"
    assert mapping.from_world_key("DJ3") == "DJ3"


def test_unrecognized_world_key_passes_through(mapping):
    assert mapping.from_world_key("BaseGameThing") == "BaseGameThing"
    assert not mapping.is_known_object(mapping.from_world_key("BaseGameThing"))


@given(st.sampled_from(ALL_STARS))
def test_world_key_round_trip(star):
    mapping = IdentifierMap()
    assert mapping.from_world_key(mapping.to_world_key(star)) == star


# Display


def test_display_names(mapping):
    assert mapping.display_name(GREEN_J) == "Green J"
    assert mapping.display_name(0x1) == ""
    assert mapping.display_name_for_object("DJ3") == "Green J"
    assert mapping.display_name_for_object("**5") == "Star"
    assert mapping.category_for(SIGIL_ITEM).prefix == "HL"
    assert mapping.category_for(0x1) is None
