"""Tests for inventory reconciliation.

Critical Invariants:
- After a pass the recognized part of the collection equals the granted set
- Keys the IdentifierMap does not recognize are never touched
- A second pass with unchanged grants performs no mutation
- One failed removal does not stop the others
- A stale collection aborts the pass without raising
"""

from hypothesis import given, settings
from hypothesis import strategies as st

from worldsync.core.identity import ALL_SIGILS, ALL_TETROMINOES
from worldsync.mapping import IdentifierMap
from worldsync.state import SessionState
from worldsync.sync import UNUSED, InventorySync
from worldsync.world import LocalCollection, LocalWorld

_MAPPING = IdentifierMap()


def _acquire(inventory, state, world):
    collection = inventory.acquire_collection(state, world)
    assert collection is not None
    return collection


def test_single_grant_into_empty_collection(mapping, state, world, collection):
    """grantedItems = {"DJ1"} and an empty collection -> exactly {"DJ1": unused}."""
    inventory = InventorySync(mapping)
    inventory.grant_item(state, "DJ1")
    _acquire(inventory, state, world)

    report = inventory.enforce(state)

    assert collection.snapshot() == {"DJ1": UNUSED}
    assert report.added == ["DJ1"]
    assert not report.removed


def test_ungranted_entries_removed(mapping, state, world, collection):
    collection.update({"DJ1": True, "DJ2": False, "MT1": True})
    inventory = InventorySync(mapping)
    inventory.grant_item(state, "DJ1")
    _acquire(inventory, state, world)

    report = inventory.enforce(state)

    assert collection.snapshot() == {"DJ1": True}
    assert sorted(report.removed) == ["DJ2", "MT1"]


def test_second_pass_is_idempotent(mapping, state, world, collection):
    """CRITICAL: reconciliation converges; the second pass writes nothing."""
    collection.update({"DJ2": False, "Foreign": True})
    inventory = InventorySync(mapping)
    for object_id in ("DJ1", "MT3", "**5"):
        inventory.grant_item(state, object_id)

    _acquire(inventory, state, world)
    assert inventory.enforce(state).mutated()
    mutations = collection.mutations

    _acquire(inventory, state, world)
    report = inventory.enforce(state)
    assert not report.mutated()
    assert collection.mutations == mutations


@given(
    foreign=st.dictionaries(
        st.text(min_size=1, max_size=8).filter(
            lambda key: not _MAPPING.is_known_object(_MAPPING.from_world_key(key))
        ),
        st.booleans(),
        max_size=8,
    ),
    granted=st.sets(st.sampled_from(ALL_TETROMINOES + ALL_SIGILS), max_size=10),
)
@settings(max_examples=50, deadline=None)
def test_foreign_keys_never_touched(foreign, granted):
    """CRITICAL: content owned by the base game or other mods survives untouched."""
    world = LocalWorld()
    collection = world.install_progress(foreign)
    state = SessionState(sync_active=True)
    inventory = InventorySync(_MAPPING)
    for object_id in granted:
        inventory.grant_item(state, object_id)

    inventory.acquire_collection(state, world)
    inventory.enforce(state)

    snapshot = collection.snapshot()
    for key, value in foreign.items():
        assert snapshot[key] == value
    assert set(snapshot) == set(foreign) | granted


def test_stars_are_matched_by_world_key(mapping, state, world, collection):
    collection.update({"**5": False, "**2": False})
    inventory = InventorySync(mapping)
    inventory.grant_item(state, "**5")
    _acquire(inventory, state, world)

    inventory.enforce(state)

    assert collection.snapshot() == {"**5": False}


def test_disabled_toggles_leave_category_alone(mapping, world, collection):
    collection.update({"HL3": True, "**7": True, "DJ1": True})
    state = SessionState(sync_active=True, randomize_sigils=False, randomize_stars=False)
    inventory = InventorySync(mapping)
    _acquire(inventory, state, world)

    inventory.enforce(state)

    assert collection.snapshot() == {"HL3": True, "**7": True}


def test_reusable_objects_reset_used_markers(mapping, world, collection):
    collection.update({"DJ1": True, "Foreign": True})
    state = SessionState(sync_active=True, reusable_objects=True)
    inventory = InventorySync(mapping)
    inventory.grant_item(state, "DJ1")
    _acquire(inventory, state, world)

    report = inventory.enforce(state)
    assert collection.snapshot() == {"DJ1": False, "Foreign": True}
    assert report.reset == ["DJ1"]

    _acquire(inventory, state, world)
    assert not inventory.enforce(state).reset


def test_inactive_sync_is_noop(mapping, world, collection):
    collection.update({"DJ2": True})
    state = SessionState(sync_active=False)
    inventory = InventorySync(mapping)
    inventory.acquire_collection(state, world)

    report = inventory.enforce(state)

    assert report.skipped
    assert collection.snapshot() == {"DJ2": True}


def test_no_collection_is_noop(mapping, state):
    report = InventorySync(mapping).enforce(state)
    assert report.skipped


def test_failed_removal_does_not_abort_others(mapping, state, world, collection):
    collection.update({"DJ1": False, "DJ2": False, "DJ3": False})
    collection.fail_removal_of.add("DJ2")
    inventory = InventorySync(mapping)
    _acquire(inventory, state, world)

    report = inventory.enforce(state)

    assert report.failed == ["DJ2"]
    assert sorted(report.removed) == ["DJ1", "DJ3"]
    assert collection.snapshot() == {"DJ2": False}


def test_stale_collection_aborts_pass(mapping, state, world, collection, log_messages):
    inventory = InventorySync(mapping)
    _acquire(inventory, state, world)
    collection.invalidate()

    report = inventory.enforce(state)

    assert report.skipped
    assert any("iterating" in text for _, text in log_messages)


def test_acquire_without_progress_returns_none(mapping, state):
    assert InventorySync(mapping).acquire_collection(state, LocalWorld()) is None
    assert state.collection() is None


def test_acquire_replaces_previous_handle(mapping, state, world, collection):
    inventory = InventorySync(mapping)
    stale = LocalCollection()
    state.hold_collection(stale)

    assert inventory.acquire_collection(state, world) is collection
    assert state.collection() is collection


def test_grant_and_revoke(mapping, state):
    inventory = InventorySync(mapping)
    assert inventory.grant_item(state, "DJ1")
    assert not inventory.grant_item(state, "DJ1")
    state.checked_locations.add("DJ1")

    inventory.revoke_item(state, "DJ1")

    assert "DJ1" not in state.granted_items
    assert "DJ1" not in state.checked_locations


def test_dump_lists_collection_and_sets(mapping, state, world, collection):
    collection.update({"DJ1": True, "**5": False})
    state.granted_items.update({"DJ1", "**5"})
    state.checked_locations.add("SL5")
    inventory = InventorySync(mapping)
    _acquire(inventory, state, world)

    lines = inventory.dump(state)

    assert "=== Collection (2 entries) ===" in lines
    assert "  '**5' (SL5) = false (unused)" in lines
    assert "=== Granted items (2) ===" in lines
    assert "  SL5" in lines


def test_dump_without_collection(mapping, state):
    assert InventorySync(mapping).dump(state)[0] == "No progress object for dump"


def test_fresh_wrapper_collection_is_enforced(mapping, wrapping_world):
    """CRITICAL: a view the world hands out per read stays usable for the whole pass."""
    world, backing = wrapping_world
    state = SessionState(sync_active=True)
    inventory = InventorySync(mapping)
    inventory.grant_item(state, "DJ1")

    inventory.acquire_collection(state, world)
    report = inventory.enforce(state)

    assert not report.skipped
    assert backing.snapshot() == {"DJ1": UNUSED}
