"""Tests for flag-triggered debug commands."""

from worldsync.notify import QueuedNotifier
from worldsync.orchestration import DebugCommands
from worldsync.state import SessionState
from worldsync.sync import InventorySync, PickupTracker
from worldsync.tracing import PassHistory, PassRecord


def test_no_flags_no_output(mapping, world):
    commands = DebugCommands(InventorySync(mapping))
    notifier = QueuedNotifier(sink=lambda message: None)

    assert commands.process(SessionState(), world, notifier) == []
    assert not notifier.delivered


def test_dump_combines_inventory_placement_and_history(mapping, world, collection):
    collection.update({"DJ1": False})
    history = PassHistory()
    history.record_pass(PassRecord(number=1, frame=3, timestamp=0.0, steps=["reconcile"]))
    commands = DebugCommands(InventorySync(mapping), PickupTracker(mapping), history)
    state = SessionState()
    state.debug_dump_requested.set()

    lines = commands.process(state, world, None)

    assert "=== Collection (1 entries) ===" in lines
    assert "=== Tracked pickups (0) ===" in lines
    assert "=== Recent passes (1) ===" in lines
    assert "  pass 1 (frame 3): 1 steps, ok" in lines
    assert not state.debug_dump_requested.is_set()


def test_dump_runs_once_per_request(mapping, world):
    commands = DebugCommands(InventorySync(mapping))
    state = SessionState()
    state.debug_dump_requested.set()

    assert commands.process(state, world, None)
    assert commands.process(state, world, None) == []


def test_notification_test_needs_notifier(mapping, world):
    state = SessionState()
    state.debug_test_requested.set()
    commands = DebugCommands(InventorySync(mapping))

    commands.process(state, world, None)
    assert not state.debug_test_requested.is_set()

    notifier = QueuedNotifier(sink=lambda message: None)
    state.debug_test_requested.set()
    commands.process(state, world, notifier)
    assert len(notifier.delivered) == 4


def test_dump_lists_failed_steps(mapping, world):
    history = PassHistory()
    history.record_pass(
        PassRecord(number=2, frame=5, timestamp=0.0, failures={"visibility": "err"})
    )
    commands = DebugCommands(InventorySync(mapping), history=history)
    state = SessionState()
    state.debug_dump_requested.set()

    lines = commands.process(state, world, None)

    assert "  pass 2 (frame 5): 0 steps, 1 failed" in lines
    assert "    visibility: err" in lines
