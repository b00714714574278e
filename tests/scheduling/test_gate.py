"""Tests for the wall-clock tick gate.

Critical Invariants:
- The first check always opens
- Later checks open only once the interval has elapsed since the last open
- Frame counting is independent of whether the gate opens
"""

import pytest

from worldsync.scheduling import TickGate


def test_first_check_opens(clock):
    gate = TickGate(interval_ms=200, clock=clock)
    assert gate.should_proceed()
    assert not gate.should_proceed()


def test_opens_after_interval(clock):
    gate = TickGate(interval_ms=200, clock=clock)
    gate.should_proceed()

    clock.advance(0.1)
    assert not gate.should_proceed()
    clock.advance(0.15)
    assert gate.should_proceed()


def test_interval_measured_from_last_open(clock):
    """A closed check does not move the reference point."""
    gate = TickGate(interval_ms=200, clock=clock)
    gate.should_proceed()
    for _ in range(3):
        clock.advance(0.05)
        gate.should_proceed()

    clock.advance(0.1)
    assert gate.should_proceed()


def test_frame_count_tracks_advances(clock):
    gate = TickGate(clock=clock)
    for _ in range(5):
        gate.advance()
    assert gate.frame_count == 5


def test_zero_interval_opens_every_check(clock):
    gate = TickGate(interval_ms=0, clock=clock)
    assert all(gate.should_proceed() for _ in range(4))


def test_reset_reopens(clock):
    gate = TickGate(interval_ms=200, clock=clock)
    gate.should_proceed()
    gate.reset()
    assert gate.should_proceed()


def test_negative_interval_rejected():
    with pytest.raises(ValueError):
        TickGate(interval_ms=-1)


def test_interval_ms_round_trips():
    assert TickGate(interval_ms=250).interval_ms == 250
