"""Shared test fixtures."""

import sys
from collections.abc import MutableMapping

import pytest

# Ensure src is in path
sys.path.insert(0, "src")

from loguru import logger

from worldsync import IdentifierMap, LocalWorld, SessionState, SyncSettings
from worldsync.world import names


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CollectionWrapper(MutableMapping):
    """Short-lived view over a collection, like an engine binding returns."""

    def __init__(self, backing):
        self._backing = backing

    def __getitem__(self, key):
        return self._backing[key]

    def __setitem__(self, key, value):
        self._backing[key] = value

    def __delitem__(self, key):
        del self._backing[key]

    def __iter__(self):
        return iter(self._backing)

    def __len__(self):
        return len(self._backing)


class WrappingWorld(LocalWorld):
    """LocalWorld that hands out a new collection wrapper on every read."""

    def get_property(self, entity, name):
        value = super().get_property(entity, name)
        if name == names.COLLECTION_PROPERTY:
            return CollectionWrapper(value)
        return value


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mapping():
    """Identifier tables built from the shipped data."""
    return IdentifierMap()


@pytest.fixture
def world():
    """World with a progress object (empty collection) and a live player."""
    world = LocalWorld()
    world.install_progress()
    world.install_player((0.0, 0.0, 0.0))
    return world


@pytest.fixture
def collection(world):
    """The world's live collection map."""
    progress = world.find_first("TalosProgress")
    return progress.properties["CollectedTetrominos"]


@pytest.fixture
def state():
    """Synced state with every reconciliation toggle at its default."""
    return SessionState(sync_active=True)


@pytest.fixture
def settings():
    """Online settings with DeathLink on, isolated from the environment."""
    return SyncSettings(
        _env_file=None,
        offline_mode=False,
        death_link=True,
        tick_interval_ms=200,
        transition_cooldown_s=10.0,
        goal_warmup_s=20.0,
    )


@pytest.fixture
def log_messages():
    """Capture loguru messages as (level, text) pairs."""
    messages: list[tuple[str, str]] = []
    handler_id = logger.add(
        lambda message: messages.append(
            (message.record["level"].name, message.record["message"])
        ),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


@pytest.fixture
def wrapping_world():
    """World whose collection property is a fresh wrapper per read, plus the backing map."""
    world = WrappingWorld()
    backing = world.install_progress()
    world.install_player((0.0, 0.0, 0.0))
    return world, backing
