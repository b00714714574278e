"""Completion detection: decide when the session-ending condition has happened.

Lifecycle: WARMUP -> POLLING -> COMPLETED (terminal until reset()).

The warm-up keeps the detector away from world facilities that are not loaded
this early in start-up. While polling, an ordered list of independent
strategies runs each tick; the first one that returns an outcome wins, and
fire_goal() guarantees a single completion.

Usage:
    detector = GoalDetector(warmup_s=20.0)
    detector.start()
    ...
    outcome = detector.tick(state, world)
    if outcome is not None:
        session.send_goal_complete()
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

from loguru import logger
from typing_extensions import TypeAliasType

from worldsync.state import SessionState
from worldsync.world import names
from worldsync.world.protocol import WorldError, WorldInterface


class GoalPhase(Enum):
    WARMUP = auto()
    POLLING = auto()
    COMPLETED = auto()


@dataclass(frozen=True, slots=True)
class GoalOutcome:
    """Which ending was reached and which strategy saw it."""

    name: str
    source: str


GoalStrategy = TypeAliasType(
    "GoalStrategy", Callable[[SessionState, WorldInterface], GoalOutcome | None]
)


class GoalDetector:
    """Multi-strategy polling state machine raising a one-shot completion.

    Args:
        warmup_s: Seconds after start() before polling begins.
        item_threshold: Granted-item count required by the asset strategy.
        clock: Monotonic clock in seconds.
    """

    def __init__(
        self,
        warmup_s: float = 20.0,
        item_threshold: int = 90,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._warmup_s = warmup_s
        self._item_threshold = item_threshold
        self._clock = clock

        self._phase = GoalPhase.WARMUP
        self._ready_at: float | None = None
        self._outcome: GoalOutcome | None = None
        self._last_url = ""
        self._previous_completed = False

        self.strategies: list[GoalStrategy] = [
            self._check_media_players,
            self._check_ending_asset,
            self._check_completion_query,
        ]

    @property
    def phase(self) -> GoalPhase:
        return self._phase

    @property
    def is_completed(self) -> bool:
        return self._phase is GoalPhase.COMPLETED

    @property
    def completed_name(self) -> str | None:
        return self._outcome.name if self._outcome is not None else None

    @property
    def outcome(self) -> GoalOutcome | None:
        return self._outcome

    def start(self) -> None:
        """Start the warm-up clock."""
        self._ready_at = self._clock() + self._warmup_s
        logger.debug("Goal: polling will start in {:.1f}s", self._warmup_s)

    def reset(self) -> None:
        """Back to warm-up with all detection memory cleared (scenario restart)."""
        self._phase = GoalPhase.WARMUP
        self._outcome = None
        self._last_url = ""
        self._previous_completed = False
        self.start()
        logger.info("Goal state reset")

    def fire_goal(self, name: str, source: str) -> bool:
        """Record completion. Only the first call has any effect.

        Returns:
            True if this call completed the goal.
        """
        if self._phase is GoalPhase.COMPLETED:
            return False
        self._outcome = GoalOutcome(name, source)
        self._phase = GoalPhase.COMPLETED
        logger.success("GOAL: {} ACHIEVED! (source: {})", name, source)
        return True

    def tick(self, state: SessionState, world: WorldInterface) -> GoalOutcome | None:
        """Advance the lifecycle. Returns the outcome on the tick that completes."""
        if self._phase is GoalPhase.COMPLETED:
            return None

        if self._phase is GoalPhase.WARMUP:
            if self._ready_at is None:
                self.start()
            if self._clock() < self._ready_at:  # type: ignore[operator]
                return None
            self._phase = GoalPhase.POLLING
            logger.debug("Goal: polling active")

        for strategy in self.strategies:
            outcome = strategy(state, world)
            if outcome is not None and self.fire_goal(outcome.name, outcome.source):
                return outcome
        return None

    # Strategies

    def _check_media_players(
        self, state: SessionState, world: WorldInterface
    ) -> GoalOutcome | None:
        try:
            players = world.find_all(names.MEDIA_PLAYER)
        except WorldError:
            return None

        for player in players:
            try:
                if names.SECONDARY_MEDIA_CHANNEL not in world.full_name(player):
                    continue
            except WorldError:
                continue

            url = self._read_url(world, player)
            if not url or url == self._last_url:
                continue
            self._last_url = url
            logger.debug("Goal: secondary media player URL: {}", url)
            for marker, ending in names.ENDING_MARKERS.items():
                if marker in url:
                    return GoalOutcome(ending, "media player URL poll")
        return None

    @staticmethod
    def _read_url(world: WorldInterface, player: Any) -> str:
        # The URL property name varies between builds; first readable one wins.
        for prop in names.MEDIA_URL_PROPERTIES:
            try:
                url = world.get_property(player, prop)
            except WorldError:
                continue
            if url:
                return str(url)
        return ""

    def _check_ending_asset(self, state: SessionState, world: WorldInterface) -> GoalOutcome | None:
        try:
            sequence = world.find_asset(names.TRANSCENDENCE_ASSET)
        except WorldError:
            return None
        if sequence is not None and len(state.granted_items) >= self._item_threshold:
            return GoalOutcome("Transcendence", "ending sequence loaded")
        return None

    def _check_completion_query(
        self, state: SessionState, world: WorldInterface
    ) -> GoalOutcome | None:
        try:
            subsystem = world.find_first(names.SAVE_SUBSYSTEM)
            if subsystem is None:
                return None
            completed = bool(world.call(subsystem, names.IS_GAME_COMPLETED))
        except WorldError:
            return None

        rising = completed and not self._previous_completed
        self._previous_completed = completed
        if rising:
            return GoalOutcome("Unknown (polling fallback)", f"{names.SAVE_SUBSYSTEM}:{names.IS_GAME_COMPLETED}")
        return None
