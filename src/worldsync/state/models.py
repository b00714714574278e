"""Shared synchronization state.

SessionState is the one mutable record every component reads and writes. It
holds no logic beyond small helpers that keep its invariants local.

Usage:
    state = SessionState.from_settings(settings)
    state.granted_items.add("DJ1")
    if state.needs_refresh.exchange():
        ...
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Any

from worldsync.core.identity import ObjectId

if TYPE_CHECKING:
    from worldsync.config import SyncSettings


class OneShotFlag:
    """Single-writer/single-reader flag, safe to set from another callback context.

    The consumer reads and clears it in one step with exchange().
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._value = False

    def set(self) -> None:
        with self._lock:
            self._value = True

    def exchange(self, value: bool = False) -> bool:
        """Store `value` and return the previous value atomically."""
        with self._lock:
            previous = self._value
            self._value = value
            return previous

    def is_set(self) -> bool:
        with self._lock:
            return self._value

    def __repr__(self) -> str:
        return f"OneShotFlag({self.is_set()})"


class DeathLinkPhase(Enum):
    """Lifecycle of an incoming remote death event."""

    IDLE = auto()
    """Nothing to deliver."""

    PENDING = auto()
    """Delivery should be attempted on the next pass."""

    DEFERRED = auto()
    """No proxy object existed; waiting for the next world transition to re-arm."""


@dataclass
class IncomingDeath:
    """Incoming death event with its source and cause."""

    phase: DeathLinkPhase = DeathLinkPhase.IDLE
    source: str = ""
    cause: str = ""

    def receive(self, source: str, cause: str) -> None:
        self.phase = DeathLinkPhase.PENDING
        self.source = source
        self.cause = cause

    def take(self) -> bool:
        """Consume a pending event. Returns True if one was pending."""
        if self.phase is not DeathLinkPhase.PENDING:
            return False
        self.phase = DeathLinkPhase.IDLE
        return True

    def defer(self) -> None:
        self.phase = DeathLinkPhase.DEFERRED

    def rearm(self) -> bool:
        """Move a deferred event back to pending. Returns True if one was deferred."""
        if self.phase is not DeathLinkPhase.DEFERRED:
            return False
        self.phase = DeathLinkPhase.PENDING
        return True

    @property
    def deferred(self) -> bool:
        return self.phase is DeathLinkPhase.DEFERRED


@dataclass
class EchoGuard:
    """One-shot guard suppressing the local death caused by replaying a remote one.

    Attributes:
        timeout: Seconds after arming during which the guard may be consumed.
            None keeps the guard armed indefinitely.
        armed_at: Clock reading when the guard was armed, None when disarmed.
    """

    timeout: float | None = 30.0
    armed_at: float | None = None

    @property
    def armed(self) -> bool:
        return self.armed_at is not None

    def arm(self, now: float) -> None:
        self.armed_at = now

    def disarm(self) -> None:
        self.armed_at = None

    def consume(self, now: float) -> bool:
        """Clear the guard. Returns True only if it was armed and not expired."""
        if self.armed_at is None:
            return False
        armed_at, self.armed_at = self.armed_at, None
        return self.timeout is None or now - armed_at <= self.timeout

    def expired(self, now: float) -> bool:
        if self.armed_at is None or self.timeout is None:
            return False
        return now - self.armed_at > self.timeout


@dataclass
class SessionState:
    """Synchronization progress and pending cross-cutting signals.

    Invariants:
        - granted_items only grows, except through an explicit revoke.
        - checked_locations only holds objects passed to the report path.
        - The collection handle is held for one pass only and released at the end
          of it; it must be re-acquired before use and may be stale by then.
    """

    sync_active: bool = False
    granted_items: set[ObjectId] = field(default_factory=set)
    checked_locations: set[ObjectId] = field(default_factory=set)

    # One-shot signals, each cleared by exactly one consumer
    needs_refresh: OneShotFlag = field(default_factory=OneShotFlag)
    needs_rescan: OneShotFlag = field(default_factory=OneShotFlag)
    debug_dump_requested: OneShotFlag = field(default_factory=OneShotFlag)
    debug_test_requested: OneShotFlag = field(default_factory=OneShotFlag)

    # DeathLink
    death_link_enabled: bool = False
    echo: EchoGuard = field(default_factory=EchoGuard)
    pending_outgoing: OneShotFlag = field(default_factory=OneShotFlag)
    incoming: IncomingDeath = field(default_factory=IncomingDeath)

    # Reconciliation toggles
    randomize_sigils: bool = True
    randomize_stars: bool = True
    reusable_objects: bool = False

    cooldown_until: float | None = None

    _collection: Any | None = field(default=None, repr=False)

    @classmethod
    def from_settings(cls, settings: SyncSettings) -> SessionState:
        """Build initial state from configuration."""
        return cls(
            sync_active=settings.offline_mode,
            death_link_enabled=settings.death_link,
            echo=EchoGuard(timeout=settings.echo_suppression_timeout_s),
            randomize_sigils=settings.randomize_sigils,
            randomize_stars=settings.randomize_stars,
            reusable_objects=settings.reusable_objects,
        )

    # Collection handle

    def hold_collection(self, collection: Any) -> None:
        """Remember the live collection for the current pass only."""
        self._collection = collection

    def collection(self) -> Any | None:
        """The collection acquired this pass, or None once released."""
        return self._collection

    def release_collection(self) -> None:
        self._collection = None

    # World-transition cooldown

    def begin_cooldown(self, now: float, seconds: float) -> None:
        self.cooldown_until = now + seconds

    def in_cooldown(self, now: float) -> bool:
        return self.cooldown_until is not None and now < self.cooldown_until
