"""Orchestrator: sequences every synchronization service once per gated pass.

Usage:
    orchestrator = Orchestrator(world, SyncSettings(), session=client, notifier=hud)

    # Host hooks
    world_hooks.on_frame(orchestrator.tick)
    world_hooks.on_player_death(orchestrator.on_local_death)
    world_hooks.on_level_loaded(orchestrator.on_world_transition)
    world_hooks.on_quit(orchestrator.shutdown)

Pass order, after the tick gate opens:
    deferred_refresh, deathlink_incoming, deathlink_outgoing, debug_commands,
    deferred_rescan, reconcile, visibility, pending_opens, goal_tick, goal_report

The session client is polled on every host frame, whether or not the gate
opens. Every step is isolated: an exception is logged with its traceback,
recorded on the pass record, and the next step still runs.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable

from loguru import logger

from worldsync.config import SyncSettings
from worldsync.core.identity import UNKNOWN_LOCATION, ObjectId
from worldsync.mapping import IdentifierMap
from worldsync.notify import Notifier, NotifyColor, QueuedNotifier
from worldsync.orchestration.debug import DebugCommands
from worldsync.scheduling import PassPlan, PassStep, TickGate
from worldsync.session import (
    ConnectionEstablished,
    DeathLinkReceived,
    ItemReceived,
    SessionClient,
    SessionEvent,
)
from worldsync.state import SessionState
from worldsync.sync import (
    DeathLinkHandler,
    GoalDetector,
    InventorySync,
    PickupTracker,
    Placement,
)
from worldsync.tracing import HistoryStore, PassHistory, PassRecord
from worldsync.world.protocol import WorldInterface


class Orchestrator:
    """Owns the session lifecycle and drives one pass per open gate.

    Args:
        world: World interface for the running game.
        settings: Engine configuration. Defaults to SyncSettings() from the environment.
        session: Session client. None runs without network (offline mode).
        notifier: Message surface. Defaults to a QueuedNotifier with no display.
        placement: Placement collaborator. Defaults to a PickupTracker.
        mapping: Identifier tables. Defaults to the built-in tables.
        clock: Monotonic clock in seconds, shared by every timer.
        history: Pass record storage. Defaults to a bounded PassHistory.
    """

    def __init__(
        self,
        world: WorldInterface,
        settings: SyncSettings | None = None,
        *,
        session: SessionClient | None = None,
        notifier: Notifier | None = None,
        placement: Placement | None = None,
        mapping: IdentifierMap | None = None,
        clock: Callable[[], float] = time.monotonic,
        history: HistoryStore | None = None,
    ):
        self.settings = settings or SyncSettings()
        self.world = world
        self.session = session
        self.notifier: Notifier = notifier if notifier is not None else QueuedNotifier()
        self.mapping = mapping if mapping is not None else IdentifierMap()
        self.placement: Placement = (
            placement if placement is not None else PickupTracker(self.mapping)
        )
        self.history: HistoryStore = (
            history if history is not None else PassHistory(self.settings.history_size)
        )
        self.state = SessionState.from_settings(self.settings)

        self.inventory = InventorySync(self.mapping)
        self.deathlink = DeathLinkHandler(cause=self.settings.death_link_cause, clock=clock)
        self.goal = GoalDetector(
            warmup_s=self.settings.goal_warmup_s,
            item_threshold=self.settings.goal_item_threshold,
            clock=clock,
        )
        self.gate = TickGate(self.settings.tick_interval_ms, clock=clock)
        self.debug = DebugCommands(self.inventory, self.placement, self.history)

        self._clock = clock
        self._shutdown = threading.Event()
        self._cooldown_was_active = False
        self._goal_sent = False
        self._pass_count = 0
        self._current: PassRecord | None = None
        self.plan: PassPlan = self._build_plan()

        self.goal.start()
        logger.info(
            "Orchestrator ready (offline={}, death_link={}, tick={}ms)",
            self.settings.offline_mode,
            self.state.death_link_enabled,
            self.settings.tick_interval_ms,
        )

    # Host callbacks

    def tick(self) -> PassRecord | None:
        """Per-frame entry point. Returns the pass record if the gate opened."""
        if self._shutdown.is_set():
            return None

        self.gate.advance()
        self.poll_session()

        if not self.gate.should_proceed():
            return None

        now = self._clock()
        self._pass_count += 1
        record = PassRecord(number=self._pass_count, frame=self.gate.frame_count, timestamp=now)
        self._current = record
        try:
            if self._handle_cooldown(now):
                record.cooldown = True
            else:
                self._run_plan(record)
        finally:
            # Never carry a world handle across a pass boundary.
            self.state.release_collection()
            self._current = None
            self.history.record_pass(record)
            if not record.ok:
                logger.warning(
                    "Pass {} finished with failures: {}", record.number, record.to_dict()
                )
        return record

    def shutdown(self) -> None:
        """Stop all world interaction. Safe to call from any thread."""
        if not self._shutdown.is_set():
            logger.info("Shutdown requested, disabling all world access")
        self._shutdown.set()

    @property
    def is_shut_down(self) -> bool:
        return self._shutdown.is_set()

    def on_local_death(self) -> bool:
        """Death hook. Returns True if an outgoing DeathLink was queued."""
        return self.deathlink.on_local_death(self.state)

    def on_world_transition(self) -> None:
        """A region is (un)loading: pause world access and refresh afterwards."""
        self.state.begin_cooldown(self._clock(), self.settings.transition_cooldown_s)
        self._cooldown_was_active = True
        self.state.needs_refresh.set()
        self.state.needs_rescan.set()
        logger.info(
            "World transition, pausing for {:.1f}s", self.settings.transition_cooldown_s
        )

    def on_scenario_restart(self) -> None:
        """The player started the scenario over: completion can happen again."""
        self.goal.reset()
        self._goal_sent = False

    def on_debug_dump(self) -> None:
        self.state.debug_dump_requested.set()

    def on_debug_test(self) -> None:
        self.state.debug_test_requested.set()

    # Session

    def poll_session(self) -> int:
        """Drain and apply inbound session events. Returns the number applied."""
        if self.session is None:
            return 0
        try:
            events = self.session.poll()
        except Exception:
            logger.opt(exception=True).warning("Session poll failed, no events this frame")
            return 0

        for event in events:
            try:
                self.apply_event(event)
            except Exception:
                logger.exception("Failed to apply session event {!r}", event)
        return len(events)

    def apply_event(self, event: SessionEvent) -> None:
        if isinstance(event, ItemReceived):
            self._on_item_received(event)
        elif isinstance(event, ConnectionEstablished):
            self._on_connected(event)
        elif isinstance(event, DeathLinkReceived):
            self._on_death_link(event)
        else:
            logger.warning("Unknown session event {!r}", event)

    def report_location(self, object_id: ObjectId) -> bool:
        """Report a found object to the session, at most once per object.

        The object is marked checked only once the send succeeded. After a
        failed send it stays collectable, so the pickup is shown again and the
        next collection reports it.

        Returns:
            True if the location was newly reported.
        """
        if object_id in self.state.checked_locations:
            return False
        location_id = self.mapping.location_id_for(object_id)
        if location_id == UNKNOWN_LOCATION:
            logger.warning("No location id for {}, not reporting", object_id)
            return False

        if self.session is not None:
            try:
                self.session.send_location_check(location_id)
            except Exception:
                logger.opt(exception=True).warning(
                    "Location check for {} not sent, it stays collectable", object_id
                )
                return False
        self.state.checked_locations.add(object_id)
        logger.info("Location checked: {} -> {:#x}", object_id, location_id)

        if self.settings.offline_mode:
            world_key = self.mapping.to_world_key(object_id)
            if self.inventory.grant_item(self.state, world_key):
                name = self.mapping.display_name_for_object(world_key) or object_id
                self.notifier.notify(
                    [("You found a ", NotifyColor.WHITE), (name, NotifyColor.ITEM)]
                )
        return True

    def _on_item_received(self, event: ItemReceived) -> None:
        object_id = self.mapping.resolve_next_object(event.item_id)
        if object_id is None:
            return
        if not self.inventory.grant_item(self.state, object_id):
            return
        name = self.mapping.display_name(event.item_id) or object_id
        sender = event.sender or "Someone"
        self.notifier.notify(
            [
                (sender, NotifyColor.PLAYER),
                (" sent you a ", NotifyColor.WHITE),
                (name, NotifyColor.ITEM),
            ]
        )

    def _on_connected(self, event: ConnectionEstablished) -> None:
        # The server replays the full item history next; counts must start from zero.
        self.mapping.reset_counters()
        self.state.sync_active = True
        if event.death_link is not None:
            self.state.death_link_enabled = event.death_link
        logger.info("Connected, sync enabled (death_link={})", self.state.death_link_enabled)
        self.notifier.notify_simple("Connected to server", NotifyColor.SERVER)

    def _on_death_link(self, event: DeathLinkReceived) -> None:
        if not self.state.death_link_enabled:
            logger.debug("DeathLink from {} ignored, DeathLink disabled", event.source)
            return
        logger.info("DeathLink received from {}: {}", event.source, event.cause)
        self.state.incoming.receive(event.source, event.cause)

    # Pass

    def _build_plan(self) -> PassPlan:
        return [
            PassStep("deferred_refresh", self._step_deferred_refresh),
            PassStep("deathlink_incoming", self._step_deathlink_incoming),
            PassStep("deathlink_outgoing", self._step_deathlink_outgoing),
            PassStep("debug_commands", self._step_debug_commands),
            PassStep("deferred_rescan", self._step_deferred_rescan),
            PassStep("reconcile", self._step_reconcile),
            PassStep("visibility", self._step_visibility),
            PassStep("pending_opens", self._step_pending_opens),
            PassStep("goal_tick", self._step_goal_tick),
            PassStep("goal_report", self._step_goal_report),
        ]

    def _run_plan(self, record: PassRecord) -> None:
        for step in self.plan:
            if self._shutdown.is_set():
                logger.debug("Shutdown observed mid-pass, stopping before {}", step.name)
                return
            record.steps.append(step.name)
            try:
                step.run()
            except Exception as e:
                logger.exception("Pass step {} failed", step.name)
                record.failures[step.name] = f"{type(e).__name__}: {e}"

    def _handle_cooldown(self, now: float) -> bool:
        """True while world access is paused after a transition."""
        if self.state.in_cooldown(now):
            self._cooldown_was_active = True
            return True

        if self._cooldown_was_active:
            self._cooldown_was_active = False
            logger.info("World transition cooldown expired, resuming")
            # A death deferred for lack of mines gets another chance in the new region.
            if self.state.death_link_enabled and self.state.incoming.rearm():
                logger.info("DeathLink: re-triggering deferred death in new region")
        return False

    def _step_deferred_refresh(self) -> None:
        if self.state.needs_refresh.exchange():
            if self.inventory.acquire_collection(self.state, self.world) is not None:
                logger.debug("Deferred progress refresh complete")

    def _step_deathlink_incoming(self) -> None:
        self.deathlink.expire_echo(self.state)
        if self.state.death_link_enabled:
            self.deathlink.process_incoming(self.state, self.world, self.notifier)

    def _step_deathlink_outgoing(self) -> None:
        self.deathlink.process_outgoing(self.state, self.session)

    def _step_debug_commands(self) -> None:
        self.debug.process(self.state, self.world, self.notifier)

    def _step_deferred_rescan(self) -> None:
        if self.state.needs_rescan.exchange():
            self.placement.invalidate()
            if self.state.sync_active:
                self.placement.scan(self.state, self.world, self.report_location)

    def _step_reconcile(self) -> None:
        # Always a fresh lookup; the handle from an earlier pass may be reclaimed.
        collection = self.inventory.acquire_collection(self.state, self.world)
        if collection is None:
            return
        report = self.inventory.enforce(self.state, collection)
        if report.mutated() or report.failed:
            logger.debug(
                "Reconciled: -{} +{} reset {} failed {}",
                len(report.removed),
                len(report.added),
                len(report.reset),
                len(report.failed),
            )
        if self._current is not None:
            self._current.metadata = {
                "removed": len(report.removed),
                "added": len(report.added),
                "reset": len(report.reset),
                "failed": len(report.failed),
            }

    def _step_visibility(self) -> None:
        if self.state.sync_active:
            self.placement.scan(self.state, self.world, self.report_location)
        self.placement.refresh(self.state, self.world)

    def _step_pending_opens(self) -> None:
        self.placement.process_pending_opens(self.state, self.world)

    def _step_goal_tick(self) -> None:
        self.goal.tick(self.state, self.world)

    def _step_goal_report(self) -> None:
        if not self.goal.is_completed or self._goal_sent:
            return
        self._goal_sent = True
        self.notifier.notify_simple(
            f"Goal Complete: {self.goal.completed_name}", NotifyColor.SERVER
        )
        if self.session is not None:
            self.session.send_goal_complete()

    @property
    def goal_sent(self) -> bool:
        return self._goal_sent

    @property
    def pass_count(self) -> int:
        return self._pass_count
