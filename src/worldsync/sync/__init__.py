"""Synchronization services driven by the orchestrator.

Architecture Note:
    Each service owns one concern and reads/writes the shared SessionState.
    None of them hold world handles across calls; every pass looks entities up
    again through the world interface.
"""

from worldsync.sync.deathlink import DeathLinkHandler
from worldsync.sync.goal import GoalDetector, GoalOutcome, GoalPhase, GoalStrategy
from worldsync.sync.inventory import UNUSED, InventorySync, ReconcileReport
from worldsync.sync.placement import PickupTracker, Placement, ReportCallback, TrackedPickup

__all__ = [
    # Reconciliation
    "InventorySync",
    "ReconcileReport",
    "UNUSED",
    # DeathLink
    "DeathLinkHandler",
    # Completion
    "GoalDetector",
    "GoalOutcome",
    "GoalPhase",
    "GoalStrategy",
    # Placement
    "Placement",
    "PickupTracker",
    "TrackedPickup",
    "ReportCallback",
]
