"""Scheduling: the tick gate and pass plans.

Usage:
    from worldsync.scheduling import TickGate, PassStep

    gate = TickGate(interval_ms=200)
    plan = [PassStep("reconcile", reconcile)]
"""

from worldsync.scheduling.gate import TickGate
from worldsync.scheduling.models import PassPlan, PassStep

__all__ = [
    "TickGate",
    "PassStep",
    "PassPlan",
]
