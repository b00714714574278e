"""Orchestration: lifecycle and per-pass sequencing.

Architecture Note:
    The Orchestrator is the only component the host talks to. It owns the
    shared SessionState and the services, and mediates every call to the
    session client and the notifier.
"""

from worldsync.orchestration.core import Orchestrator
from worldsync.orchestration.debug import DebugCommands

__all__ = [
    "Orchestrator",
    "DebugCommands",
]
