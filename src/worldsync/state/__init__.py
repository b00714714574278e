"""Shared session state."""

from worldsync.state.models import (
    DeathLinkPhase,
    EchoGuard,
    IncomingDeath,
    OneShotFlag,
    SessionState,
)

__all__ = [
    "SessionState",
    "OneShotFlag",
    "EchoGuard",
    "IncomingDeath",
    "DeathLinkPhase",
]
