"""Tracing infrastructure for recording orchestrator passes.

Usage:
    from worldsync.tracing import PassHistory, PassRecord

    history = PassHistory(max_passes=256)
    history.record_pass(PassRecord(number=1, frame=1, timestamp=0.0))
"""

from worldsync.tracing.history import HistoryStore, PassHistory
from worldsync.tracing.models import PassRecord

__all__ = [
    "HistoryStore",
    "PassHistory",
    "PassRecord",
]
