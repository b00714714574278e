"""Pass planning models.

A pass is the work the orchestrator does each time the tick gate opens. It is
an ordered list of named steps; steps run sequentially and each one is isolated
so a failure in one never prevents the next from running.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PassStep:
    """One named unit of work within a pass."""

    name: str
    """Stable name, used in logs and pass records."""

    run: Callable[[], None]
    """Zero-argument callable doing the step's work."""


# Type alias for pass plans
PassPlan = list[PassStep]
"""Ordered steps. Later steps may depend on state earlier steps just produced."""
