"""Data models for pass tracing.

Records are plain data so they can be logged, dumped or serialized to JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class PassRecord:
    """Record of a single gated pass.

    Attributes:
        number: Pass number, counting gated passes only.
        frame: Host frame count when the pass ran.
        timestamp: Clock reading when the pass started.
        steps: Names of steps that ran, in order.
        failures: step name -> error text, for steps that raised.
        cooldown: True if the pass was skipped by the world-transition cooldown.
        metadata: Optional arbitrary annotations (e.g. reconcile counts).

    Example:
        record = PassRecord(number=3, frame=57, timestamp=12.4)
        record.steps.append("reconcile")
    """

    number: int
    frame: int
    timestamp: float
    steps: list[str] = field(default_factory=list)
    failures: dict[str, str] = field(default_factory=dict)
    cooldown: bool = False
    metadata: dict[str, Any] | None = None

    @property
    def ok(self) -> bool:
        return not self.failures

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        result: dict[str, Any] = {
            "number": self.number,
            "frame": self.frame,
            "timestamp": self.timestamp,
            "steps": list(self.steps),
            "failures": dict(self.failures),
            "cooldown": self.cooldown,
        }
        if self.metadata is not None:
            result["metadata"] = self.metadata
        return result

    def summary(self) -> str:
        status = "cooldown" if self.cooldown else ("ok" if self.ok else f"{len(self.failures)} failed")
        return f"pass {self.number} (frame {self.frame}): {len(self.steps)} steps, {status}"
