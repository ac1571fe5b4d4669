"""
State machine data models for the attempt timer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TimerState(str, Enum):
    """Timer lifecycle states."""
    UNINITIALIZED = "uninitialized"
    RUNNING = "running"
    FINALIZED = "finalized"


class MountOutcome(str, Enum):
    """How a mount reconstructed the attempt."""
    FRESH = "fresh"              # No prior record, new attempt started
    RELOADED = "reloaded"        # Running segment picked up after a reload
    RESUMED = "resumed"          # Resume token consumed, baseline carried
    ANONYMOUS = "anonymous"      # No identity, in-memory only


@dataclass(frozen=True)
class Segment:
    """In-memory view of the running segment."""

    start_ms: int
    baseline_ms: int = 0

    def elapsed(self, now_ms: int) -> int:
        return max(0, now_ms - self.start_ms) + self.baseline_ms


@dataclass(frozen=True)
class TimerSnapshot:
    """Point-in-time view of a timer, for display and diagnostics."""

    state: TimerState
    elapsed_ms: int
    mounted: bool
    persistent: bool
    segment: Optional[Segment] = None
    last_outcome: Optional[MountOutcome] = None
