"""
Attempt identity and persisted attempt record models.

One attempt record is logically a single record per identity but is
stored as four separate string entries sharing a key prefix.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

ANONYMOUS_PARTITION = "anonymous"


class AttemptField(str, Enum):
    """Field suffixes of the four persisted attempt entries."""
    START = "start"
    ACTIVE = "active"
    TIME_SPENT = "timeSpent"
    IS_RESUMED = "isResumed"


@dataclass(frozen=True)
class AttemptIdentity:
    """One learner working on one challenge."""

    challenge_slug: str
    user_id: Optional[Union[str, int]] = None

    @property
    def is_anonymous(self) -> bool:
        return self.user_id is None or str(self.user_id) == ""

    def partition(self, anonymous_partition: str = ANONYMOUS_PARTITION) -> str:
        """User component of the storage key."""
        if self.is_anonymous:
            return anonymous_partition
        return str(self.user_id)

    def __str__(self) -> str:
        return f"{self.challenge_slug}/{self.partition()}"


@dataclass(frozen=True)
class AttemptRecord:
    """Decoded view of the four persisted entries."""

    start: Optional[int] = None                # Wall-clock ms the running segment began
    active: bool = False                       # A running segment exists
    time_spent: int = 0                        # Baseline from finished segments
    is_resumed: bool = False                   # One-shot resume token

    @property
    def has_running_segment(self) -> bool:
        return self.active and self.start is not None

    @property
    def is_empty(self) -> bool:
        return (self.start is None and not self.active
                and self.time_spent == 0 and not self.is_resumed)
