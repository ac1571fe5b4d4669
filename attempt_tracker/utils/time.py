"""
Clock sources and duration helpers.

The timer never reads the system clock directly. It is handed a clock so
that tests can simulate arbitrary reload delays deterministically.
"""

import re
import threading
from datetime import datetime, timezone
from typing import Optional, Protocol

from ..errors import DurationParseError

_DURATION_COMPONENT = re.compile(r"[0-9]+")


class Clock(Protocol):
    """Source of wall-clock time in milliseconds since the epoch."""

    def now_ms(self) -> int:
        ...


class SystemClock:
    """Wall-clock time from the host."""

    def now_ms(self) -> int:
        return int(datetime.now(timezone.utc).timestamp() * 1000)


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start_ms: int = 0):
        self._now = start_ms
        self._lock = threading.Lock()

    def now_ms(self) -> int:
        with self._lock:
            return self._now

    def advance(self, delta_ms: int) -> int:
        """Move the clock forward and return the new time."""
        if delta_ms < 0:
            raise ValueError("ManualClock cannot move backwards")
        with self._lock:
            self._now += delta_ms
            return self._now

    def set(self, now_ms: int) -> None:
        with self._lock:
            self._now = now_ms


def elapsed_since(start_ms: int, now_ms: int, baseline_ms: int = 0) -> int:
    """
    Elapsed milliseconds of a running segment plus its carried baseline.

    A clock that jumps backwards past the segment start contributes zero
    rather than a negative duration.

    Args:
        start_ms: When the running segment began
        now_ms: Current time
        baseline_ms: Time accumulated by earlier segments

    Returns:
        Total elapsed milliseconds
    """
    return max(0, now_ms - start_ms) + baseline_ms


def format_duration(duration_ms: int) -> str:
    """
    Render a duration as HH:MM:SS, truncating partial seconds.

    Hours are not wrapped, so a 30 hour attempt renders as 30:00:00.
    """
    total_seconds = max(0, int(duration_ms)) // 1000
    hours = total_seconds // 3600
    minutes = (total_seconds % 3600) // 60
    seconds = total_seconds % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def parse_duration(value: Optional[str]) -> int:
    """
    Convert an HH:MM:SS duration string to milliseconds.

    Args:
        value: Duration as reported by the grading API, e.g. "01:02:03"

    Returns:
        Duration in milliseconds

    Raises:
        DurationParseError: If the string does not have exactly three
            non-negative integer components
    """
    if value is None:
        raise DurationParseError("Duration is missing", raw_value=None)

    parts = value.strip().split(":")
    if len(parts) != 3:
        raise DurationParseError(
            f"Expected HH:MM:SS, got {value!r}",
            raw_value=value,
            context={"component_count": len(parts)}
        )

    for name, part in zip(("hours", "minutes", "seconds"), parts):
        if not _DURATION_COMPONENT.fullmatch(part):
            raise DurationParseError(
                f"Non-numeric {name} component in duration {value!r}",
                raw_value=value,
                context={"component": name, "component_value": part}
            )

    hours, minutes, seconds = (int(part) for part in parts)
    return ((hours * 3600) + (minutes * 60) + seconds) * 1000
