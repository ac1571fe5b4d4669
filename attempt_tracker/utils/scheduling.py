"""
Periodic callback scheduling for the timer tick.

The timer depends on the `Scheduler` interface only. `ThreadingScheduler`
drives real ticks from a background thread; `ManualScheduler` fires them
on demand so tests control exactly when a tick happens.
"""

import threading
from abc import ABC, abstractmethod
from typing import Callable

import structlog

logger = structlog.get_logger(__name__)


class ScheduledTask(ABC):
    """Handle to a periodic callback."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop the callback. Safe to call more than once."""

    @property
    @abstractmethod
    def cancelled(self) -> bool:
        ...


class Scheduler(ABC):
    """Runs a callback on a fixed period until cancelled."""

    @abstractmethod
    def schedule_every(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        """
        Schedule `callback` every `interval_ms` milliseconds.

        Invocations never overlap: each one runs to completion before the
        next period starts.
        """


class _ThreadTask(ScheduledTask):

    def __init__(self, interval_ms: int, callback: Callable[[], None]):
        self._interval = interval_ms / 1000.0
        self._callback = callback
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name="attempt-timer-tick", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                self._callback()
            except Exception as e:
                # Keep ticking; the next call recomputes from the segment
                logger.error("Tick callback failed", error=str(e), exc_info=True)

    def cancel(self) -> None:
        self._stop.set()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout=self._interval + 1.0)

    @property
    def cancelled(self) -> bool:
        return self._stop.is_set()


class ThreadingScheduler(Scheduler):
    """Scheduler backed by one daemon thread per task."""

    def schedule_every(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        task = _ThreadTask(interval_ms, callback)
        task.start()
        return task


class _ManualTask(ScheduledTask):

    def __init__(self, interval_ms: int, callback: Callable[[], None]):
        self.interval_ms = interval_ms
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Scheduler whose callbacks only run when `fire` is called."""

    def __init__(self):
        self.tasks: list[_ManualTask] = []

    def schedule_every(self, interval_ms: int, callback: Callable[[], None]) -> ScheduledTask:
        task = _ManualTask(interval_ms, callback)
        self.tasks.append(task)
        return task

    @property
    def active_tasks(self) -> list[ScheduledTask]:
        return [task for task in self.tasks if not task.cancelled]

    def fire(self, times: int = 1) -> int:
        """
        Run every active callback `times` times.

        Returns:
            Number of callback invocations performed
        """
        calls = 0
        for _ in range(times):
            for task in list(self.tasks):
                if not task.cancelled:
                    task.callback()
                    calls += 1
        return calls
