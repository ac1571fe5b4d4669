"""
Attempt timer state machine.

An `AttemptTimer` is mounted when the challenge page loads and unmounted
when it goes away. Mounting reconstructs the attempt from the store:

1) a running segment with a resume token carries the stored baseline,
2) a running segment without one is an ordinary reload,
3) no running segment but a resume token starts a new segment on top of
   the stored baseline,
4) anything else is a fresh attempt.

While mounted, a periodic tick recomputes elapsed time from the segment
start and baseline held in memory and publishes it. The store is written
only at mount, on a successful submit and on reset.
"""

import threading
from typing import Callable, Optional, Union

from ..config.defaults import StorageParams, TimerParams
from ..errors import StateTransitionError
from ..logging.config import get_timer_logger, log_state_transition
from ..models.attempt import AttemptIdentity
from ..models.submission import FinalizedSubmission, SubmissionDraft
from ..persistence.attempt_repository import AttemptRepository
from ..persistence.drafts import WorkspaceDraftStore
from ..persistence.store import AttemptStore
from ..submission.base import BaseSubmitter, SubmitFunction
from ..utils.scheduling import ScheduledTask, Scheduler, ThreadingScheduler
from ..utils.time import Clock, SystemClock, format_duration
from .finalizer import SubmissionFinalizer
from .models import MountOutcome, Segment, TimerSnapshot, TimerState

ElapsedCallback = Callable[[int], None]


class AttemptTimer:
    """Tracks elapsed time of one attempt across reloads and resumes."""

    def __init__(
        self,
        identity: AttemptIdentity,
        store: AttemptStore,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
        on_elapsed_update: Optional[ElapsedCallback] = None,
        params: Optional[TimerParams] = None,
        storage: Optional[StorageParams] = None,
        drafts: Optional[WorkspaceDraftStore] = None
    ) -> None:
        self.identity = identity
        self.clock = clock or SystemClock()
        self.scheduler = scheduler or ThreadingScheduler()
        self.on_elapsed_update = on_elapsed_update
        self.params = params or TimerParams()
        self.drafts = drafts

        storage = storage or StorageParams()
        self.repository: Optional[AttemptRepository] = None
        if not identity.is_anonymous:
            self.repository = AttemptRepository.for_identity(
                store, identity,
                prefix=storage.key_prefix,
                anonymous_partition=storage.anonymous_partition,
            )

        self.state = TimerState.UNINITIALIZED
        self.last_outcome: Optional[MountOutcome] = None
        self._segment: Optional[Segment] = None
        self._elapsed = 0
        self._task: Optional[ScheduledTask] = None
        self._lock = threading.RLock()
        self.logger = get_timer_logger(__name__, attempt=str(identity))

    @property
    def persistent(self) -> bool:
        return self.repository is not None

    @property
    def mounted(self) -> bool:
        return self._task is not None and not self._task.cancelled

    @property
    def elapsed_ms(self) -> int:
        """Current elapsed time, recomputed from the running segment."""
        with self._lock:
            if self._segment is None:
                return self._elapsed
            return max(self._elapsed, self._segment.elapsed(self.clock.now_ms()))

    @property
    def formatted_elapsed(self) -> str:
        return format_duration(self.elapsed_ms)

    def snapshot(self) -> TimerSnapshot:
        with self._lock:
            return TimerSnapshot(
                state=self.state,
                elapsed_ms=self.elapsed_ms,
                mounted=self.mounted,
                persistent=self.persistent,
                segment=self._segment,
                last_outcome=self.last_outcome,
            )

    def mount(self) -> MountOutcome:
        """
        Reconstruct the attempt and start ticking.

        Mounting an already mounted timer re-runs initialization.

        Returns:
            How the attempt was reconstructed
        """
        if self.mounted:
            self.unmount()

        with self._lock:
            now = self.clock.now_ms()
            if self.repository is None:
                outcome = self._initialize_anonymous(now)
            else:
                outcome = self._initialize(self.repository, now)

            self.last_outcome = outcome
            elapsed = self._segment.elapsed(now)
            self._elapsed = elapsed

        self._publish(elapsed)
        self._task = self.scheduler.schedule_every(self.params.tick_interval_ms, self.tick)
        return outcome

    def _initialize_anonymous(self, now: int) -> MountOutcome:
        # No identity: state stays UNINITIALIZED, time is tracked in memory only
        self._segment = Segment(start_ms=now, baseline_ms=0)
        self.logger.info("Timer running without persistence", reason="no_user_identity")
        return MountOutcome.ANONYMOUS

    def _initialize(self, repository: AttemptRepository, now: int) -> MountOutcome:
        record = repository.read_record()

        if record.has_running_segment:
            if record.is_resumed:
                repository.consume_resume_token()
                baseline = record.time_spent
                outcome = MountOutcome.RESUMED
            else:
                baseline = record.time_spent if self.params.carry_baseline_on_reload else 0
                outcome = MountOutcome.RELOADED
            self._segment = Segment(start_ms=record.start, baseline_ms=baseline)
        else:
            if record.is_resumed:
                repository.consume_resume_token()
                baseline = record.time_spent
                outcome = MountOutcome.RESUMED
            else:
                # Stale leftovers (e.g. active without a usable start) are discarded
                repository.clear()
                baseline = 0
                outcome = MountOutcome.FRESH
            repository.begin_segment(now)
            self._segment = Segment(start_ms=now, baseline_ms=baseline)

        self._transition(TimerState.RUNNING, trigger=f"mount_{outcome.value}", context={
            "segment_start": self._segment.start_ms,
            "baseline_ms": baseline,
            "now": now,
        })
        return outcome

    def tick(self) -> int:
        """Recompute and publish elapsed time. Never touches the store."""
        with self._lock:
            if self._segment is None:
                return self._elapsed
            elapsed = max(self._elapsed, self._segment.elapsed(self.clock.now_ms()))
            self._elapsed = elapsed

        self._publish(elapsed)
        return elapsed

    def submit(
        self,
        draft: SubmissionDraft,
        submitter: Union[BaseSubmitter, SubmitFunction]
    ) -> FinalizedSubmission:
        """
        Finalize the attempt with its measured duration.

        Raises:
            StateTransitionError: If no segment is running
            SubmissionError: If the submitter failed; state and store are unchanged
        """
        with self._lock:
            if self._segment is None:
                raise StateTransitionError(
                    "No running attempt to submit",
                    current_state=self.state.value,
                    attempted_transition="submit"
                )
            final_elapsed = max(self._elapsed, self._segment.elapsed(self.clock.now_ms()))

        finalizer = SubmissionFinalizer(self.identity, self.repository, self.drafts)
        result = finalizer.finalize(draft, final_elapsed, submitter)

        self._cancel_ticking()
        with self._lock:
            self._segment = None
            self._elapsed = 0
            self._transition(TimerState.FINALIZED, trigger="submit", context={
                "time_spent_ms": final_elapsed,
            })

        self._publish(0)
        return result

    def reset(self) -> None:
        """Clear persisted and in-memory state. Idempotent."""
        self._cancel_ticking()
        with self._lock:
            if self.repository is not None:
                self.repository.clear()
            self._segment = None
            self._elapsed = 0
            if self.state != TimerState.UNINITIALIZED:
                self._transition(TimerState.UNINITIALIZED, trigger="reset")

        self._publish(0)

    def unmount(self) -> None:
        """Stop ticking. The persisted record is left for the next mount."""
        self._cancel_ticking()
        with self._lock:
            self._segment = None
        self.logger.debug("Timer unmounted", state=self.state.value)

    def _cancel_ticking(self) -> None:
        # Cancel outside the lock: a threaded tick may be waiting on it
        task, self._task = self._task, None
        if task is not None:
            task.cancel()

    def _transition(self, to_state: TimerState, trigger: str,
                    context: Optional[dict] = None) -> None:
        from_state = self.state
        self.state = to_state
        log_state_transition(
            self.logger,
            attempt=str(self.identity),
            from_state=from_state.value,
            to_state=to_state.value,
            trigger=trigger,
            context=context
        )

    def _publish(self, elapsed_ms: int) -> None:
        if self.on_elapsed_update is not None:
            self.on_elapsed_update(elapsed_ms)

    def __enter__(self) -> "AttemptTimer":
        self.mount()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unmount()
