"""
Attempt tracker coordinator.

Wires configuration, the durable attempt store, the session draft store,
the clock and the tick scheduler together, and hands out timers and the
resume trigger that share them.
"""

from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.defaults import TrackerConfig, get_default_config
from .config.loader import ConfigLoader
from .models.attempt import AttemptIdentity
from .persistence.attempt_repository import AttemptRepository
from .persistence.drafts import WorkspaceDraftStore
from .persistence.store import AttemptStore, InMemoryAttemptStore, SqliteAttemptStore
from .resume.trigger import Navigator, ResumeTrigger
from .state.machine import AttemptTimer, ElapsedCallback
from .submission.http_submitter import HttpSubmitter
from .utils.scheduling import Scheduler, ThreadingScheduler
from .utils.time import Clock, SystemClock

logger = structlog.get_logger(__name__)


def create_store(config: TrackerConfig) -> AttemptStore:
    """Build the durable attempt store named by the storage config."""
    if config.storage.backend == "sqlite":
        return SqliteAttemptStore(config.storage.sqlite_path)
    return InMemoryAttemptStore()


class AttemptTracker:
    """
    Entry point for embedding the tracker in a challenge page.

    Typical flow:
    resume() (optional) → timer().mount() → ticks → timer.submit()
    """

    def __init__(
        self,
        config: Optional[TrackerConfig] = None,
        store: Optional[AttemptStore] = None,
        draft_store: Optional[WorkspaceDraftStore] = None,
        clock: Optional[Clock] = None,
        scheduler: Optional[Scheduler] = None,
        navigator: Optional[Navigator] = None
    ) -> None:
        self.logger = logger
        self.config = config or get_default_config()
        self.store = store if store is not None else create_store(self.config)
        self.drafts = draft_store or WorkspaceDraftStore(
            prefix=self.config.storage.draft_key_prefix,
            anonymous_partition=self.config.storage.anonymous_partition,
        )
        self.clock = clock or SystemClock()
        self.scheduler = scheduler or ThreadingScheduler()
        self.resume_trigger = ResumeTrigger(
            self.store,
            self.drafts,
            navigator=navigator,
            params=self.config.resume,
            storage=self.config.storage,
        )

        self.logger.info(
            "Attempt tracker initialized",
            store=type(self.store).__name__,
            tick_interval_ms=self.config.timer.tick_interval_ms
        )

    @classmethod
    def from_config_dir(
        cls,
        config_dir: Optional[Union[str, Path]] = None,
        overrides: Optional[dict[str, Any]] = None,
        **kwargs: Any
    ) -> "AttemptTracker":
        """Build a tracker from tracker.yaml plus overrides."""
        loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        return cls(config=loader.load_config(overrides), **kwargs)

    def timer(self, identity: AttemptIdentity,
              on_elapsed_update: Optional[ElapsedCallback] = None) -> AttemptTimer:
        """Create an unmounted timer for `identity`."""
        return AttemptTimer(
            identity,
            self.store,
            clock=self.clock,
            scheduler=self.scheduler,
            on_elapsed_update=on_elapsed_update,
            params=self.config.timer,
            storage=self.config.storage,
            drafts=self.drafts,
        )

    def resume(self, identity: AttemptIdentity, solution_xml: str, time_spent: str) -> str:
        """Seed a resume and navigate; see ResumeTrigger.resume."""
        return self.resume_trigger.resume(identity, solution_xml, time_spent)

    def load_draft(self, identity: AttemptIdentity) -> Optional[str]:
        """Workspace carried over by a resume, if any."""
        return self.drafts.load(identity)

    def repository(self, identity: AttemptIdentity) -> AttemptRepository:
        return AttemptRepository.for_identity(
            self.store, identity,
            prefix=self.config.storage.key_prefix,
            anonymous_partition=self.config.storage.anonymous_partition,
        )

    def clear_attempt(self, identity: AttemptIdentity) -> None:
        """Explicit user-initiated clear of an attempt and its draft."""
        self.repository(identity).clear()
        self.drafts.discard(identity)
        self.logger.info("Attempt cleared", attempt=str(identity))

    def http_submitter(self) -> HttpSubmitter:
        """Submitter for the configured grading API."""
        return HttpSubmitter(self.config.submission)
