"""
Resume trigger for "continue this solution" actions.

The trigger runs before the challenge page mounts its timer. It stores the
earlier solution as a session draft, seeds the attempt record with the
earlier duration and a resume token, and only then navigates to the
challenge. Navigation must never happen before the seed is written.
"""

from typing import Callable, Optional

import structlog

from ..config.defaults import ResumeParams, StorageParams
from ..errors import DurationParseError, ResumeError
from ..models.attempt import AttemptIdentity
from ..persistence.attempt_repository import AttemptRepository
from ..persistence.drafts import WorkspaceDraftStore
from ..persistence.store import AttemptStore
from ..utils.time import parse_duration

logger = structlog.get_logger(__name__)

Navigator = Callable[[str], None]


class ResumeTrigger:
    """Seeds a resumed attempt and navigates to its challenge."""

    def __init__(
        self,
        store: AttemptStore,
        drafts: WorkspaceDraftStore,
        navigator: Optional[Navigator] = None,
        params: Optional[ResumeParams] = None,
        storage: Optional[StorageParams] = None
    ):
        self.store = store
        self.drafts = drafts
        self.navigator = navigator
        self.params = params or ResumeParams()
        self.storage = storage or StorageParams()
        self.logger = logger

    def challenge_url(self, challenge_slug: str) -> str:
        return self.params.challenge_url_template.format(slug=challenge_slug)

    def resume(self, identity: AttemptIdentity, solution_xml: str, time_spent: str) -> str:
        """
        Seed a resume of `identity` and navigate to its challenge.

        Args:
            identity: Attempt to resume
            solution_xml: Serialized workspace of the earlier solution
            time_spent: Earlier elapsed duration as HH:MM:SS

        Returns:
            URL navigated to

        Raises:
            DurationParseError: If `time_spent` is not a valid duration
            ResumeError: If the identity is anonymous
        """
        try:
            time_spent_ms = parse_duration(time_spent)
        except DurationParseError as e:
            self.logger.error(
                "Resume rejected, duration unparseable",
                attempt=str(identity),
                time_spent=time_spent,
                error=str(e)
            )
            raise

        if identity.is_anonymous:
            # The timer never reads an anonymous partition, the seed would be orphaned
            raise ResumeError(
                "Cannot resume an attempt without a user identity",
                challenge_slug=identity.challenge_slug
            )

        repository = AttemptRepository.for_identity(
            self.store, identity,
            prefix=self.storage.key_prefix,
            anonymous_partition=self.storage.anonymous_partition,
        )

        self.drafts.save(identity, solution_xml)
        repository.issue_resume_token(time_spent_ms)

        url = self.challenge_url(identity.challenge_slug)
        self.logger.info(
            "Resume seeded",
            attempt=str(identity),
            time_spent_ms=time_spent_ms,
            url=url
        )

        if self.navigator is not None:
            self.navigator(url)

        return url
