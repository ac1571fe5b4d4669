"""
Submission finalization.

Builds the one record a submit produces, hands it to the submitter and
only then clears the attempt's persisted state. A failed submit leaves
every stored entry exactly as it was.
"""

from typing import Optional, Union

import structlog

from ..errors import SubmissionError
from ..models.attempt import AttemptIdentity
from ..models.submission import FinalizedSubmission, SubmissionDraft
from ..persistence.attempt_repository import AttemptRepository
from ..persistence.drafts import WorkspaceDraftStore
from ..submission.base import BaseSubmitter, SubmitFunction, as_submitter

logger = structlog.get_logger(__name__)


class SubmissionFinalizer:
    """Finalizes one attempt against a submission collaborator."""

    def __init__(self, identity: AttemptIdentity,
                 repository: Optional[AttemptRepository] = None,
                 drafts: Optional[WorkspaceDraftStore] = None):
        # repository is None in anonymous mode: nothing is persisted, nothing to clear
        self.identity = identity
        self.repository = repository
        self.drafts = drafts
        self.logger = logger.bind(attempt=str(identity))

    def finalize(
        self,
        draft: SubmissionDraft,
        elapsed_ms: int,
        submitter: Union[BaseSubmitter, SubmitFunction]
    ) -> FinalizedSubmission:
        """
        Submit `draft` with the measured duration and clean up on success.

        Raises:
            SubmissionError: If the submitter failed; persisted state is untouched
        """
        record = draft.with_time_spent(elapsed_ms)
        target = as_submitter(submitter)

        try:
            response = target.submit(record)
        except SubmissionError as e:
            self.logger.error(
                "Submission failed, attempt state preserved",
                challenge_id=record.challenge_id,
                time_spent_ms=elapsed_ms,
                retryable=e.retryable,
                error=str(e)
            )
            raise
        except Exception as e:
            self.logger.error(
                "Submission failed, attempt state preserved",
                challenge_id=record.challenge_id,
                time_spent_ms=elapsed_ms,
                error=str(e)
            )
            raise SubmissionError(
                f"Submission rejected: {e}",
                challenge_id=record.challenge_id,
                context={"attempt": str(self.identity)}
            ) from e

        self.cleanup()

        self.logger.info(
            "Submission finalized",
            challenge_id=record.challenge_id,
            time_spent_ms=elapsed_ms,
            status=record.status,
            score=record.score
        )

        return FinalizedSubmission(record=record, response=response)

    def cleanup(self) -> None:
        """Remove persisted state and the carried draft. Safe to repeat."""
        if self.repository is not None:
            self.repository.clear()
        if self.drafts is not None:
            self.drafts.discard(self.identity)
