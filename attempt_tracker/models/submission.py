"""
Submission record models.

`SubmissionDraft` is what the challenge page hands to the timer when the
learner submits. The timer adds the measured duration and turns it into
the `SubmissionRecord` the grading API receives.
"""

from dataclasses import dataclass, field
from typing import Any, Optional

STATUS_ACCEPTED = "accepted"
STATUS_WRONG_ANSWER = "wrong answer"


@dataclass(frozen=True)
class TestResult:
    """Outcome of one test case run against the learner's program."""

    __test__ = False  # not a pytest class

    test_case_id: int
    passed: bool
    output: str = ""
    console_output: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "test_case_id": self.test_case_id,
            "passed": self.passed,
            "output": self.output,
            "console_output": self.console_output,
        }


@dataclass(frozen=True)
class SubmissionDraft:
    """Everything a submission carries except its duration."""

    challenge_id: int
    xml: str
    status: str
    score: float
    test_results: tuple[TestResult, ...] = field(default_factory=tuple)

    @classmethod
    def from_test_results(cls, challenge_id: int, xml: str,
                          results: list[TestResult]) -> "SubmissionDraft":
        """Score a run: percentage of passed tests, accepted only at 100."""
        if results:
            score = len([r for r in results if r.passed]) / len(results) * 100
        else:
            score = 0.0

        return cls(
            challenge_id=challenge_id,
            xml=xml,
            status=STATUS_ACCEPTED if score == 100 else STATUS_WRONG_ANSWER,
            score=score,
            test_results=tuple(results),
        )

    def with_time_spent(self, time_spent_ms: int) -> "SubmissionRecord":
        return SubmissionRecord(
            challenge_id=self.challenge_id,
            xml=self.xml,
            status=self.status,
            score=self.score,
            test_results=self.test_results,
            time_spent_ms=time_spent_ms,
        )


@dataclass(frozen=True)
class SubmissionRecord:
    """Finalized submission handed to the submission collaborator."""

    challenge_id: int
    xml: str
    status: str
    score: float
    test_results: tuple[TestResult, ...]
    time_spent_ms: int

    def to_payload(self) -> dict[str, Any]:
        """JSON body expected by the grading API."""
        return {
            "challenge_id": self.challenge_id,
            "xml": self.xml,
            "status": self.status,
            "score": self.score,
            "time_spent": self.time_spent_ms,
            "test_results": [r.to_dict() for r in self.test_results],
        }


@dataclass(frozen=True)
class FinalizedSubmission:
    """A record the collaborator accepted, with its response data."""

    record: SubmissionRecord
    response: Optional[dict[str, Any]] = None

    @property
    def submission_id(self) -> Optional[int]:
        if not self.response:
            return None
        return self.response.get("id")
