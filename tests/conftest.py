"""Pytest configuration and shared fixtures."""

import pytest

from attempt_tracker.models.attempt import AttemptIdentity
from attempt_tracker.models.submission import SubmissionDraft, TestResult
from attempt_tracker.persistence.drafts import WorkspaceDraftStore
from attempt_tracker.persistence.store import InMemoryAttemptStore
from attempt_tracker.utils.scheduling import ManualScheduler
from attempt_tracker.utils.time import ManualClock

T0 = 1_700_000_000_000


@pytest.fixture
def clock() -> ManualClock:
    """Deterministic clock starting at a fixed epoch millisecond."""
    return ManualClock(T0)


@pytest.fixture
def scheduler() -> ManualScheduler:
    """Scheduler whose ticks only run when fired."""
    return ManualScheduler()


@pytest.fixture
def store() -> InMemoryAttemptStore:
    """Durable attempt store stand-in."""
    return InMemoryAttemptStore()


@pytest.fixture
def drafts() -> WorkspaceDraftStore:
    """Session-scoped draft store."""
    return WorkspaceDraftStore(InMemoryAttemptStore())


@pytest.fixture
def identity() -> AttemptIdentity:
    """Logged-in learner working on one challenge."""
    return AttemptIdentity(challenge_slug="hello-world", user_id=42)


@pytest.fixture
def anonymous_identity() -> AttemptIdentity:
    """Visitor without a user id."""
    return AttemptIdentity(challenge_slug="hello-world", user_id=None)


@pytest.fixture
def sample_draft() -> SubmissionDraft:
    """Submission of a run where one of two test cases passed."""
    return SubmissionDraft.from_test_results(
        challenge_id=7,
        xml="<xml><block type=\"text_print\"/></xml>",
        results=[
            TestResult(test_case_id=1, passed=True, output="\"hello\"", console_output="hello"),
            TestResult(test_case_id=2, passed=False, output="\"\"", console_output=""),
        ],
    )
