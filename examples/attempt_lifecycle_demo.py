#!/usr/bin/env python3
"""
Attempt Lifecycle Demo - Resumable Timed-Attempt Tracker

This script walks one challenge attempt through the tracker:
- fresh mount and ticking
- a page reload that keeps the original segment start
- a failed submit that leaves the attempt intact
- a successful submit that clears it
- resuming an earlier attempt from its recorded duration

A manual clock and scheduler drive time, so the demo runs instantly.

Run: python examples/attempt_lifecycle_demo.py
"""

from unittest.mock import Mock

from attempt_tracker.errors import SubmissionError
from attempt_tracker.logging import configure_logging
from attempt_tracker.models.attempt import AttemptIdentity
from attempt_tracker.models.submission import SubmissionDraft, TestResult
from attempt_tracker.tracker import AttemptTracker
from attempt_tracker.utils.scheduling import ManualScheduler
from attempt_tracker.utils.time import ManualClock, format_duration


def print_update(elapsed_ms: int) -> None:
    print(f"  ⏱  {format_duration(elapsed_ms)}")


def print_record(tracker: AttemptTracker, identity: AttemptIdentity) -> None:
    snapshot = tracker.repository(identity).snapshot()
    print(f"  store: {snapshot or '{}'}")


def main():
    configure_logging(level="WARNING")

    clock = ManualClock(start_ms=1_700_000_000_000)
    scheduler = ManualScheduler()
    navigator = Mock()
    tracker = AttemptTracker(clock=clock, scheduler=scheduler, navigator=navigator)
    identity = AttemptIdentity(challenge_slug="hello-world", user_id=42)

    draft = SubmissionDraft.from_test_results(
        challenge_id=7,
        xml="<xml><block type='print'/></xml>",
        results=[
            TestResult(test_case_id=1, passed=True),
            TestResult(test_case_id=2, passed=True),
        ],
    )

    print("🚀 ATTEMPT LIFECYCLE DEMO")
    print("=" * 50)

    print("\n1) Fresh mount")
    timer = tracker.timer(identity, on_elapsed_update=print_update)
    print(f"  outcome: {timer.mount().value}")
    for _ in range(3):
        clock.advance(1000)
        scheduler.fire()
    print_record(tracker, identity)

    print("\n2) Page reload after 90 seconds away")
    timer.unmount()
    clock.advance(90_000)
    timer = tracker.timer(identity, on_elapsed_update=print_update)
    print(f"  outcome: {timer.mount().value}")

    print("\n3) Submit fails")
    failing = Mock(side_effect=SubmissionError("HTTP 503", status_code=503, retryable=True))
    try:
        timer.submit(draft, failing)
    except SubmissionError as e:
        print(f"  ❌ {e} (retryable={e.retryable})")
    print(f"  state: {timer.state.value}")
    print_record(tracker, identity)

    print("\n4) Submit succeeds")
    clock.advance(5_000)
    accepted = Mock(return_value={"id": 101})
    result = timer.submit(draft, accepted)
    print(f"  ✅ submission {result.submission_id}, "
          f"time spent {format_duration(result.record.time_spent_ms)}")
    print(f"  state: {timer.state.value}")
    print_record(tracker, identity)

    print("\n5) Resume an earlier attempt at 00:12:30")
    url = tracker.resume(identity, "<xml>earlier</xml>", "00:12:30")
    print(f"  navigated to {url}")
    timer = tracker.timer(identity, on_elapsed_update=print_update)
    print(f"  outcome: {timer.mount().value}")
    print(f"  draft restored: {tracker.load_draft(identity)}")
    timer.reset()
    print_record(tracker, identity)


if __name__ == "__main__":
    main()
