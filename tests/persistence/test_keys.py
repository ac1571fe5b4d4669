"""Tests for the attempt storage key scheme."""

import pytest

from attempt_tracker.models.attempt import AttemptField, AttemptIdentity
from attempt_tracker.persistence.keys import AttemptKeys, attempt_key, draft_key


class TestAttemptKey:
    """Test attempt_key function."""

    def test_plain_identity_matches_legacy_format(self):
        """Ordinary slugs and numeric ids produce the familiar key layout."""
        assert attempt_key("hello-world", 42, AttemptField.START) == "challenge_hello-world_42_start"
        assert attempt_key("hello-world", 42, AttemptField.TIME_SPENT) == "challenge_hello-world_42_timeSpent"
        assert attempt_key("hello-world", 42, AttemptField.IS_RESUMED) == "challenge_hello-world_42_isResumed"

    def test_anonymous_partition(self):
        """Absent user id routes to the anonymous partition."""
        assert attempt_key("hello-world", None, AttemptField.ACTIVE) == "challenge_hello-world_anonymous_active"
        assert attempt_key("hello-world", "", AttemptField.ACTIVE) == "challenge_hello-world_anonymous_active"

    def test_deterministic(self):
        """Same inputs always yield the same key."""
        assert attempt_key("loops", "u1", "start") == attempt_key("loops", "u1", AttemptField.START)

    def test_underscores_cannot_cause_collisions(self):
        """Separator characters inside components are escaped."""
        a = attempt_key("a_1", "2", AttemptField.START)
        b = attempt_key("a", "1_2", AttemptField.START)
        assert a != b
        assert a == "challenge_a%5F1_2_start"

    def test_user_named_anonymous_is_isolated(self):
        """A real user whose id spells 'anonymous' does not share the anonymous partition."""
        real = attempt_key("loops", "anonymous", AttemptField.START)
        anon = attempt_key("loops", None, AttemptField.START)
        assert real != anon

    @pytest.mark.parametrize("first,second", [
        (("loops", 1), ("loops", 2)),
        (("loops", 1), ("arrays", 1)),
        (("loops", "1"), ("loops", "1%")),
        (("lo/ops", 1), ("lo%2Fops", 1)),
    ])
    def test_distinct_identities_never_collide(self, first, second):
        """Different (slug, user) pairs map to different keys for every field."""
        for field in AttemptField:
            assert attempt_key(*first, field) != attempt_key(*second, field)

    def test_fields_never_collide(self):
        """The four fields of one identity have four distinct keys."""
        keys = {attempt_key("loops", 1, field) for field in AttemptField}
        assert len(keys) == 4

    def test_custom_prefix(self):
        """Prefix and anonymous partition are configurable."""
        key = attempt_key("loops", None, AttemptField.START, prefix="quiz", anonymous_partition="guest")
        assert key == "quiz_loops_guest_start"


class TestDraftKey:
    """Test draft_key function."""

    def test_draft_key_format(self):
        """Workspace drafts use their own prefix."""
        assert draft_key("hello-world", 42) == "blockly_workspace_hello-world_42"

    def test_draft_key_differs_from_attempt_keys(self):
        """Drafts never overwrite attempt fields."""
        assert draft_key("hello-world", 42) not in AttemptKeys(AttemptIdentity("hello-world", 42)).all()


class TestAttemptKeys:
    """Test AttemptKeys binding."""

    def test_properties_match_function(self):
        """Bound keys agree with attempt_key."""
        keys = AttemptKeys(AttemptIdentity("loops", 5))
        assert keys.start == attempt_key("loops", 5, AttemptField.START)
        assert keys.active == attempt_key("loops", 5, AttemptField.ACTIVE)
        assert keys.time_spent == attempt_key("loops", 5, AttemptField.TIME_SPENT)
        assert keys.is_resumed == attempt_key("loops", 5, AttemptField.IS_RESUMED)

    def test_all_returns_four_keys_with_shared_prefix(self):
        """All four keys share the identity prefix."""
        keys = AttemptKeys(AttemptIdentity("loops", 5)).all()
        assert len(keys) == 4
        assert all(k.startswith("challenge_loops_5_") for k in keys)
