"""Tests for session-scoped workspace drafts."""

from attempt_tracker.models.attempt import AttemptIdentity
from attempt_tracker.persistence.drafts import WorkspaceDraftStore
from attempt_tracker.persistence.store import InMemoryAttemptStore


class TestWorkspaceDraftStore:
    """Test WorkspaceDraftStore class."""

    def test_save_load_discard(self):
        """Drafts are keyed per attempt."""
        drafts = WorkspaceDraftStore()
        identity = AttemptIdentity("loops", 1)

        drafts.save(identity, "<xml/>")
        assert drafts.load(identity) == "<xml/>"
        assert drafts.load(AttemptIdentity("loops", 2)) is None

        drafts.discard(identity)
        assert drafts.load(identity) is None
        drafts.discard(identity)

    def test_uses_given_store_and_key(self):
        """Drafts land under blockly_workspace keys of the backing store."""
        backing = InMemoryAttemptStore()
        drafts = WorkspaceDraftStore(backing)
        drafts.save(AttemptIdentity("loops", 1), "<xml/>")

        assert backing.get("blockly_workspace_loops_1") == "<xml/>"

    def test_session_end_drops_drafts(self):
        """Clearing the session store loses drafts."""
        backing = InMemoryAttemptStore()
        drafts = WorkspaceDraftStore(backing)
        drafts.save(AttemptIdentity("loops", 1), "<xml/>")

        backing.clear()

        assert drafts.load(AttemptIdentity("loops", 1)) is None
