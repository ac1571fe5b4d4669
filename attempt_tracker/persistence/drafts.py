"""
Session-scoped storage of serialized workspaces.

A draft is the block workspace XML carried across a page transition, for
example from a past submission to the challenge page when the learner
resumes it. Drafts live in a store that is separate from the durable
attempt store and is expected to be dropped when the session ends.
"""

from typing import Optional

from ..models.attempt import ANONYMOUS_PARTITION, AttemptIdentity
from .keys import DEFAULT_DRAFT_PREFIX, draft_key
from .store import AttemptStore, InMemoryAttemptStore


class WorkspaceDraftStore:
    """Saves, loads and discards workspace drafts per attempt."""

    def __init__(self, store: Optional[AttemptStore] = None,
                 prefix: str = DEFAULT_DRAFT_PREFIX,
                 anonymous_partition: str = ANONYMOUS_PARTITION):
        self.store = store if store is not None else InMemoryAttemptStore()
        self.prefix = prefix
        self.anonymous_partition = anonymous_partition

    def key_for(self, identity: AttemptIdentity) -> str:
        return draft_key(identity.challenge_slug, identity.user_id,
                         prefix=self.prefix,
                         anonymous_partition=self.anonymous_partition)

    def save(self, identity: AttemptIdentity, xml: str) -> None:
        self.store.set(self.key_for(identity), xml)

    def load(self, identity: AttemptIdentity) -> Optional[str]:
        return self.store.get(self.key_for(identity))

    def discard(self, identity: AttemptIdentity) -> None:
        self.store.remove(self.key_for(identity))
