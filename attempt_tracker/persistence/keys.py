"""
Storage key scheme for attempt state.

Keys look like `challenge_{slug}_{user}_{field}`. Slug and user are
percent-encoded with `_` escaped as well, so no component can contain the
separator and distinct (slug, user, field) triples never share a key.
Ordinary slugs (letters, digits, hyphens) and numeric user ids are left
unchanged by the encoding.
"""

from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import quote

from ..models.attempt import ANONYMOUS_PARTITION, AttemptField, AttemptIdentity

DEFAULT_KEY_PREFIX = "challenge"
DEFAULT_DRAFT_PREFIX = "blockly_workspace"
SEPARATOR = "_"


def _encode(component: str) -> str:
    return quote(component, safe="").replace("_", "%5F")


def _partition(user_id: Optional[Union[str, int]], anonymous_partition: str) -> str:
    if user_id is None or str(user_id) == "":
        return anonymous_partition
    encoded = _encode(str(user_id))
    if encoded == anonymous_partition:
        # A real user whose id spells the anonymous partition gets its first byte escaped
        encoded = f"%{ord(encoded[0]):02X}{encoded[1:]}"
    return encoded


def attempt_key(
    challenge_slug: str,
    user_id: Optional[Union[str, int]],
    field: Union[AttemptField, str],
    prefix: str = DEFAULT_KEY_PREFIX,
    anonymous_partition: str = ANONYMOUS_PARTITION
) -> str:
    """
    Build the storage key for one attempt field.

    Args:
        challenge_slug: Challenge identity
        user_id: Learner identity, None when anonymous
        field: Attempt field suffix
        prefix: Leading key component
        anonymous_partition: User component used when user_id is absent

    Returns:
        Deterministic storage key
    """
    field_name = field.value if isinstance(field, AttemptField) else str(field)
    return SEPARATOR.join((
        prefix,
        _encode(challenge_slug),
        _partition(user_id, anonymous_partition),
        field_name,
    ))


def draft_key(
    challenge_slug: str,
    user_id: Optional[Union[str, int]],
    prefix: str = DEFAULT_DRAFT_PREFIX,
    anonymous_partition: str = ANONYMOUS_PARTITION
) -> str:
    """Session-scoped key holding the serialized workspace of an attempt."""
    return SEPARATOR.join((
        prefix,
        _encode(challenge_slug),
        _partition(user_id, anonymous_partition),
    ))


@dataclass(frozen=True)
class AttemptKeys:
    """Key scheme bound to one attempt identity."""

    identity: AttemptIdentity
    prefix: str = DEFAULT_KEY_PREFIX
    anonymous_partition: str = ANONYMOUS_PARTITION

    def key(self, field: AttemptField) -> str:
        return attempt_key(
            self.identity.challenge_slug,
            self.identity.user_id,
            field,
            prefix=self.prefix,
            anonymous_partition=self.anonymous_partition,
        )

    @property
    def start(self) -> str:
        return self.key(AttemptField.START)

    @property
    def active(self) -> str:
        return self.key(AttemptField.ACTIVE)

    @property
    def time_spent(self) -> str:
        return self.key(AttemptField.TIME_SPENT)

    @property
    def is_resumed(self) -> str:
        return self.key(AttemptField.IS_RESUMED)

    def all(self) -> list[str]:
        return [self.key(f) for f in AttemptField]
