"""
Typed access to one attempt's persisted entries.

The repository owns serialization of the four attempt fields. Numeric
fields that are missing or malformed decode to zero and never fail the
caller. The `isResumed` flag is exposed as a single-use resume token:
`issue_resume_token` writes it and `consume_resume_token` reads and clears
it in one step, so the first mount that sees it is the only one that does.
"""

from typing import Optional

import structlog

from ..errors import MalformedValueError
from ..models.attempt import AttemptField, AttemptIdentity, AttemptRecord
from .keys import AttemptKeys
from .store import AttemptStore

logger = structlog.get_logger(__name__)

TRUE = "true"


def decode_int(raw: Optional[str], key: str = "") -> int:
    """
    Decode a base-10 integer string.

    Raises:
        MalformedValueError: If the value is absent or not an integer
    """
    if raw is None or raw == "":
        raise MalformedValueError("Value is missing", key=key, raw_value=raw)
    try:
        return int(raw.strip())
    except ValueError:
        # Tolerate float serialisations such as "1700000000000.0"
        try:
            return int(float(raw))
        except (ValueError, OverflowError) as e:
            raise MalformedValueError(
                f"Value {raw!r} is not numeric", key=key, raw_value=raw
            ) from e


class AttemptRepository:
    """Reads and writes the attempt record of a single identity."""

    def __init__(self, store: AttemptStore, keys: AttemptKeys):
        self.store = store
        self.keys = keys
        self.logger = logger.bind(attempt=str(keys.identity))

    @classmethod
    def for_identity(cls, store: AttemptStore, identity: AttemptIdentity,
                     prefix: str = "challenge",
                     anonymous_partition: str = "anonymous") -> "AttemptRepository":
        return cls(store, AttemptKeys(identity, prefix=prefix,
                                      anonymous_partition=anonymous_partition))

    @property
    def identity(self) -> AttemptIdentity:
        return self.keys.identity

    def read_number(self, field: AttemptField) -> int:
        """Read a numeric field, treating missing or malformed values as zero."""
        key = self.keys.key(field)
        raw = self.store.get(key)
        if raw is None:
            return 0
        try:
            return decode_int(raw, key)
        except MalformedValueError as e:
            self.logger.warning(
                "Malformed stored value treated as zero",
                field=field.value,
                raw_value=e.raw_value
            )
            return 0

    def read_flag(self, field: AttemptField) -> bool:
        return self.store.get(self.keys.key(field)) == TRUE

    def read_start(self) -> Optional[int]:
        """Segment start, or None when absent or unusable."""
        key = self.keys.start
        raw = self.store.get(key)
        if raw is None or raw == "":
            return None
        try:
            return decode_int(raw, key)
        except MalformedValueError:
            self.logger.warning("Malformed segment start ignored", raw_value=raw)
            return None

    def read_record(self) -> AttemptRecord:
        return AttemptRecord(
            start=self.read_start(),
            active=self.read_flag(AttemptField.ACTIVE),
            time_spent=self.read_number(AttemptField.TIME_SPENT),
            is_resumed=self.read_flag(AttemptField.IS_RESUMED),
        )

    def snapshot(self) -> dict[str, Optional[str]]:
        """Raw stored strings for all four fields."""
        return {field.value: self.store.get(self.keys.key(field)) for field in AttemptField}

    def begin_segment(self, now_ms: int) -> None:
        """Record a new running segment starting at `now_ms`."""
        self.store.set(self.keys.start, str(int(now_ms)))
        self.store.set(self.keys.active, TRUE)

    def write_time_spent(self, time_spent_ms: int) -> None:
        self.store.set(self.keys.time_spent, str(int(time_spent_ms)))

    def issue_resume_token(self, time_spent_ms: int) -> None:
        """
        Seed a resume: baseline, token, no segment start, active flag.

        Written in this order so that a reader never sees the token without
        the baseline it refers to.
        """
        self.write_time_spent(time_spent_ms)
        self.store.set(self.keys.is_resumed, TRUE)
        self.store.remove(self.keys.start)
        self.store.set(self.keys.active, TRUE)

    def consume_resume_token(self) -> bool:
        """Return whether a resume token was present, clearing it."""
        present = self.read_flag(AttemptField.IS_RESUMED)
        self.store.remove(self.keys.is_resumed)
        return present

    def clear(self) -> None:
        """Remove all four fields. Idempotent."""
        for key in self.keys.all():
            self.store.remove(key)
