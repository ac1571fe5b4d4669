"""
System failure error classifications.

These exceptions represent operations that could not complete. None of
them is raised after a destructive store mutation: a valid attempt record
survives every failure listed here.
"""

from typing import Any, Dict, Optional


class SystemFailureError(Exception):
    """Base class for failures surfaced to the caller."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class StateTransitionError(SystemFailureError):
    """Operation not allowed in the timer's current state."""

    def __init__(self, message: str, current_state: Optional[str] = None,
                 attempted_transition: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.current_state = current_state
        self.attempted_transition = attempted_transition


class PersistenceError(SystemFailureError):
    """The backing key-value store failed."""

    def __init__(self, message: str, operation: Optional[str] = None,
                 target: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.operation = operation
        self.target = target


class SubmissionError(SystemFailureError):
    """The submission collaborator rejected or failed to deliver a record."""

    def __init__(self, message: str, challenge_id: Optional[int] = None,
                 status_code: Optional[int] = None, retryable: bool = False,
                 **kwargs):
        super().__init__(message, **kwargs)
        self.challenge_id = challenge_id
        self.status_code = status_code
        self.retryable = retryable


class ResumeError(SystemFailureError):
    """A resume request cannot be seeded."""

    def __init__(self, message: str, challenge_slug: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.challenge_slug = challenge_slug


class ConfigurationError(SystemFailureError):
    """Loaded configuration failed validation."""

    def __init__(self, message: str, errors: Optional[list] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.errors = errors or []
