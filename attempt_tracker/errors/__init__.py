"""
Error classification for the attempt tracker.

Data quality errors describe bad input that is either recovered locally
(malformed stored values) or rejected up front (unparseable durations).
System failures describe operations that could not complete and must be
surfaced to the caller.
"""

from .data_quality import (
    DataQualityError,
    MalformedValueError,
    DurationParseError,
)
from .system_failures import (
    SystemFailureError,
    StateTransitionError,
    PersistenceError,
    SubmissionError,
    ResumeError,
    ConfigurationError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedValueError",
    "DurationParseError",
    # System Failures
    "SystemFailureError",
    "StateTransitionError",
    "PersistenceError",
    "SubmissionError",
    "ResumeError",
    "ConfigurationError",
]
