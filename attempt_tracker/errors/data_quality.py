"""
Data quality error classifications for stored and user supplied values.

These exceptions describe values that arrive in the wrong shape, either
from the persisted attempt store or from a prior submission being resumed.
"""

from typing import Any, Dict, Optional


class DataQualityError(Exception):
    """Base class for data quality issues."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class MalformedValueError(DataQualityError):
    """A stored value exists but cannot be decoded."""

    def __init__(self, message: str, key: Optional[str] = None,
                 raw_value: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.key = key
        self.raw_value = raw_value


class DurationParseError(DataQualityError):
    """An HH:MM:SS duration string could not be converted to milliseconds."""

    def __init__(self, message: str, raw_value: Optional[str] = None,
                 expected_format: str = "HH:MM:SS", **kwargs):
        super().__init__(message, **kwargs)
        self.raw_value = raw_value
        self.expected_format = expected_format
        # Resuming with a wrong baseline is worse than not resuming at all
        self.recoverable = False
