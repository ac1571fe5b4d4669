"""Base classes for submission delivery."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Union

import structlog

from ..models.submission import SubmissionRecord

SubmitFunction = Callable[[SubmissionRecord], Optional[dict[str, Any]]]


class BaseSubmitter(ABC):
    """Hands a finalized record to the grading service."""

    def __init__(self, name: str):
        self.name = name
        self.logger = structlog.get_logger(f"submission.{name}")
        self._submit_count = 0
        self._error_count = 0

    @abstractmethod
    def submit(self, record: SubmissionRecord) -> Optional[dict[str, Any]]:
        """
        Deliver one record.

        Args:
            record: Finalized submission record

        Returns:
            Response data from the grading service, if any

        Raises:
            SubmissionError: Or any other exception, when the record was
                not accepted
        """

    def get_stats(self) -> dict[str, Any]:
        """Get submission statistics."""
        total = self._submit_count + self._error_count
        return {
            "name": self.name,
            "submit_count": self._submit_count,
            "error_count": self._error_count,
            "success_rate": self._submit_count / total if total > 0 else 0.0,
        }


class CallableSubmitter(BaseSubmitter):
    """Adapts a plain function into a submitter."""

    def __init__(self, func: SubmitFunction, name: str = "callable"):
        super().__init__(name)
        self.func = func

    def submit(self, record: SubmissionRecord) -> Optional[dict[str, Any]]:
        try:
            response = self.func(record)
        except Exception:
            self._error_count += 1
            raise
        self._submit_count += 1
        return response


def as_submitter(target: Union[BaseSubmitter, SubmitFunction]) -> BaseSubmitter:
    """Accept either a submitter or a bare callable."""
    if isinstance(target, BaseSubmitter):
        return target
    if callable(target):
        return CallableSubmitter(target)
    raise TypeError(f"Not a submitter: {target!r}")
