"""
Submission collaborators.

Deliver a finalized submission record to the grading service. Retry
policy, if any, belongs to the collaborator, never to the timer.
"""

from .base import BaseSubmitter, CallableSubmitter, as_submitter
from .http_submitter import HttpSubmitter

__all__ = ["BaseSubmitter", "CallableSubmitter", "HttpSubmitter", "as_submitter"]
