"""Default configuration parameters for the attempt tracker."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class TimerParams:
    """Timer state machine parameters."""
    tick_interval_ms: int = 1000                  # Elapsed-time publish period
    carry_baseline_on_reload: bool = False        # Reload of a resumed attempt keeps timeSpent


@dataclass(frozen=True)
class StorageParams:
    """Key layout and backing store parameters."""
    key_prefix: str = "challenge"
    anonymous_partition: str = "anonymous"
    draft_key_prefix: str = "blockly_workspace"
    backend: str = "memory"                       # memory, sqlite
    sqlite_path: str = "attempts.db"


@dataclass(frozen=True)
class ResumeParams:
    """Resume trigger parameters."""
    challenge_url_template: str = "/tantangan/{slug}"


@dataclass(frozen=True)
class SubmissionApiParams:
    """Grading API parameters for the HTTP submitter."""
    base_url: str = "http://localhost:8000/api"
    endpoint: str = "submissions"
    timeout_seconds: int = 30
    auth_token: Optional[str] = None
    verify_ssl: bool = True


@dataclass(frozen=True)
class TrackerConfig:
    """Complete tracker configuration."""
    timer: TimerParams
    storage: StorageParams
    resume: ResumeParams
    submission: SubmissionApiParams


def get_default_config() -> TrackerConfig:
    """Get the default configuration instance."""
    return TrackerConfig(
        timer=TimerParams(),
        storage=StorageParams(),
        resume=ResumeParams(),
        submission=SubmissionApiParams(),
    )
