"""
Job status enumeration.
"""

from enum import Enum


class JobStatus(str, Enum):
    """Lifecycle of a queued pipeline run."""

    QUEUED = "queued"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"

    def is_terminal(self) -> bool:
        """Check if this status is a terminal state (no further mutation)."""
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


__all__ = ["JobStatus"]
