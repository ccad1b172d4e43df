"""Job orchestration - queue and single worker."""

from .job_queue import Job, JobQueue, JobStatus, validate_submission, get_job_queue

__all__ = ["Job", "JobQueue", "JobStatus", "validate_submission", "get_job_queue"]
