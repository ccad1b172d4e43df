"""
Job Queue - in-memory FIFO of pipeline runs with a single worker.

`submit` is synchronous: it validates, records a queued job and schedules the
worker if it is idle. The worker is one asyncio task that drains the pending
list one job at a time, so at most one job is ever running.
"""

import asyncio
import copy
import uuid
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timezone
from threading import RLock
from typing import Any, Awaitable, Callable, Deque, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from explainer.core import get_logger, set_job_id, InvalidInput
from explainer.models import JobStatus, JobSubmission
from explainer.services.pipeline.animation.config import QUALITY_LEVELS

logger = get_logger(__name__, component="job_queue")

PipelineRunner = Callable[[JobSubmission], Awaitable[Any]]


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class Job:
    id: str
    input: JobSubmission
    status: JobStatus = JobStatus.QUEUED
    created_at: str = field(default_factory=_utc_now)
    started_at: Optional[str] = None
    finished_at: Optional[str] = None
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    error_type: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "status": self.status.value,
            "created_at": self.created_at,
            "started_at": self.started_at,
            "finished_at": self.finished_at,
            "input": self.input.model_dump(),
            "result": self.result,
            "error": self.error,
            "error_type": self.error_type,
        }


def validate_submission(submission: Union[JobSubmission, Mapping[str, Any]]) -> JobSubmission:
    """Normalize a submission and reject malformed input with InvalidInput."""
    if not isinstance(submission, JobSubmission):
        try:
            submission = JobSubmission.model_validate(dict(submission))
        except (TypeError, ValueError, ValidationError) as e:
            raise InvalidInput(f"Invalid job input: {e}") from e

    topic = submission.topic
    if not isinstance(topic, str) or not topic.strip():
        raise InvalidInput("Prompt is required and must be a non-empty string")

    if submission.quality not in QUALITY_LEVELS:
        raise InvalidInput(
            f"Invalid quality '{submission.quality}', expected one of: {', '.join(QUALITY_LEVELS)}"
        )

    return submission.model_copy(update={"topic": topic.strip()})


class JobQueue:
    """Owns every Job record; only the worker mutates them after creation."""

    def __init__(self, runner: PipelineRunner):
        self._runner = runner
        self._jobs: Dict[str, Job] = {}
        self._pending: Deque[str] = deque()
        self._lock = RLock()
        self._busy = False
        self._worker: Optional[asyncio.Task] = None

    @property
    def is_busy(self) -> bool:
        return self._busy

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    def submit(self, submission: Union[JobSubmission, Mapping[str, Any]]) -> str:
        """Validate and enqueue a run. Must be called from the event loop thread."""
        job_input = validate_submission(submission)
        loop = asyncio.get_running_loop()

        job_id = str(uuid.uuid4())
        with self._lock:
            self._jobs[job_id] = Job(id=job_id, input=job_input)
            self._pending.append(job_id)
            start_worker = not self._busy
            if start_worker:
                self._busy = True

        logger.info(
            "Job queued",
            extra={"job_id": job_id, "quality": job_input.quality, "pending": self.pending_count},
        )

        if start_worker:
            self._worker = loop.create_task(self._work())
        return job_id

    def get_status(self, job_id: str) -> Optional[Job]:
        """Snapshot of a job, or None when the id is unknown."""
        with self._lock:
            job = self._jobs.get(job_id)
            return copy.deepcopy(job) if job else None

    def list_jobs(self) -> List[Job]:
        """Snapshots of every job, oldest first."""
        with self._lock:
            return [copy.deepcopy(job) for job in self._jobs.values()]

    async def drain(self) -> None:
        """Wait until the pending list is empty and the worker is idle."""
        while self._worker is not None and not self._worker.done():
            await self._worker

    async def _work(self) -> None:
        try:
            while True:
                with self._lock:
                    if not self._pending:
                        self._busy = False
                        return
                    job = self._jobs[self._pending.popleft()]
                    job.status = JobStatus.RUNNING
                    job.started_at = _utc_now()
                await self._execute(job)
        except asyncio.CancelledError:
            with self._lock:
                self._busy = False
            raise

    async def _execute(self, job: Job) -> None:
        set_job_id(job.id)
        logger.info("Job started", extra={"job_id": job.id})
        try:
            outcome = await self._runner(job.input)
            result = outcome.to_dict() if hasattr(outcome, "to_dict") else outcome
        except Exception as e:
            logger.error(
                "Job failed",
                extra={"job_id": job.id, "error_type": type(e).__name__, "error": str(e)},
                exc_info=True,
            )
            with self._lock:
                job.status = JobStatus.FAILED
                job.error = str(e) or type(e).__name__
                job.error_type = type(e).__name__
                job.finished_at = _utc_now()
        else:
            with self._lock:
                job.status = JobStatus.COMPLETED
                job.result = result
                job.finished_at = _utc_now()
            logger.info("Job completed", extra={"job_id": job.id})
        finally:
            set_job_id(None)


_job_queue_instance: Optional[JobQueue] = None


def get_job_queue() -> JobQueue:
    """Get the shared JobQueue instance (singleton pattern)."""
    global _job_queue_instance
    if _job_queue_instance is None:
        from explainer.services.pipeline.orchestrator import run_job

        _job_queue_instance = JobQueue(run_job)
    return _job_queue_instance


__all__ = ["Job", "JobQueue", "PipelineRunner", "validate_submission", "get_job_queue"]
