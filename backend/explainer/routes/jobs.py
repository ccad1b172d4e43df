"""
Job routes - submit explainer runs and poll their status.
"""

from typing import List

from fastapi import APIRouter, HTTPException

from ..core import get_logger, InvalidInput
from ..models import JobSubmission, JobCreatedResponse, JobRecordResponse
from ..services.infrastructure.orchestration import get_job_queue

logger = get_logger(__name__, component="jobs_routes")

router = APIRouter(tags=["jobs"])


@router.post("/jobs", response_model=JobCreatedResponse)
async def create_job(submission: JobSubmission):
    """Queue a pipeline run; returns immediately with the job id."""
    try:
        job_id = get_job_queue().submit(submission)
    except InvalidInput as e:
        raise HTTPException(status_code=400, detail=str(e))
    return JobCreatedResponse(job_id=job_id)


@router.get("/jobs", response_model=List[JobRecordResponse])
async def list_jobs():
    """All jobs, oldest first"""
    return [JobRecordResponse(**job.to_dict()) for job in get_job_queue().list_jobs()]


@router.get("/jobs/{job_id}", response_model=JobRecordResponse)
async def get_job(job_id: str):
    job = get_job_queue().get_status(job_id)
    if job is None:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobRecordResponse(**job.to_dict())
