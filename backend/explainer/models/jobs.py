"""
API schemas for job endpoints
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class JobSubmission(BaseModel):
    """Request to render an explainer video for a topic.

    Topic and quality are validated by the job queue so that malformed input is
    reported the same way from HTTP and the CLI.
    """
    model_config = ConfigDict(populate_by_name=True)

    topic: Optional[str] = None
    quality: str = "low"  # low, medium, high
    output_dir: Optional[str] = Field(default=None, alias="outputDir")
    skip_cleanup: bool = Field(default=False, alias="skipCleanup")
    voice_id: Optional[str] = Field(default=None, alias="voiceId")
    post_run: Optional[str] = Field(default=None, alias="postRun")


class JobCreatedResponse(BaseModel):
    """Response after a job was accepted, serialized as `{"jobId": ...}`"""
    model_config = ConfigDict(populate_by_name=True)

    job_id: str = Field(alias="jobId")


class JobRecordResponse(BaseModel):
    """Full job record"""
    id: str
    status: str
    created_at: str
    started_at: Optional[str] = None
    finished_at: Optional[str] = None
    input: Dict[str, Any]
    result: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    error_type: Optional[str] = None


__all__ = ["JobSubmission", "JobCreatedResponse", "JobRecordResponse"]
