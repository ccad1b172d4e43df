"""
Data models: API schemas, the video plan and stage results
"""

from .status import JobStatus
from .plan import Plan, SceneStep
from .artifacts import (
    NarrationClip,
    NarrationSet,
    CompiledArtifact,
    GenerationAttempt,
    FinalArtifact,
)
from .jobs import JobSubmission, JobCreatedResponse, JobRecordResponse

__all__ = [
    "JobStatus",
    "Plan",
    "SceneStep",
    "NarrationClip",
    "NarrationSet",
    "CompiledArtifact",
    "GenerationAttempt",
    "FinalArtifact",
    "JobSubmission",
    "JobCreatedResponse",
    "JobRecordResponse",
]
