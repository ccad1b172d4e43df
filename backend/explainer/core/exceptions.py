"""
Core Exceptions
Standardized exceptions for the application.

Every stage of the pipeline fails with one of these classified errors; the job
queue records the message and the class name on the failed job.
"""

from typing import Optional


class ExplainerError(Exception):
    """Base exception for all application errors."""
    pass


class InvalidInput(ExplainerError):
    """Raised when a job submission is malformed."""
    pass


class PipelineError(ExplainerError):
    """Base exception for processing pipeline errors."""
    pass


class PlanningFailed(PipelineError):
    """Raised when the planner fails or returns an unusable plan."""
    pass


class NarrationFailed(PipelineError):
    """Raised when speech synthesis fails for any step."""

    def __init__(self, message: str, step_number: Optional[int] = None):
        super().__init__(message)
        self.step_number = step_number


class GenerationExhausted(PipelineError):
    """Raised when the correction loop runs out of attempts."""

    def __init__(self, attempts: int, last_diagnostic: str, source_preview: str):
        self.attempts = attempts
        self.last_diagnostic = last_diagnostic
        self.source_preview = source_preview
        super().__init__(
            f"Code compilation failed after {attempts} attempts.\n\n"
            f"Final error: {last_diagnostic or 'Unknown error'}\n\n"
            f"Last generated code:\n{source_preview}..."
        )


class MergeFailed(PipelineError):
    """Raised when narration and video cannot be combined."""
    pass


class InfrastructureError(ExplainerError):
    """Base exception for infrastructure errors (LLM, TTS, external tools)."""
    pass


class AdapterFault(InfrastructureError):
    """An external collaborator failed (network error, nonzero exit, bad output)."""
    pass


class AdapterTimeout(AdapterFault):
    """An external collaborator did not answer within its timeout."""
    pass
