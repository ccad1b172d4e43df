"""
Video plan schema

The planner returns a Plan as structured output, so these models double as the
response schema sent to the model and as the validator for its answer.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


class SceneStep(BaseModel):
    """One narrated beat of the video"""
    step_number: int
    description: str
    visual_elements: str
    narration: str
    duration_estimate: Optional[float] = None


class Plan(BaseModel):
    """Structured plan for a whole explainer video"""
    title: str
    educational_goal: str
    visual_style: str
    narrative_arc: str  # e.g. "Mystery -> Resolution"
    steps: List[SceneStep] = Field(default_factory=list)

    def ordered_steps(self) -> List[SceneStep]:
        return sorted(self.steps, key=lambda step: step.step_number)


__all__ = ["SceneStep", "Plan"]
