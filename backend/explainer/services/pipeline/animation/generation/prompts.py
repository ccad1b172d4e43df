"""
Scene Generation Prompts

- System instruction: Manim guidance, the plan, the narration timing and rules
- Initial request
- Correction request (previous source + renderer diagnostic)
"""

import json
from typing import Dict, Optional

from explainer.models import Plan
from explainer.services.infrastructure.llm import PromptTemplate


MANIM_GUIDE = """## MANIM COMMUNITY EDITION GUIDE

- Start every file with `from manim import *`.
- Define exactly one class deriving from `Scene` (or `MovingCameraScene`) with a `construct(self)` method.
- Only use documented constructor arguments. Unknown kwargs reach `Mobject.__init__()` and crash
  (`unexpected keyword argument`). Color MathTex with `tex_to_color_map` or `set_color_by_tex`.
- Dashed lines: build the solid mobject first, then wrap it in `DashedVMobject`.
- Plot with `axes.plot(lambda x: ..., x_range=[a, b], color=...)`; label axes with `axes.get_axis_labels()`.
- Group related objects with `VGroup(...).arrange(DOWN, buff=0.4)` instead of manual coordinates.
- Keep everything inside the frame (x in [-7, 7], y in [-4, 4]); scale groups down rather than overflow.
- Prefer `Transform` / `ReplacementTransform` over removing and recreating objects.
- FadeOut what is no longer needed before introducing the next idea.
- Use raw strings for LaTeX: `MathTex(r"\\frac{a}{b}")`.
"""


SCENE_SYSTEM = PromptTemplate(
    template="""You are an expert Manim developer and visual educator.

{manim_guide}

### TASK
Write a Manim script for this plan:
{plan_json}

### NARRATION TIMING (MANDATORY)
Each step MUST wait for its narration to complete. After the animations of a step,
call self.wait(<seconds>) so the step lasts at least its narration time.

Timing data:
{timing_json}

### RULES
- One idea at a time
- Visuals must NEVER outrun narration
- Prefer Transform over recreating
- Use VGroup + arrange
- Calm pacing
- Define a descriptive class name that reflects the video content
- Return the complete program in a single ```python block
""",
    description="Scene generation system instruction",
)


INITIAL_REQUEST = PromptTemplate(
    template="Generate initial Manim code. Make sure to define a descriptive Scene class name.",
    description="First attempt",
)


CORRECTION_REQUEST = PromptTemplate(
    template="""The previous code failed to compile with the following error:

{diagnostic}

PREVIOUS CODE:
```python
{previous_source}
```

Please fix the error and regenerate the complete corrected code. Focus on fixing the specific compilation error shown above.""",
    description="Correction attempt",
)


def build_system_prompt(plan: Plan, timing: Dict[int, int]) -> str:
    timing_info = [
        {"step": step, "wait_seconds": seconds}
        for step, seconds in sorted(timing.items())
    ]
    return SCENE_SYSTEM.format(
        manim_guide=MANIM_GUIDE,
        plan_json=json.dumps(plan.model_dump(), indent=2, ensure_ascii=False),
        timing_json=json.dumps(timing_info, indent=2),
    )


def build_user_prompt(previous_source: Optional[str] = None, diagnostic: Optional[str] = None) -> str:
    if diagnostic is None:
        return INITIAL_REQUEST.template
    return CORRECTION_REQUEST.format(
        diagnostic=diagnostic,
        previous_source=previous_source or "",
    )
