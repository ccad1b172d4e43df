from pathlib import Path
from typing import Dict, List

import pytest

from explainer.models import NarrationClip, NarrationSet, Plan, SceneStep
from explainer.services.pipeline.contracts import RenderOutcome


SCENE_SOURCE = """from manim import *


class PythagorasProof(Scene):
    def construct(self):
        title = Text("a^2 + b^2 = c^2")
        self.play(Write(title))
        self.wait(4)
"""


@pytest.fixture(autouse=True)
def isolated_output_dir(monkeypatch, tmp_path):
    """Keep any default-path writes inside the test's tmp dir"""
    monkeypatch.setattr(
        "explainer.services.infrastructure.storage.workspace.OUTPUT_DIR",
        tmp_path / "output",
    )


@pytest.fixture
def scene_source() -> str:
    return SCENE_SOURCE


@pytest.fixture
def sample_plan() -> Plan:
    return Plan(
        title="The Pythagorean Theorem!",
        educational_goal="See why a^2 + b^2 = c^2 by rearranging squares",
        visual_style="Dark background, colored squares",
        narrative_arc="Mystery -> Resolution",
        steps=[
            SceneStep(step_number=2, description="Rearrange", visual_elements="Four triangles",
                      narration="Slide the triangles around."),
            SceneStep(step_number=1, description="Hook", visual_elements="Right triangle",
                      narration="Why do these squares always match?"),
            SceneStep(step_number=3, description="Payoff", visual_elements="Equation",
                      narration="So the areas must be equal."),
        ],
    )


def make_narration(tmp_path: Path, durations: Dict[int, int]) -> NarrationSet:
    audio_dir = tmp_path / "audio"
    audio_dir.mkdir(parents=True, exist_ok=True)
    clips: List[NarrationClip] = []
    for step, seconds in sorted(durations.items()):
        audio_path = audio_dir / f"step_{step}.mp3"
        audio_path.write_bytes(b"ID3")
        clips.append(NarrationClip(step_number=step, narration=f"step {step}",
                                   audio_path=str(audio_path), duration_seconds=seconds))
    return NarrationSet(clips=clips)


@pytest.fixture
def narration_set(tmp_path) -> NarrationSet:
    return make_narration(tmp_path, {1: 4, 2: 6, 3: 5})


@pytest.fixture
def rendered_video(tmp_path) -> Path:
    video = tmp_path / "temp" / "media" / "videos" / "pythagorasproof" / "480p15" / "PythagorasProof.mp4"
    video.parent.mkdir(parents=True, exist_ok=True)
    video.write_bytes(b"\x00" * 2048)
    return video


@pytest.fixture
def ok_outcome(rendered_video) -> RenderOutcome:
    return RenderOutcome.ok(
        video_path=str(rendered_video),
        scene_class="PythagorasProof",
        scene_file="pythagorasproof.py",
    )
