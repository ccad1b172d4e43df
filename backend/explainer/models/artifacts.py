"""
Stage result types passed between pipeline stages.

All of these flow forward only: a stage reads its predecessor's output and
never mutates it.
"""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class NarrationClip:
    """Synthesized narration for a single plan step"""
    step_number: int
    narration: str
    audio_path: str
    duration_seconds: int


@dataclass(frozen=True)
class NarrationSet:
    """Per-step narration, ordered by ascending step number"""
    clips: List[NarrationClip] = field(default_factory=list)

    @property
    def step_numbers(self) -> List[int]:
        return [clip.step_number for clip in self.clips]

    @property
    def audio_paths(self) -> List[str]:
        return [clip.audio_path for clip in self.clips]

    @property
    def total_seconds(self) -> int:
        return sum(clip.duration_seconds for clip in self.clips)

    def timing(self) -> Dict[int, int]:
        """Minimum on-screen seconds required for each step."""
        return {clip.step_number: clip.duration_seconds for clip in self.clips}

    def __len__(self) -> int:
        return len(self.clips)


@dataclass(frozen=True)
class CompiledArtifact:
    """A scene that rendered successfully"""
    video_path: str
    scene_class: str
    scene_file: str
    attempts: int = 1


@dataclass
class GenerationAttempt:
    """One generate-then-validate cycle of the correction loop"""
    index: int
    source: Optional[str] = None
    succeeded: bool = False
    artifact: Optional[CompiledArtifact] = None
    diagnostic: Optional[str] = None
    previous_diagnostic: Optional[str] = None


@dataclass(frozen=True)
class FinalArtifact:
    """Merged audio+video output of a pipeline run"""
    final_path: str
    project_root: str
    layout: Dict[str, str]
    duration_seconds: float
    title: str
    scene_class: str
    attempts: int
    post_run: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


__all__ = [
    "NarrationClip",
    "NarrationSet",
    "CompiledArtifact",
    "GenerationAttempt",
    "FinalArtifact",
]
