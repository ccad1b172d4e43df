"""
Adapter interfaces the pipeline depends on.

The orchestrator and the retry loop only see these abstractions; the concrete
Gemini / Edge TTS / Manim / ffmpeg adapters live next to the stage that uses
them. Adapters keep no state between calls and report failures by raising
AdapterFault (or AdapterTimeout), except the renderer, which reports a failed
render as a RenderOutcome so the retry loop can feed it back.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from explainer.models import Plan


@dataclass(frozen=True)
class CodeGenerationRequest:
    """Everything the code generator sees for one attempt"""
    plan: Plan
    timing: Dict[int, int]
    previous_source: Optional[str] = None
    previous_diagnostic: Optional[str] = None

    @property
    def is_correction(self) -> bool:
        return self.previous_diagnostic is not None


@dataclass(frozen=True)
class RenderOutcome:
    """Result of one render: either a video or a diagnostic"""
    success: bool
    video_path: Optional[str] = None
    scene_class: Optional[str] = None
    scene_file: Optional[str] = None
    diagnostic: Optional[str] = None

    @classmethod
    def ok(cls, video_path: str, scene_class: str, scene_file: str) -> "RenderOutcome":
        return cls(success=True, video_path=video_path, scene_class=scene_class, scene_file=scene_file)

    @classmethod
    def failed(cls, diagnostic: str) -> "RenderOutcome":
        return cls(success=False, diagnostic=diagnostic)


class Planner(ABC):
    @abstractmethod
    async def plan(self, topic: str) -> Plan:
        """Turn a topic into a structured Plan."""


class SpeechSynthesizer(ABC):
    @abstractmethod
    async def synthesize(self, text: str, voice: str) -> bytes:
        """Return encoded audio (mp3) for the text."""


class CodeGenerator(ABC):
    @abstractmethod
    async def generate(self, request: CodeGenerationRequest) -> str:
        """Return a complete scene program (never a patch)."""


class SceneRenderer(ABC):
    @abstractmethod
    async def render(self, source: str, quality: str, work_dir: Path) -> RenderOutcome:
        """Compile a scene program to video."""


class Muxer(ABC):
    @abstractmethod
    async def concat_audio(self, audio_paths: List[str], output_path: str) -> str:
        """Concatenate audio files in order; returns the output path."""

    @abstractmethod
    async def mux(self, video_path: str, audio_path: str, output_path: str, duration: float) -> str:
        """Combine a video and an audio track trimmed to `duration` seconds."""


__all__ = [
    "CodeGenerationRequest",
    "RenderOutcome",
    "Planner",
    "SpeechSynthesizer",
    "CodeGenerator",
    "SceneRenderer",
    "Muxer",
]
