"""
Narration stage - one synthesized clip per plan step.

Steps are synthesized one after another in ascending step order so file names
and timings are deterministic. Any failure aborts the whole stage; callers
never see a partial NarrationSet.
"""

import asyncio
import math
from typing import Awaitable, Callable, List, Optional

from explainer.config import DEFAULT_VOICE
from explainer.core import get_logger, get_media_duration, AdapterFault, NarrationFailed
from explainer.models import NarrationClip, NarrationSet, Plan
from explainer.services.infrastructure.storage import ProjectWorkspace
from explainer.services.pipeline.contracts import SpeechSynthesizer

logger = get_logger(__name__, component="narration")

DurationProbe = Callable[[str], Awaitable[float]]


class NarrationStage:
    """Synthesizes and measures narration for every step of a Plan"""

    def __init__(self, synthesizer: SpeechSynthesizer, probe: DurationProbe = get_media_duration):
        self.synthesizer = synthesizer
        self.probe = probe

    async def run(
        self,
        plan: Plan,
        workspace: ProjectWorkspace,
        voice: Optional[str] = None,
    ) -> NarrationSet:
        voice = voice or DEFAULT_VOICE
        clips: List[NarrationClip] = []

        for step in plan.ordered_steps():
            audio_path = workspace.step_audio_path(step.step_number)
            try:
                audio = await self.synthesizer.synthesize(step.narration, voice)
                if not audio:
                    raise AdapterFault("speech synthesizer returned empty audio")
                await asyncio.to_thread(audio_path.write_bytes, audio)
                seconds = await self.probe(str(audio_path))
            except (AdapterFault, OSError) as e:
                raise NarrationFailed(
                    f"Narration failed for step {step.step_number}: {e}",
                    step_number=step.step_number,
                ) from e

            clip = NarrationClip(
                step_number=step.step_number,
                narration=step.narration,
                audio_path=str(audio_path),
                duration_seconds=math.ceil(seconds),
            )
            clips.append(clip)
            logger.info(
                "Narration synthesized",
                extra={"step_number": step.step_number, "duration_seconds": clip.duration_seconds},
            )

        return NarrationSet(clips=clips)


__all__ = ["NarrationStage", "DurationProbe"]
