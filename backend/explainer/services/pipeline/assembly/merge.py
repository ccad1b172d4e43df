"""
Merge stage - narration track + rendered scene -> final video.

The output is trimmed to the shorter of the two tracks.
"""

import asyncio
import shutil
from pathlib import Path
from typing import Awaitable, Callable

from explainer.core import get_logger, get_media_duration, AdapterFault, MergeFailed
from explainer.models import CompiledArtifact, FinalArtifact, NarrationSet, Plan
from explainer.services.infrastructure.storage import ProjectWorkspace
from explainer.services.pipeline.contracts import Muxer

logger = get_logger(__name__, component="merge")

DurationProbe = Callable[[str], Awaitable[float]]


class MergeStage:
    def __init__(self, muxer: Muxer, probe: DurationProbe = get_media_duration):
        self.muxer = muxer
        self.probe = probe

    async def run(
        self,
        plan: Plan,
        narration: NarrationSet,
        compiled: CompiledArtifact,
        workspace: ProjectWorkspace,
    ) -> FinalArtifact:
        missing_audio = [p for p in narration.audio_paths if not Path(p).exists()]
        if not narration.audio_paths or missing_audio:
            raise MergeFailed(f"Narration audio missing: {', '.join(missing_audio) or 'no clips'}")
        if not Path(compiled.video_path).exists():
            raise MergeFailed(f"Rendered video not found: {compiled.video_path}")

        audio_path = str(workspace.merged_audio_path)
        video_path = str(workspace.video_path)
        final_path = str(workspace.final_video_path)

        try:
            await self.muxer.concat_audio(narration.audio_paths, audio_path)
            await asyncio.to_thread(shutil.copy, compiled.video_path, video_path)

            audio_seconds = await self.probe(audio_path)
            video_seconds = await self.probe(video_path)
            duration = min(audio_seconds, video_seconds)
            logger.info(
                "Merging tracks",
                extra={
                    "audio_seconds": audio_seconds,
                    "video_seconds": video_seconds,
                    "duration_seconds": duration,
                },
            )

            await self.muxer.mux(video_path, audio_path, final_path, duration)
        except (AdapterFault, OSError) as e:
            raise MergeFailed(f"Merging audio and video failed: {e}") from e

        return FinalArtifact(
            final_path=final_path,
            project_root=str(workspace.root),
            layout=workspace.layout(),
            duration_seconds=duration,
            title=plan.title,
            scene_class=compiled.scene_class,
            attempts=compiled.attempts,
        )
