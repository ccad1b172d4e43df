"""
Scene Renderer - runs Manim on a generated program.

Rendering only: the renderer never edits code. A failed render comes back as
RenderOutcome.failed with the tail of Manim's output so the retry loop can
feed it to the next attempt.
"""

import asyncio
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Union

from explainer.core import get_logger
from explainer.services.infrastructure.parsing import extract_scene_name, scene_file_name
from explainer.services.pipeline.contracts import RenderOutcome, SceneRenderer

from ..config import MAX_DIAGNOSTIC_CHARS, RENDER_TIMEOUT, quality_flag

logger = get_logger(__name__, component="scene_renderer")


def _text(output: Union[str, bytes, None]) -> str:
    if output is None:
        return ""
    if isinstance(output, bytes):
        return output.decode("utf-8", errors="replace")
    return output


def tail(text: str, limit: int = MAX_DIAGNOSTIC_CHARS) -> str:
    return text[-limit:] if len(text) > limit else text


def remove_stale_videos(media_dir: Path, scene_class: str) -> None:
    """Delete earlier renders of the same class so a failed run can't look successful."""
    if not media_dir.exists():
        return
    for stale in media_dir.rglob(f"{scene_class}.mp4"):
        stale.unlink()


def find_rendered_video(media_dir: Path, scene_class: str) -> Optional[Path]:
    if not media_dir.exists():
        return None
    for candidate in sorted(media_dir.rglob(f"{scene_class}.mp4")):
        if "partial_movie_files" in candidate.parts:
            continue
        if candidate.stat().st_size > 0:
            return candidate
    return None


class ManimRenderer(SceneRenderer):
    """
    Writes `<work_dir>/scenes/<scene>.py` and renders it with
    `python -m manim <quality flag> --media_dir=<work_dir>/temp/media`.
    """

    def __init__(self, timeout: float = RENDER_TIMEOUT, python_executable: str = sys.executable):
        self.timeout = timeout
        self.python_executable = python_executable

    def build_command(self, scene_file: Path, scene_class: str, quality: str, media_dir: Path) -> List[str]:
        return [
            self.python_executable, "-m", "manim", quality_flag(quality),
            f"--media_dir={media_dir}",
            str(scene_file), scene_class,
        ]

    async def render(self, source: str, quality: str, work_dir: Path) -> RenderOutcome:
        work_dir = Path(work_dir)
        scene_class = extract_scene_name(source)
        if not scene_class:
            return RenderOutcome.failed("Could not find Scene class in generated code")

        scenes_dir = work_dir / "scenes"
        media_dir = work_dir / "temp" / "media"
        scene_file = scenes_dir / scene_file_name(scene_class)
        try:
            cmd = self.build_command(scene_file, scene_class, quality, media_dir)
            scenes_dir.mkdir(parents=True, exist_ok=True)
            media_dir.mkdir(parents=True, exist_ok=True)
            scene_file.write_text(source, encoding="utf-8")
            remove_stale_videos(media_dir, scene_class)
        except ValueError as e:
            return RenderOutcome.failed(str(e))
        except OSError as e:
            logger.error(f"Could not prepare scene file: {e}", extra={"scene_file": str(scene_file)})
            return RenderOutcome.failed(f"Could not prepare scene file: {e}")

        logger.info("Rendering scene", extra={"scene_class": scene_class, "quality": quality})

        try:
            result = await asyncio.to_thread(
                subprocess.run, cmd, capture_output=True, text=True, timeout=self.timeout
            )
        except subprocess.TimeoutExpired as e:
            output = _text(e.stdout) + _text(e.stderr)
            logger.error(f"Manim rendering timed out (Limit: {self.timeout}s)")
            return RenderOutcome.failed(
                tail(f"{output}\nRendering timed out after {self.timeout}s")
            )
        except OSError as e:
            logger.error(f"Manim could not be started: {e}")
            return RenderOutcome.failed(f"Manim could not be started: {e}")

        output = _text(result.stdout) + _text(result.stderr)
        if result.returncode != 0:
            logger.warning(
                "Manim render failed",
                extra={"scene_class": scene_class, "returncode": result.returncode},
            )
            return RenderOutcome.failed(tail(output) or f"Manim exited with code {result.returncode}")

        video = find_rendered_video(media_dir, scene_class)
        if video is None:
            logger.error(f"Video file not found after rendering {scene_class}", extra={"media_dir": str(media_dir)})
            return RenderOutcome.failed(
                tail(f"{output}\nRendered video {scene_class}.mp4 not found under {media_dir}")
            )

        logger.info(f"Successfully rendered video: {video}")
        return RenderOutcome.ok(
            video_path=str(video),
            scene_class=scene_class,
            scene_file=scene_file.name,
        )
