"""
Project workspace - on-disk layout of a single pipeline run.

    <output_dir>/<sanitized title>_<timestamp>/
        scenes/         generated scene sources
        audio/          per-step narration + merged narration track
        video/          rendered scene video
        final/          muxed deliverable
        temp/           renderer media output (removed on cleanup)
        narration.txt
        plan.json
"""

import re
import shutil
import time
from pathlib import Path
from typing import Dict, Optional, Union

from explainer.config import OUTPUT_DIR
from explainer.core import get_logger
from explainer.models import NarrationSet, Plan

logger = get_logger(__name__, component="workspace")

MAX_NAME_LENGTH = 30
SUBDIRECTORIES = ("scenes", "audio", "video", "final", "temp")


def sanitize_project_name(title: str) -> str:
    """Lowercase, replace anything that is not [a-z0-9] with '_', cap length."""
    return re.sub(r"[^a-z0-9]", "_", title.lower())[:MAX_NAME_LENGTH]


class ProjectWorkspace:
    """Directory layout for one run, rooted at `<output_dir>/<name>_<timestamp>`"""

    def __init__(
        self,
        title: str,
        output_dir: Optional[Union[str, Path]] = None,
        timestamp: Optional[int] = None,
    ):
        base = Path(output_dir) if output_dir else OUTPUT_DIR
        stamp = timestamp if timestamp is not None else int(time.time() * 1000)
        self.project_name = f"{sanitize_project_name(title)}_{stamp}"
        self.root = base.resolve() / self.project_name

    @property
    def scenes_dir(self) -> Path:
        return self.root / "scenes"

    @property
    def audio_dir(self) -> Path:
        return self.root / "audio"

    @property
    def video_dir(self) -> Path:
        return self.root / "video"

    @property
    def final_dir(self) -> Path:
        return self.root / "final"

    @property
    def temp_dir(self) -> Path:
        return self.root / "temp"

    @property
    def narration_file(self) -> Path:
        return self.root / "narration.txt"

    @property
    def plan_file(self) -> Path:
        return self.root / "plan.json"

    @property
    def merged_audio_path(self) -> Path:
        return self.audio_dir / "narration_full.mp3"

    @property
    def video_path(self) -> Path:
        return self.video_dir / "video.mp4"

    @property
    def final_video_path(self) -> Path:
        return self.final_dir / f"{self.project_name}.mp4"

    def step_audio_path(self, step_number: int) -> Path:
        return self.audio_dir / f"step_{step_number}.mp3"

    def layout(self) -> Dict[str, str]:
        """All well-known paths as strings (stored on the final artifact)."""
        return {
            "root": str(self.root),
            "scenes": str(self.scenes_dir),
            "audio": str(self.audio_dir),
            "video": str(self.video_dir),
            "final": str(self.final_dir),
            "temp": str(self.temp_dir),
            "narration": str(self.narration_file),
            "plan": str(self.plan_file),
        }

    def create(self) -> "ProjectWorkspace":
        for name in SUBDIRECTORIES:
            (self.root / name).mkdir(parents=True, exist_ok=True)
        logger.info("Workspace created", extra={"project_root": str(self.root)})
        return self

    def save_plan(self, plan: Plan) -> Path:
        self.plan_file.write_text(plan.model_dump_json(indent=2), encoding="utf-8")
        return self.plan_file

    def save_narration(self, narration: NarrationSet) -> Path:
        blocks = [
            f"Step {clip.step_number} ({clip.duration_seconds}s):\n{clip.narration}"
            for clip in narration.clips
        ]
        self.narration_file.write_text("\n\n".join(blocks) + "\n", encoding="utf-8")
        return self.narration_file

    def cleanup(self) -> bool:
        """Remove temp/. Returns True when something was deleted."""
        if not self.temp_dir.exists():
            return False
        shutil.rmtree(self.temp_dir)
        logger.info("Temporary files removed", extra={"temp_dir": str(self.temp_dir)})
        return True


__all__ = ["ProjectWorkspace", "sanitize_project_name", "MAX_NAME_LENGTH"]
