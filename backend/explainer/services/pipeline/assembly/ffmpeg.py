"""
Audio and video utilities for ffmpeg operations
"""

import asyncio
import shutil
import subprocess
from pathlib import Path
from typing import List

from explainer.core import get_logger, AdapterFault, AdapterTimeout
from explainer.services.pipeline.contracts import Muxer

logger = get_logger(__name__, component="ffmpeg")

FFMPEG_TIMEOUT = 300


def _concat_entry(path: str) -> str:
    # concat demuxer quoting: ' -> '\''
    escaped = str(Path(path).resolve()).replace("'", "'\\''")
    return f"file '{escaped}'\n"


def build_concat_cmd(list_path: str, output_path: str) -> List[str]:
    return [
        "ffmpeg", "-y",
        "-f", "concat",
        "-safe", "0",
        "-i", list_path,
        "-c", "copy",
        output_path
    ]


def build_merge_cmd(video_path: str, audio_path: str, output_path: str, duration: float) -> List[str]:
    """Mux video + audio, trimmed to `duration`; the video stream is copied."""
    return [
        "ffmpeg", "-y",
        "-i", video_path,
        "-i", audio_path,
        "-map", "0:v:0",
        "-map", "1:a:0",
        "-c:v", "copy",
        "-c:a", "aac",
        "-t", f"{duration:.3f}",
        "-shortest",
        output_path
    ]


async def run_ffmpeg(cmd: List[str], timeout: float = FFMPEG_TIMEOUT) -> None:
    try:
        result = await asyncio.to_thread(
            subprocess.run, cmd, capture_output=True, text=True, timeout=timeout
        )
    except subprocess.TimeoutExpired as e:
        raise AdapterTimeout(f"ffmpeg timed out after {timeout}s") from e
    except OSError as e:
        raise AdapterFault(f"ffmpeg could not be started: {e}") from e

    if result.returncode != 0:
        raise AdapterFault(f"ffmpeg failed (exit {result.returncode}): {result.stderr.strip()[-500:]}")


class FFmpegMuxer(Muxer):
    """Muxer adapter backed by the ffmpeg CLI"""

    def __init__(self, timeout: float = FFMPEG_TIMEOUT):
        self.timeout = timeout

    async def concat_audio(self, audio_paths: List[str], output_path: str) -> str:
        """Concatenate audio files in order using the concat demuxer"""
        if not audio_paths:
            raise AdapterFault("No audio files to concatenate")

        if len(audio_paths) == 1:
            await asyncio.to_thread(shutil.copy, audio_paths[0], output_path)
            return output_path

        concat_list_path = Path(output_path).parent / "concat_audio_list.txt"
        concat_list_path.write_text("".join(_concat_entry(p) for p in audio_paths), encoding="utf-8")
        try:
            await run_ffmpeg(build_concat_cmd(str(concat_list_path), output_path), self.timeout)
        finally:
            if concat_list_path.exists():
                concat_list_path.unlink()

        if not Path(output_path).exists():
            raise AdapterFault(f"ffmpeg reported success but {output_path} was not written")
        logger.debug("Audio concatenated", extra={"files": len(audio_paths), "output": output_path})
        return output_path

    async def mux(self, video_path: str, audio_path: str, output_path: str, duration: float) -> str:
        await run_ffmpeg(build_merge_cmd(video_path, audio_path, output_path, duration), self.timeout)
        if not Path(output_path).exists():
            raise AdapterFault(f"ffmpeg reported success but {output_path} was not written")
        return output_path
