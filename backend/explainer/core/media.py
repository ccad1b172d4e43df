"""
Media utilities - duration probing via ffprobe
"""

import asyncio
import subprocess

from .exceptions import AdapterFault, AdapterTimeout

PROBE_TIMEOUT = 30


async def get_media_duration(file_path: str) -> float:
    """Get duration of a media file in seconds using ffprobe.

    Raises:
        AdapterTimeout: ffprobe did not finish within PROBE_TIMEOUT
        AdapterFault: ffprobe failed or printed something that is not a number
    """
    cmd = [
        "ffprobe", "-v", "error",
        "-show_entries", "format=duration",
        "-of", "default=noprint_wrappers=1:nokey=1",
        file_path
    ]
    try:
        result = await asyncio.to_thread(
            subprocess.run,
            cmd,
            capture_output=True,
            text=True,
            timeout=PROBE_TIMEOUT
        )
    except subprocess.TimeoutExpired as e:
        raise AdapterTimeout(f"ffprobe timed out after {PROBE_TIMEOUT}s for {file_path}") from e
    except OSError as e:
        raise AdapterFault(f"ffprobe could not be started: {e}") from e

    if result.returncode != 0:
        raise AdapterFault(f"ffprobe failed for {file_path}: {result.stderr.strip()[-500:]}")

    try:
        return float(result.stdout.strip())
    except ValueError as e:
        raise AdapterFault(f"ffprobe returned no duration for {file_path}: {result.stdout!r}") from e
