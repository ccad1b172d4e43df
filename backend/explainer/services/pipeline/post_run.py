"""
Post-run hook - optional shell command executed after a successful merge.

The final video already exists when the hook runs, so its outcome is recorded
but never fails the job.
"""

import asyncio
import os
import subprocess
from typing import Any, Dict

from explainer.core import get_logger

logger = get_logger(__name__, component="post_run")

POST_RUN_TIMEOUT = 600
OUTPUT_TAIL_CHARS = 2000


async def run_post_run_hook(command: str, final_video: str, project_dir: str) -> Dict[str, Any]:
    env = dict(os.environ)
    env["EXPLAINER_FINAL_VIDEO"] = final_video
    env["EXPLAINER_PROJECT_DIR"] = project_dir

    logger.info("Running post-run hook", extra={"command": command})
    try:
        result = await asyncio.to_thread(
            subprocess.run,
            command,
            shell=True,
            cwd=project_dir,
            env=env,
            capture_output=True,
            text=True,
            timeout=POST_RUN_TIMEOUT,
        )
    except subprocess.TimeoutExpired:
        logger.warning(f"Post-run hook timed out after {POST_RUN_TIMEOUT}s", extra={"command": command})
        return {"command": command, "returncode": None, "stdout": "", "stderr": f"timed out after {POST_RUN_TIMEOUT}s"}
    except OSError as e:
        logger.warning(f"Post-run hook could not be started: {e}", extra={"command": command})
        return {"command": command, "returncode": None, "stdout": "", "stderr": str(e)}

    outcome = {
        "command": command,
        "returncode": result.returncode,
        "stdout": (result.stdout or "")[-OUTPUT_TAIL_CHARS:],
        "stderr": (result.stderr or "")[-OUTPUT_TAIL_CHARS:],
    }
    if result.returncode != 0:
        logger.warning(
            "Post-run hook exited with an error",
            extra={"command": command, "returncode": result.returncode},
        )
    return outcome
