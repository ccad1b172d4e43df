import subprocess
from unittest.mock import MagicMock, patch

import pytest

from explainer.services.pipeline.post_run import run_post_run_hook


@pytest.mark.asyncio
async def test_hook_receives_paths_in_environment(tmp_path):
    result = MagicMock(returncode=0, stdout="uploaded\n", stderr="")

    with patch("explainer.services.pipeline.post_run.subprocess.run", return_value=result) as mock_run:
        outcome = await run_post_run_hook("upload.sh", "/out/final/x.mp4", str(tmp_path))

    assert outcome == {"command": "upload.sh", "returncode": 0, "stdout": "uploaded\n", "stderr": ""}
    kwargs = mock_run.call_args.kwargs
    assert kwargs["shell"] is True
    assert kwargs["env"]["EXPLAINER_FINAL_VIDEO"] == "/out/final/x.mp4"
    assert kwargs["env"]["EXPLAINER_PROJECT_DIR"] == str(tmp_path)


@pytest.mark.asyncio
async def test_failing_hook_is_recorded_not_raised(tmp_path):
    result = MagicMock(returncode=2, stdout="", stderr="permission denied")

    with patch("explainer.services.pipeline.post_run.subprocess.run", return_value=result):
        outcome = await run_post_run_hook("exit 2", "/x.mp4", str(tmp_path))

    assert outcome["returncode"] == 2
    assert outcome["stderr"] == "permission denied"


@pytest.mark.asyncio
async def test_hook_timeout_recorded(tmp_path):
    with patch("explainer.services.pipeline.post_run.subprocess.run",
               side_effect=subprocess.TimeoutExpired(cmd="sleep", timeout=600)):
        outcome = await run_post_run_hook("sleep 9999", "/x.mp4", str(tmp_path))

    assert outcome["returncode"] is None
    assert "timed out" in outcome["stderr"]
