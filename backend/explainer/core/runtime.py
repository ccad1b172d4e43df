"""
Runtime environment guards and dependency checks.
"""

import shutil
from typing import Dict, Iterable, List, Optional


REQUIRED_RENDER_TOOLS = ("ffmpeg", "ffprobe", "manim")


def parse_bool_env(value: Optional[str], default: bool = False) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def missing_runtime_tools(tools: Iterable[str]) -> List[str]:
    return [tool for tool in tools if shutil.which(tool) is None]


def runtime_tool_report(tools: Iterable[str] = REQUIRED_RENDER_TOOLS) -> Dict[str, bool]:
    """Map each external tool to whether it is on PATH."""
    return {tool: shutil.which(tool) is not None for tool in tools}
