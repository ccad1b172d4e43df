"""
Code Parsing Utilities

Extracts code blocks and scene names from LLM responses. Handles only
code-string manipulation.
"""

import re
from typing import List, Optional

SCENE_CLASS_PATTERN = re.compile(
    r"^\s*class\s+(\w+)\s*\(\s*(?:\w+\.)?(\w*Scene)\s*[,)]",
    re.MULTILINE,
)


def extract_markdown_code_blocks(text: str, language: str = "python") -> List[str]:
    """Extract fenced code blocks from markdown text.

    Blocks tagged with `language` win; untagged blocks are the fallback.
    """
    pattern = rf"```{language}[ \t]*\n(.*?)```"
    matches = re.findall(pattern, text, re.DOTALL | re.IGNORECASE)
    if matches:
        return matches

    return re.findall(r"```[ \t]*\n(.*?)```", text, re.DOTALL)


def remove_markdown_wrappers(text: str) -> str:
    """Remove a markdown fence wrapping the whole text."""
    text = text.strip()
    if text.startswith("```"):
        lines = text.split("\n")
        if lines[0].strip().startswith("```"):
            lines.pop(0)
        if lines and lines[-1].strip().startswith("```"):
            lines.pop()
        text = "\n".join(lines)

    return text.strip()


def extract_python_code(response: str) -> str:
    """Pull the Python source out of a model response.

    Takes the longest fenced block if the model wrapped its answer in markdown,
    otherwise treats the whole response as code.
    """
    blocks = extract_markdown_code_blocks(response, "python")
    if blocks:
        return max(blocks, key=len).strip()
    return remove_markdown_wrappers(response)


def extract_scene_name(code: str) -> Optional[str]:
    """Return the first class deriving from a Manim Scene type."""
    match = SCENE_CLASS_PATTERN.search(code)
    if match:
        return match.group(1)
    return None


def scene_file_name(scene_class: str) -> str:
    """File name for a scene class: `WaveInterference` -> `waveinterference.py`"""
    return re.sub(r"[^a-z0-9]", "_", scene_class.lower()) + ".py"
