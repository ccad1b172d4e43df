"""
Parsing Module

Utilities for pulling code out of LLM responses.
"""

from .code_parser import (
    extract_markdown_code_blocks,
    remove_markdown_wrappers,
    extract_python_code,
    extract_scene_name,
    scene_file_name,
)

__all__ = [
    "extract_markdown_code_blocks",
    "remove_markdown_wrappers",
    "extract_python_code",
    "extract_scene_name",
    "scene_file_name",
]
