"""Storage layer - project workspace on disk."""

from .workspace import ProjectWorkspace, sanitize_project_name

__all__ = ["ProjectWorkspace", "sanitize_project_name"]
