"""Planning - topic to Plan."""

from .planner import GeminiPlanner

__all__ = ["GeminiPlanner"]
