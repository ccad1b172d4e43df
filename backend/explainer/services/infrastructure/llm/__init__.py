"""LLM infrastructure - Gemini client and prompt templates."""

from .client import LLMClient, PromptConfig
from .prompts import PromptTemplate

__all__ = ["LLMClient", "PromptConfig", "PromptTemplate"]
