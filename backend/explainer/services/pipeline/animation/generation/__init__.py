"""Scene generation - code generator, validators, renderer and the retry loop."""

from .code_generator import GeminiCodeGenerator
from .validation import (
    ValidationResult,
    SourceValidator,
    SceneDefinitionValidator,
    PythonSyntaxValidator,
    CompositeValidator,
)
from .renderer import ManimRenderer
from .retry_loop import RetryCorrectionLoop

__all__ = [
    "GeminiCodeGenerator",
    "ValidationResult",
    "SourceValidator",
    "SceneDefinitionValidator",
    "PythonSyntaxValidator",
    "CompositeValidator",
    "ManimRenderer",
    "RetryCorrectionLoop",
]
