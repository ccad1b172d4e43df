"""
Structural preconditions checked before a generated program is rendered.

A failed check costs an attempt but never a render. Validators are pluggable:
the retry loop only calls `validate(source)`.
"""

import ast
from dataclasses import dataclass
from typing import Iterable, Optional

from explainer.services.infrastructure.parsing import extract_scene_name

MISSING_SCENE_DEFINITION = "missing scene definition"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a structural check"""
    ok: bool
    reason: Optional[str] = None

    @classmethod
    def passed(cls) -> "ValidationResult":
        return cls(ok=True)

    @classmethod
    def rejected(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)


class SourceValidator:
    """Base class for precondition checks"""

    def validate(self, source: str) -> ValidationResult:
        raise NotImplementedError


class SceneDefinitionValidator(SourceValidator):
    """Requires a class deriving from Scene (or a Scene subclass)"""

    def validate(self, source: str) -> ValidationResult:
        if not source or extract_scene_name(source) is None:
            return ValidationResult.rejected(MISSING_SCENE_DEFINITION)
        return ValidationResult.passed()


class PythonSyntaxValidator(SourceValidator):
    """Validates Python code syntax using AST parsing"""

    def validate(self, source: str) -> ValidationResult:
        if not source or not source.strip():
            return ValidationResult.rejected("Code is empty")

        try:
            ast.parse(source)
        except SyntaxError as e:
            return ValidationResult.rejected(f"Syntax error at line {e.lineno}: {e.msg}")
        except ValueError as e:
            return ValidationResult.rejected(f"Validation error: {e}")
        return ValidationResult.passed()


class CompositeValidator(SourceValidator):
    """Runs validators in order and reports the first rejection"""

    def __init__(self, validators: Iterable[SourceValidator]):
        self.validators = list(validators)

    def validate(self, source: str) -> ValidationResult:
        for validator in self.validators:
            result = validator.validate(source)
            if not result.ok:
                return result
        return ValidationResult.passed()


__all__ = [
    "MISSING_SCENE_DEFINITION",
    "ValidationResult",
    "SourceValidator",
    "SceneDefinitionValidator",
    "PythonSyntaxValidator",
    "CompositeValidator",
]
