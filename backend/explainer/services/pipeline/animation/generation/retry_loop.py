"""
Retry-Correction Loop

Generate -> validate -> render, at most `max_attempts` times. Every failed
attempt's diagnostic is fed to the next generation request together with the
source that produced it; nothing older than the previous attempt is sent.

    attempt 1:  plan + timing                      -> source_1 -> render fails (d_1)
    attempt 2:  plan + timing + source_1 + d_1     -> source_2 -> render ok
                                                               -> CompiledArtifact

A generator failure is a failed attempt too; the last generated source and
its diagnostic stay the correction basis for the next attempt.
"""

from pathlib import Path
from typing import Optional

from explainer.core import get_logger, AdapterFault, GenerationExhausted
from explainer.models import CompiledArtifact, GenerationAttempt, NarrationSet, Plan
from explainer.services.pipeline.contracts import (
    CodeGenerationRequest,
    CodeGenerator,
    SceneRenderer,
)

from ..config import MAX_DIAGNOSTIC_CHARS, MAX_GENERATION_ATTEMPTS, SOURCE_PREVIEW_CHARS
from .validation import SceneDefinitionValidator, SourceValidator

logger = get_logger(__name__, component="retry_loop")


def truncate_diagnostic(diagnostic: Optional[str], limit: int = MAX_DIAGNOSTIC_CHARS) -> str:
    """Keep the last `limit` characters; errors are at the end of tool output."""
    if not diagnostic:
        return "Unknown error"
    return diagnostic[-limit:]


def _check_max_attempts(max_attempts: int) -> int:
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
    return max_attempts


class RetryCorrectionLoop:
    """
    Bounded generate/validate/render loop with diagnostic feedback.

    Usage:
        loop = RetryCorrectionLoop(GeminiCodeGenerator(), ManimRenderer())
        artifact = await loop.generate_with_retry(plan, narration, quality="low", work_dir=root)
    """

    def __init__(
        self,
        generator: CodeGenerator,
        renderer: SceneRenderer,
        validator: Optional[SourceValidator] = None,
        max_attempts: int = MAX_GENERATION_ATTEMPTS,
    ):
        self.generator = generator
        self.renderer = renderer
        self.validator = validator or SceneDefinitionValidator()
        self.max_attempts = _check_max_attempts(max_attempts)

    async def generate_with_retry(
        self,
        plan: Plan,
        narration: NarrationSet,
        *,
        quality: str,
        work_dir: Path,
        max_attempts: Optional[int] = None,
    ) -> CompiledArtifact:
        limit = _check_max_attempts(self.max_attempts if max_attempts is None else max_attempts)
        timing = narration.timing()

        basis_source: Optional[str] = None
        basis_diagnostic: Optional[str] = None
        last_source: Optional[str] = None
        last_diagnostic: Optional[str] = None

        for index in range(1, limit + 1):
            logger.info(f"Generation attempt {index}/{limit}", extra={"attempt": index})
            attempt = await self._attempt(
                index,
                CodeGenerationRequest(
                    plan=plan,
                    timing=timing,
                    previous_source=basis_source,
                    previous_diagnostic=basis_diagnostic,
                ),
                quality=quality,
                work_dir=Path(work_dir),
            )

            if attempt.succeeded:
                logger.info(f"Attempt {index} succeeded", extra={"attempt": index})
                return attempt.artifact

            last_diagnostic = attempt.diagnostic
            logger.warning(
                f"Attempt {index} failed: {last_diagnostic[:100]}",
                extra={"attempt": index},
            )
            if attempt.source is not None:
                last_source = attempt.source
                basis_source = attempt.source
                basis_diagnostic = attempt.diagnostic

        raise GenerationExhausted(
            attempts=limit,
            last_diagnostic=last_diagnostic,
            source_preview=(last_source or "")[:SOURCE_PREVIEW_CHARS],
        )

    async def _attempt(
        self,
        index: int,
        request: CodeGenerationRequest,
        *,
        quality: str,
        work_dir: Path,
    ) -> GenerationAttempt:
        attempt = GenerationAttempt(index=index, previous_diagnostic=request.previous_diagnostic)

        try:
            attempt.source = await self.generator.generate(request)
        except AdapterFault as e:
            attempt.diagnostic = f"code generation failed: {e}"
            return attempt

        precondition = self.validator.validate(attempt.source)
        if not precondition.ok:
            attempt.diagnostic = precondition.reason
            return attempt

        try:
            outcome = await self.renderer.render(attempt.source, quality, work_dir)
        except AdapterFault as e:
            attempt.diagnostic = truncate_diagnostic(str(e))
            return attempt

        if not outcome.success:
            attempt.diagnostic = truncate_diagnostic(outcome.diagnostic)
            return attempt

        attempt.succeeded = True
        attempt.artifact = CompiledArtifact(
            video_path=outcome.video_path,
            scene_class=outcome.scene_class,
            scene_file=outcome.scene_file,
            attempts=index,
        )
        return attempt


__all__ = ["RetryCorrectionLoop", "truncate_diagnostic"]
