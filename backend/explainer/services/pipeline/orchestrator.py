"""
Pipeline Orchestrator

Runs one topic through the stages, strictly in order:

1. Plan        topic -> Plan
2. Workspace   <output>/<title>_<timestamp>/ with plan.json
3. Narration   Plan -> NarrationSet (+ narration.txt)
4. Generation  Plan + NarrationSet -> CompiledArtifact (retry-correction loop)
5. Merge       NarrationSet + CompiledArtifact -> FinalArtifact
6. Post-run    optional shell hook

A stage failure is terminal for the run and surfaces as that stage's
classified error. temp/ is removed on both paths unless skip_cleanup is set.
"""

import dataclasses
from dataclasses import dataclass
from typing import Optional

from explainer.core import (
    get_logger,
    get_media_duration,
    set_stage,
    LogTimer,
    AdapterFault,
    InvalidInput,
    NarrationFailed,
    PipelineError,
    PlanningFailed,
)
from explainer.models import FinalArtifact, JobSubmission, NarrationSet, Plan
from explainer.services.infrastructure.storage import ProjectWorkspace

from .animation.config import DEFAULT_QUALITY, MAX_GENERATION_ATTEMPTS, QUALITY_LEVELS
from .animation.generation import (
    GeminiCodeGenerator,
    ManimRenderer,
    RetryCorrectionLoop,
    SourceValidator,
)
from .assembly import FFmpegMuxer, MergeStage
from .audio import EdgeTTSSynthesizer, NarrationStage
from .contracts import CodeGenerator, Muxer, Planner, SceneRenderer, SpeechSynthesizer
from .planning import GeminiPlanner
from .post_run import run_post_run_hook

logger = get_logger(__name__, component="pipeline")


@dataclass
class RunOptions:
    output_dir: Optional[str] = None
    skip_cleanup: bool = False
    voice_id: Optional[str] = None
    post_run: Optional[str] = None
    max_attempts: Optional[int] = None

    @classmethod
    def from_submission(cls, submission: JobSubmission) -> "RunOptions":
        return cls(
            output_dir=submission.output_dir,
            skip_cleanup=submission.skip_cleanup,
            voice_id=submission.voice_id,
            post_run=submission.post_run,
        )


def validate_plan(plan: Plan) -> Plan:
    """Reject unusable plans and return a copy with steps in ascending order."""
    if not plan.steps:
        raise PlanningFailed("Plan contains no steps")

    numbers = [step.step_number for step in plan.steps]
    duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
    if duplicates:
        raise PlanningFailed(f"Plan has duplicate step numbers: {duplicates}")

    blank = [step.step_number for step in plan.steps if not step.narration.strip()]
    if blank:
        raise PlanningFailed(f"Plan steps without narration: {blank}")

    return plan.model_copy(update={"steps": plan.ordered_steps()})


class PipelineOrchestrator:
    """
    Sequences the stages of one run.

    Usage:
        orchestrator = PipelineOrchestrator.create_default()
        artifact = await orchestrator.run("How do Fourier series work?", "low")
    """

    def __init__(
        self,
        planner: Planner,
        synthesizer: SpeechSynthesizer,
        generator: CodeGenerator,
        renderer: SceneRenderer,
        muxer: Muxer,
        validator: Optional[SourceValidator] = None,
        probe=get_media_duration,
        max_attempts: int = MAX_GENERATION_ATTEMPTS,
    ):
        self.planner = planner
        self.narration = NarrationStage(synthesizer, probe=probe)
        self.loop = RetryCorrectionLoop(generator, renderer, validator=validator, max_attempts=max_attempts)
        self.merge = MergeStage(muxer, probe=probe)

    @classmethod
    def create_default(cls, max_attempts: int = MAX_GENERATION_ATTEMPTS) -> "PipelineOrchestrator":
        return cls(
            planner=GeminiPlanner(),
            synthesizer=EdgeTTSSynthesizer(),
            generator=GeminiCodeGenerator(),
            renderer=ManimRenderer(),
            muxer=FFmpegMuxer(),
            max_attempts=max_attempts,
        )

    async def run(
        self,
        topic: str,
        quality: str = DEFAULT_QUALITY,
        options: Optional[RunOptions] = None,
    ) -> FinalArtifact:
        if quality not in QUALITY_LEVELS:
            raise InvalidInput(
                f"Invalid quality '{quality}', expected one of: {', '.join(QUALITY_LEVELS)}"
            )
        options = options or RunOptions()
        workspace: Optional[ProjectWorkspace] = None
        logger.info("Pipeline started", extra={"topic": topic[:200], "quality": quality})

        try:
            set_stage("plan")
            with LogTimer(logger, "plan"):
                plan = await self._plan(topic)

            set_stage("workspace")
            workspace = self._create_workspace(plan, options)

            set_stage("narration")
            with LogTimer(logger, "narration"):
                narration = await self.narration.run(plan, workspace, voice=options.voice_id)
                self._save_narration(workspace, narration)

            set_stage("generation")
            with LogTimer(logger, "generation"):
                compiled = await self.loop.generate_with_retry(
                    plan,
                    narration,
                    quality=quality,
                    work_dir=workspace.root,
                    max_attempts=options.max_attempts,
                )

            set_stage("merge")
            with LogTimer(logger, "merge"):
                artifact = await self.merge.run(plan, narration, compiled, workspace)

            if options.post_run:
                set_stage("post_run")
                outcome = await run_post_run_hook(
                    options.post_run, artifact.final_path, artifact.project_root
                )
                artifact = dataclasses.replace(artifact, post_run=outcome)

            logger.info(
                "Pipeline completed",
                extra={"final_path": artifact.final_path, "duration_seconds": artifact.duration_seconds},
            )
            return artifact
        finally:
            set_stage(None)
            if workspace is not None and not options.skip_cleanup:
                self._cleanup(workspace)

    async def _plan(self, topic: str) -> Plan:
        try:
            plan = await self.planner.plan(topic)
        except AdapterFault as e:
            raise PlanningFailed(f"Planning failed: {e}") from e
        return validate_plan(plan)

    @staticmethod
    def _create_workspace(plan: Plan, options: RunOptions) -> ProjectWorkspace:
        try:
            workspace = ProjectWorkspace(plan.title, output_dir=options.output_dir).create()
            workspace.save_plan(plan)
        except OSError as e:
            raise PipelineError(f"Could not create project workspace: {e}") from e
        return workspace

    @staticmethod
    def _save_narration(workspace: ProjectWorkspace, narration: NarrationSet) -> None:
        try:
            workspace.save_narration(narration)
        except OSError as e:
            raise NarrationFailed(f"Could not write narration script: {e}") from e

    @staticmethod
    def _cleanup(workspace: ProjectWorkspace) -> None:
        try:
            workspace.cleanup()
        except OSError as e:
            logger.error(
                "Failed to remove temporary files",
                extra={"temp_dir": str(workspace.temp_dir), "error": str(e)},
            )


async def run_job(submission: JobSubmission) -> FinalArtifact:
    """Default job-queue runner: a fresh orchestrator per job."""
    orchestrator = PipelineOrchestrator.create_default()
    return await orchestrator.run(
        submission.topic,
        submission.quality,
        RunOptions.from_submission(submission),
    )


__all__ = ["PipelineOrchestrator", "RunOptions", "validate_plan", "run_job"]
