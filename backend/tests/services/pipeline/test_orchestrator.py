from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from explainer.core import (
    AdapterFault,
    GenerationExhausted,
    InvalidInput,
    MergeFailed,
    NarrationFailed,
    PlanningFailed,
)
from explainer.models import JobSubmission, Plan, SceneStep
from explainer.services.pipeline.contracts import RenderOutcome
from explainer.services.pipeline.orchestrator import (
    PipelineOrchestrator,
    RunOptions,
    validate_plan,
)


class Harness:
    """Fake adapters recording the order in which stages touch them"""

    def __init__(self, plan: Plan, scene_source: str):
        self.calls = []
        self.planner = AsyncMock()
        self.planner.plan.side_effect = self._plan
        self.plan = plan
        self.synthesizer = AsyncMock()
        self.synthesizer.synthesize.side_effect = self._synthesize
        self.generator = AsyncMock()
        self.generator.generate.side_effect = self._generate
        self.scene_source = scene_source
        self.renderer = AsyncMock()
        self.renderer.render.side_effect = self._render
        self.muxer = AsyncMock()
        self.muxer.concat_audio.side_effect = self._concat
        self.muxer.mux.side_effect = self._mux
        self.probe = AsyncMock(side_effect=self._probe)

    async def _plan(self, topic):
        self.calls.append("plan")
        return self.plan

    async def _synthesize(self, text, voice):
        self.calls.append("synthesize")
        return b"mp3"

    async def _generate(self, request):
        self.calls.append("generate")
        return self.scene_source

    async def _render(self, source, quality, work_dir):
        self.calls.append("render")
        video = Path(work_dir) / "temp" / "media" / "videos" / "s" / "480p15" / "PythagorasProof.mp4"
        video.parent.mkdir(parents=True, exist_ok=True)
        video.write_bytes(b"video")
        return RenderOutcome.ok(str(video), "PythagorasProof", "pythagorasproof.py")

    async def _concat(self, paths, output_path):
        self.calls.append("concat")
        Path(output_path).write_bytes(b"audio")
        return output_path

    async def _mux(self, video_path, audio_path, output_path, duration):
        self.calls.append("mux")
        Path(output_path).write_bytes(b"final")
        return output_path

    async def _probe(self, path):
        return 12.0 if path.endswith("narration_full.mp3") else 15.0 if path.endswith(".mp4") else 4.0

    def orchestrator(self, **kwargs) -> PipelineOrchestrator:
        return PipelineOrchestrator(
            planner=self.planner,
            synthesizer=self.synthesizer,
            generator=self.generator,
            renderer=self.renderer,
            muxer=self.muxer,
            probe=self.probe,
            **kwargs,
        )


@pytest.fixture
def harness(sample_plan, scene_source):
    return Harness(sample_plan, scene_source)


def _project_root(output_dir: Path) -> Path:
    roots = list(output_dir.iterdir())
    assert len(roots) == 1
    return roots[0]


@pytest.mark.asyncio
async def test_stages_run_in_sequence_and_produce_final_artifact(harness, tmp_path):
    output_dir = tmp_path / "out"

    artifact = await harness.orchestrator().run("Pythagoras", "low", RunOptions(output_dir=str(output_dir)))

    assert harness.calls == ["plan", "synthesize", "synthesize", "synthesize", "generate", "render", "concat", "mux"]
    assert artifact.duration_seconds == 12.0
    assert artifact.title == "The Pythagorean Theorem!"
    assert artifact.attempts == 1
    assert artifact.post_run is None
    root = _project_root(output_dir)
    assert root.name.startswith("the_pythagorean_theorem__")
    assert artifact.final_path == str(root / "final" / f"{root.name}.mp4")
    assert (root / "plan.json").exists()
    assert (root / "narration.txt").read_text(encoding="utf-8").startswith("Step 1 (4s):")
    assert (root / "video" / "video.mp4").exists()
    assert not (root / "temp").exists()


@pytest.mark.asyncio
async def test_skip_cleanup_keeps_temp(harness, tmp_path):
    await harness.orchestrator().run("x", "low", RunOptions(output_dir=str(tmp_path), skip_cleanup=True))

    assert (_project_root(tmp_path) / "temp" / "media").exists()


@pytest.mark.asyncio
async def test_planner_fault_is_planning_failed(harness, tmp_path):
    harness.planner.plan.side_effect = AdapterFault("model overloaded")

    with pytest.raises(PlanningFailed) as exc_info:
        await harness.orchestrator().run("x", "low", RunOptions(output_dir=str(tmp_path)))

    assert isinstance(exc_info.value.__cause__, AdapterFault)
    harness.synthesizer.synthesize.assert_not_awaited()
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_narration_failure_stops_before_generation(harness, tmp_path):
    harness.synthesizer.synthesize.side_effect = AdapterFault("tts down")

    with pytest.raises(NarrationFailed):
        await harness.orchestrator().run("x", "low", RunOptions(output_dir=str(tmp_path)))

    harness.generator.generate.assert_not_awaited()
    assert not (_project_root(tmp_path) / "temp").exists()


@pytest.mark.asyncio
async def test_unknown_quality_rejected_before_planning(harness, tmp_path):
    with pytest.raises(InvalidInput):
        await harness.orchestrator().run("x", "ultra", RunOptions(output_dir=str(tmp_path)))

    harness.planner.plan.assert_not_awaited()
    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
async def test_narration_script_write_error_is_narration_failed(harness, tmp_path):
    with patch(
        "explainer.services.pipeline.orchestrator.ProjectWorkspace.save_narration",
        side_effect=PermissionError("read-only file system"),
    ):
        with pytest.raises(NarrationFailed) as exc_info:
            await harness.orchestrator().run("x", "low", RunOptions(output_dir=str(tmp_path)))

    assert isinstance(exc_info.value.__cause__, PermissionError)
    harness.generator.generate.assert_not_awaited()

@pytest.mark.asyncio
async def test_exhausted_generation_stops_before_merge_and_cleans_up(harness, tmp_path):
    harness.renderer.render.side_effect = None
    harness.renderer.render.return_value = RenderOutcome.failed("SyntaxError")

    with pytest.raises(GenerationExhausted):
        await harness.orchestrator(max_attempts=2).run("x", "low", RunOptions(output_dir=str(tmp_path)))

    assert harness.generator.generate.await_count == 2
    harness.muxer.concat_audio.assert_not_awaited()
    assert not (_project_root(tmp_path) / "temp").exists()


@pytest.mark.asyncio
async def test_run_options_max_attempts_override(harness, tmp_path):
    harness.renderer.render.side_effect = None
    harness.renderer.render.return_value = RenderOutcome.failed("boom")

    with pytest.raises(GenerationExhausted) as exc_info:
        await harness.orchestrator().run("x", "low", RunOptions(output_dir=str(tmp_path), max_attempts=1))

    assert exc_info.value.attempts == 1


@pytest.mark.asyncio
async def test_merge_fault_is_merge_failed(harness, tmp_path):
    harness.muxer.mux.side_effect = AdapterFault("ffmpeg failed")

    with pytest.raises(MergeFailed):
        await harness.orchestrator().run("x", "low", RunOptions(output_dir=str(tmp_path)))


@pytest.mark.asyncio
async def test_post_run_outcome_recorded(harness, tmp_path):
    outcome = {"command": "notify", "returncode": 1, "stdout": "", "stderr": "nope"}

    with patch("explainer.services.pipeline.orchestrator.run_post_run_hook",
               new_callable=AsyncMock, return_value=outcome) as hook:
        artifact = await harness.orchestrator().run(
            "x", "low", RunOptions(output_dir=str(tmp_path), post_run="notify")
        )

    assert artifact.post_run == outcome
    hook.assert_awaited_once_with("notify", artifact.final_path, artifact.project_root)


def _step(n, narration="text"):
    return SceneStep(step_number=n, description="d", visual_elements="v", narration=narration)


def _plan(steps):
    return Plan(title="t", educational_goal="g", visual_style="s", narrative_arc="a", steps=steps)


def test_validate_plan_sorts_steps():
    plan = validate_plan(_plan([_step(3), _step(1), _step(2)]))
    assert [s.step_number for s in plan.steps] == [1, 2, 3]


@pytest.mark.parametrize("steps,match", [
    ([], "no steps"),
    ([_step(1), _step(1)], "duplicate"),
    ([_step(1), _step(2, narration="  ")], "without narration"),
])
def test_validate_plan_rejects_unusable_plans(steps, match):
    with pytest.raises(PlanningFailed, match=match):
        validate_plan(_plan(steps))


def test_run_options_from_submission():
    submission = JobSubmission(topic="t", output_dir="/o", skip_cleanup=True, voice_id="v", post_run="p")

    options = RunOptions.from_submission(submission)

    assert options == RunOptions(output_dir="/o", skip_cleanup=True, voice_id="v", post_run="p")
