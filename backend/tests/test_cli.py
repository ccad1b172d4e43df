from unittest.mock import AsyncMock, patch

import pytest

from explainer.cli import build_parser, interactive_prompt, main
from explainer.core import GenerationExhausted
from explainer.models import FinalArtifact


def _artifact():
    return FinalArtifact(final_path="/out/final/x.mp4", project_root="/out", layout={},
                         duration_seconds=12.0, title="X", scene_class="XScene", attempts=2)


def test_parser_defaults():
    args = build_parser().parse_args(["Why is the sky blue?"])

    assert args.topic == "Why is the sky blue?"
    assert args.quality == "low"
    assert args.max_attempts == 3
    assert not args.skip_cleanup
    assert not args.serve


def test_parser_options():
    args = build_parser().parse_args(["-q", "high", "-o", "/tmp/out", "-s", "-v", "en-GB-RyanNeural", "topic"])

    assert (args.quality, args.output_dir, args.skip_cleanup, args.voice_id) == (
        "high", "/tmp/out", True, "en-GB-RyanNeural")


def test_no_topic_prints_help_and_fails(capsys):
    assert main([]) == 1
    captured = capsys.readouterr()
    assert "usage:" in captured.out
    assert "No prompt provided" in captured.err


def test_successful_run(capsys):
    orchestrator = AsyncMock()
    orchestrator.run.return_value = _artifact()

    with patch("explainer.cli.PipelineOrchestrator.create_default", return_value=orchestrator) as factory:
        code = main(["Pythagoras", "-q", "medium", "--max-attempts", "5"])

    assert code == 0
    factory.assert_called_once_with(max_attempts=5)
    topic, quality, options = orchestrator.run.await_args.args
    assert (topic, quality) == ("Pythagoras", "medium")
    assert "Video ready: /out/final/x.mp4" in capsys.readouterr().out


def test_pipeline_failure_exits_1(capsys):
    orchestrator = AsyncMock()
    orchestrator.run.side_effect = GenerationExhausted(3, "NameError", "class X(Scene)")

    with patch("explainer.cli.PipelineOrchestrator.create_default", return_value=orchestrator):
        code = main(["Pythagoras"])

    assert code == 1
    err = capsys.readouterr().err
    assert "GenerationExhausted" in err
    assert "Code compilation failed after 3 attempts" in err


def test_blank_topic_is_rejected(capsys):
    with patch("explainer.cli.PipelineOrchestrator.create_default", return_value=AsyncMock()):
        assert main(["   "]) == 1
    assert "Error:" in capsys.readouterr().err


def test_invalid_max_attempts():
    with pytest.raises(SystemExit):
        main(["topic", "--max-attempts", "0"])


def test_interactive_prompt():
    with patch("builtins.input", side_effect=["Entropy", "3", "y"]):
        assert interactive_prompt() == ("Entropy", "high")

    with patch("builtins.input", side_effect=["Entropy", "", "n"]):
        assert interactive_prompt() is None


def test_interactive_mode_runs_pipeline():
    orchestrator = AsyncMock()
    orchestrator.run.return_value = _artifact()

    with patch("builtins.input", side_effect=["Entropy", "2", ""]), \
         patch("explainer.cli.PipelineOrchestrator.create_default", return_value=orchestrator):
        assert main(["--interactive"]) == 0

    assert orchestrator.run.await_args.args[:2] == ("Entropy", "medium")


def test_serve_starts_uvicorn():
    with patch("explainer.cli.serve") as serve:
        assert main(["--serve", "--port", "9000"]) == 0
    serve.assert_called_once_with("0.0.0.0", 9000)
