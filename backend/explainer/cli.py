"""
Command line entry point.

    python -m explainer "Why is the sky blue?" -q medium
    python -m explainer --interactive
    python -m explainer --serve --port 8000
"""

import argparse
import asyncio
import sys
from typing import List, Optional, Tuple

from .core import get_logger, setup_logging_from_env, InvalidInput
from .models import JobStatus, JobSubmission
from .services.infrastructure.orchestration import JobQueue
from .services.pipeline.animation.config import DEFAULT_QUALITY, MAX_GENERATION_ATTEMPTS, QUALITY_LEVELS
from .services.pipeline.orchestrator import PipelineOrchestrator, RunOptions

logger = get_logger(__name__, component="cli")

QUALITY_CHOICES = {"1": "low", "2": "medium", "3": "high"}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="explainer",
        description="Generate an animated explainer video from a topic.",
    )
    parser.add_argument("topic", nargs="?", help="Video description/topic (required if not interactive)")
    parser.add_argument("-q", "--quality", choices=QUALITY_LEVELS, default=DEFAULT_QUALITY,
                        help="Render quality (default: %(default)s)")
    parser.add_argument("-o", "--output", dest="output_dir", help="Output directory")
    parser.add_argument("-s", "--skip-cleanup", action="store_true", help="Keep temporary files")
    parser.add_argument("-i", "--interactive", action="store_true", help="Interactive mode with prompts")
    parser.add_argument("-v", "--voice", dest="voice_id", help="Edge TTS voice id")
    parser.add_argument("--post-run", help="Shell command to run after the video is produced")
    parser.add_argument("--max-attempts", type=int, default=MAX_GENERATION_ATTEMPTS,
                        help="Code generation attempts (default: %(default)s)")
    parser.add_argument("--serve", action="store_true", help="Start the HTTP API instead")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=8000)
    return parser


def interactive_prompt() -> Optional[Tuple[str, str]]:
    """Ask for topic and quality; returns None when the user declines."""
    topic = input("Enter video topic/description: ").strip()
    if not topic:
        raise InvalidInput("No prompt provided")

    print("\nQuality options:")
    print("  1. Low (480p, fast)")
    print("  2. Medium (720p)")
    print("  3. High (1080p, slow)")
    quality = QUALITY_CHOICES.get(input("\nSelect quality (1-3) [1]: ").strip() or "1", DEFAULT_QUALITY)

    print(f"\nPrompt: {topic}")
    print(f"Quality: {quality}")
    if input("Proceed? (y/n) [y]: ").strip().lower() in ("n", "no"):
        return None
    return topic, quality


async def run_once(submission: JobSubmission, max_attempts: int) -> int:
    """Run a single job through the queue and report the outcome."""
    orchestrator = PipelineOrchestrator.create_default(max_attempts=max_attempts)

    async def runner(job_input: JobSubmission):
        return await orchestrator.run(job_input.topic, job_input.quality, RunOptions.from_submission(job_input))

    queue = JobQueue(runner)
    job_id = queue.submit(submission)
    await queue.drain()

    job = queue.get_status(job_id)
    if job.status == JobStatus.COMPLETED:
        print(f"\nVideo ready: {job.result['final_path']}")
        print(f"Duration: {job.result['duration_seconds']:.1f}s, attempts: {job.result['attempts']}")
        post_run = job.result.get("post_run")
        if post_run and post_run.get("returncode") != 0:
            print(f"Post-run hook failed: {post_run.get('stderr') or post_run.get('returncode')}")
        return 0

    print(f"\n{job.error_type}: {job.error}", file=sys.stderr)
    return 1


def serve(host: str, port: int) -> None:
    import uvicorn

    uvicorn.run("explainer.main:app", host=host, port=port)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.serve:
        serve(args.host, args.port)
        return 0

    setup_logging_from_env()

    if args.max_attempts < 1:
        parser.error("--max-attempts must be at least 1")

    topic, quality = args.topic, args.quality
    if args.interactive:
        try:
            answer = interactive_prompt()
        except InvalidInput as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1
        if answer is None:
            print("Cancelled.")
            return 0
        topic, quality = answer

    if not topic:
        parser.print_help()
        print("\nError: No prompt provided. Use --interactive or provide a prompt argument.", file=sys.stderr)
        return 1

    submission = JobSubmission(
        topic=topic,
        quality=quality,
        output_dir=args.output_dir,
        skip_cleanup=args.skip_cleanup,
        voice_id=args.voice_id,
        post_run=args.post_run,
    )
    try:
        return asyncio.run(run_once(submission, args.max_attempts))
    except InvalidInput as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
