"""
Model and provider configuration for the external collaborators.

Every value can be overridden from the environment (or a .env file):

    PLANNER_MODEL        Gemini model that writes the video plan
    CODEGEN_MODEL        Gemini model that writes the Manim scene
    LLM_TIMEOUT_SECONDS  Per-request timeout for model calls
    USE_VERTEX_AI        "true" to route requests through Vertex AI
    GEMINI_API_KEY       API key when USE_VERTEX_AI is false
    GCP_PROJECT_ID       Project when USE_VERTEX_AI is true
    GCP_LOCATION         Region when USE_VERTEX_AI is true (us-central1)
    TTS_VOICE            Default Edge TTS voice
    TTS_RATE             Edge TTS speaking rate adjustment
"""

import os


def _env_float(name: str, default: float, minimum: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return max(float(raw), minimum)
    except (TypeError, ValueError):
        return default


# LLM models
PLANNER_MODEL = os.getenv("PLANNER_MODEL", "gemini-2.5-flash")
CODEGEN_MODEL = os.getenv("CODEGEN_MODEL", "gemini-2.5-flash")
LLM_TIMEOUT_SECONDS = _env_float("LLM_TIMEOUT_SECONDS", 180.0, 1.0)

# Backend selection
USE_VERTEX_AI = os.getenv("USE_VERTEX_AI", "false").lower() == "true"
GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GCP_PROJECT_ID = os.getenv("GCP_PROJECT_ID")
GCP_LOCATION = os.getenv("GCP_LOCATION", "us-central1")

# Speech
DEFAULT_VOICE = os.getenv("TTS_VOICE", "en-US-GuyNeural")
TTS_RATE = os.getenv("TTS_RATE", "+0%")

__all__ = [
    "PLANNER_MODEL",
    "CODEGEN_MODEL",
    "LLM_TIMEOUT_SECONDS",
    "USE_VERTEX_AI",
    "GEMINI_API_KEY",
    "GCP_PROJECT_ID",
    "GCP_LOCATION",
    "DEFAULT_VOICE",
    "TTS_RATE",
]
