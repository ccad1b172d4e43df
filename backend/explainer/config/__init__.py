"""
Application configuration and settings
"""

# Load environment variables from .env file
from dotenv import load_dotenv
load_dotenv()

from .paths import APP_DIR, BACKEND_DIR, OUTPUT_DIR
from .constants import API_TITLE, API_DESCRIPTION, API_VERSION, CORS_ORIGINS
from .models import (
    PLANNER_MODEL,
    CODEGEN_MODEL,
    LLM_TIMEOUT_SECONDS,
    USE_VERTEX_AI,
    GEMINI_API_KEY,
    GCP_PROJECT_ID,
    GCP_LOCATION,
    DEFAULT_VOICE,
    TTS_RATE,
)

__all__ = [
    "APP_DIR",
    "BACKEND_DIR",
    "OUTPUT_DIR",
    "API_TITLE",
    "API_DESCRIPTION",
    "API_VERSION",
    "CORS_ORIGINS",
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
