"""
Animation Pipeline Configuration

Centralized configuration for scene generation and rendering.
"""

from typing import Dict

# =============================================================================
# GENERATION SETTINGS
# =============================================================================

# Generate-then-render attempts before giving up
MAX_GENERATION_ATTEMPTS = 3

# Renderer output kept for the correction prompt (tail, characters)
MAX_DIAGNOSTIC_CHARS = 3000

# Leading characters of the last source included in the exhaustion error
SOURCE_PREVIEW_CHARS = 500

# Temperature for both initial and correction requests
GENERATION_TEMPERATURE = 0.7

# Output token budget for a full scene
GENERATION_MAX_OUTPUT_TOKENS = 32768

# =============================================================================
# RENDERING
# =============================================================================

# Manim render timeout (seconds)
RENDER_TIMEOUT = 300  # 5 minutes

QUALITY_FLAGS: Dict[str, str] = {
    "low": "-ql",
    "medium": "-qm",
    "high": "-qh",
}

QUALITY_LEVELS = tuple(QUALITY_FLAGS)

DEFAULT_QUALITY = "low"


def quality_flag(quality: str) -> str:
    """Manim CLI flag for a quality selector."""
    try:
        return QUALITY_FLAGS[quality]
    except KeyError:
        raise ValueError(
            f"Unknown quality '{quality}', expected one of: {', '.join(QUALITY_LEVELS)}"
        ) from None
