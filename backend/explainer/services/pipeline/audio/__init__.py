"""Audio generation - text-to-speech and the narration stage."""

from .tts_engine import EdgeTTSSynthesizer
from .narration import NarrationStage

__all__ = ["EdgeTTSSynthesizer", "NarrationStage"]
