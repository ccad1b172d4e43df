"""
TTS Engine - Text-to-Speech using Edge TTS (free, high quality)
"""

from typing import Optional

import edge_tts

from explainer.config import DEFAULT_VOICE, TTS_RATE
from explainer.core import get_logger, AdapterFault
from explainer.services.pipeline.contracts import SpeechSynthesizer

logger = get_logger(__name__, component="tts_engine")


class EdgeTTSSynthesizer(SpeechSynthesizer):
    """Speech adapter backed by Microsoft Edge TTS"""

    DEFAULT_VOICE = DEFAULT_VOICE

    def __init__(self, rate: str = TTS_RATE, pitch: str = "+0Hz"):
        self.rate = rate
        self.pitch = pitch

    async def synthesize(self, text: str, voice: Optional[str] = None) -> bytes:
        """
        Synthesize text to speech.
        Returns the encoded mp3 bytes; empty audio is a fault.
        """
        if not voice:
            voice = self.DEFAULT_VOICE

        audio = bytearray()
        try:
            communicate = edge_tts.Communicate(text, voice, rate=self.rate, pitch=self.pitch)
            async for chunk in communicate.stream():
                if chunk["type"] == "audio":
                    audio.extend(chunk["data"])
        except Exception as e:
            raise AdapterFault(f"Edge TTS synthesis failed for voice '{voice}': {e}") from e

        if not audio:
            raise AdapterFault(f"Edge TTS returned no audio for voice '{voice}'")

        logger.debug("Synthesized narration", extra={"voice": voice, "bytes": len(audio)})
        return bytes(audio)
