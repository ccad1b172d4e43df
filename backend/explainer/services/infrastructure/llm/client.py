"""
Gemini client - works with both the Gemini API and Vertex AI

The blocking SDK call runs in a worker thread so the event loop (and the job
queue's submission path) stays responsive. Every failure is classified:

    asyncio timeout          -> AdapterTimeout
    SDK / network error      -> AdapterFault
    empty response text      -> AdapterFault
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Optional

from explainer.config import (
    USE_VERTEX_AI,
    GEMINI_API_KEY,
    GCP_PROJECT_ID,
    GCP_LOCATION,
    LLM_TIMEOUT_SECONDS,
)
from explainer.core import get_logger, AdapterFault, AdapterTimeout

logger = get_logger(__name__, component="llm_client")


@dataclass
class PromptConfig:
    """Configuration for a single prompt execution"""
    model_name: str
    temperature: float = 1.0
    max_output_tokens: Optional[int] = None
    timeout: Optional[float] = LLM_TIMEOUT_SECONDS
    system_instruction: Optional[str] = None
    response_schema: Optional[Any] = None  # pydantic model -> JSON response


class LLMClient:
    """
    Thin async wrapper over `google.genai.Client`.

    Environment Variables:
        USE_VERTEX_AI: Set to 'true' to use Vertex AI instead of the Gemini API
        GEMINI_API_KEY: API key for the Gemini API (when USE_VERTEX_AI=false)
        GCP_PROJECT_ID: GCP project ID (when USE_VERTEX_AI=true)
        GCP_LOCATION: GCP region (default: us-central1)

    The SDK client is created on first use so constructing adapters never
    requires credentials.
    """

    def __init__(self, backend: Optional[Any] = None):
        self._backend = backend

    def _build_backend(self) -> Any:
        from google import genai

        if USE_VERTEX_AI:
            if not GCP_PROJECT_ID:
                raise AdapterFault("GCP_PROJECT_ID environment variable is required when USE_VERTEX_AI=true")
            return genai.Client(vertexai=True, project=GCP_PROJECT_ID, location=GCP_LOCATION)

        if not GEMINI_API_KEY:
            raise AdapterFault("GEMINI_API_KEY environment variable is required when USE_VERTEX_AI=false")
        return genai.Client(api_key=GEMINI_API_KEY)

    @property
    def backend(self) -> Any:
        if self._backend is None:
            self._backend = self._build_backend()
        return self._backend

    @staticmethod
    def _generation_config(config: PromptConfig) -> Any:
        from google.genai import types

        kwargs: dict = {"temperature": config.temperature}
        if config.max_output_tokens is not None:
            kwargs["max_output_tokens"] = config.max_output_tokens
        if config.system_instruction:
            kwargs["system_instruction"] = config.system_instruction
        if config.response_schema is not None:
            kwargs["response_mime_type"] = "application/json"
            kwargs["response_schema"] = config.response_schema
        return types.GenerateContentConfig(**kwargs)

    async def generate(self, prompt: str, config: PromptConfig) -> str:
        """Send one prompt and return the response text."""
        call = asyncio.to_thread(
            self.backend.models.generate_content,
            model=config.model_name,
            contents=prompt,
            config=self._generation_config(config),
        )
        try:
            if config.timeout:
                response = await asyncio.wait_for(call, timeout=config.timeout)
            else:
                response = await call
        except asyncio.TimeoutError as e:
            raise AdapterTimeout(
                f"{config.model_name} did not respond within {config.timeout:.0f}s"
            ) from e
        except AdapterFault:
            raise
        except Exception as e:
            logger.error(
                "LLM request failed",
                extra={"model": config.model_name, "error": str(e)},
            )
            raise AdapterFault(f"{config.model_name} request failed: {e}") from e

        text = getattr(response, "text", None)
        if not text or not text.strip():
            raise AdapterFault(f"{config.model_name} returned an empty response")

        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            logger.debug(
                "LLM usage",
                extra={
                    "model": config.model_name,
                    "input_tokens": getattr(usage, "prompt_token_count", None),
                    "output_tokens": getattr(usage, "candidates_token_count", None),
                },
            )
        return text
