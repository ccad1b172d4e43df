"""
Code generator - Gemini writes the complete Manim program for a plan.
"""

from typing import Optional

from explainer.config import CODEGEN_MODEL, LLM_TIMEOUT_SECONDS
from explainer.core import get_logger
from explainer.services.infrastructure.llm import LLMClient, PromptConfig
from explainer.services.infrastructure.parsing import extract_python_code
from explainer.services.pipeline.contracts import CodeGenerator, CodeGenerationRequest

from ..config import GENERATION_TEMPERATURE, GENERATION_MAX_OUTPUT_TOKENS
from .prompts import build_system_prompt, build_user_prompt

logger = get_logger(__name__, component="code_generator")


class GeminiCodeGenerator(CodeGenerator):
    """Single-shot generator; the retry loop owns attempts and feedback."""

    def __init__(self, client: Optional[LLMClient] = None, model: str = CODEGEN_MODEL):
        self.client = client or LLMClient()
        self.model = model

    async def generate(self, request: CodeGenerationRequest) -> str:
        config = PromptConfig(
            model_name=self.model,
            temperature=GENERATION_TEMPERATURE,
            max_output_tokens=GENERATION_MAX_OUTPUT_TOKENS,
            timeout=LLM_TIMEOUT_SECONDS,
            system_instruction=build_system_prompt(request.plan, request.timing),
        )
        prompt = build_user_prompt(request.previous_source, request.previous_diagnostic)

        logger.info(
            "Requesting scene code",
            extra={"model": self.model, "correction": request.is_correction},
        )
        response = await self.client.generate(prompt, config)
        return extract_python_code(response)
