"""
Planner - topic to structured Plan via Gemini structured output.
"""

from typing import Optional

from pydantic import ValidationError

from explainer.config import PLANNER_MODEL, LLM_TIMEOUT_SECONDS
from explainer.core import get_logger, AdapterFault
from explainer.models import Plan
from explainer.services.infrastructure.llm import LLMClient, PromptConfig
from explainer.services.infrastructure.parsing import remove_markdown_wrappers
from explainer.services.pipeline.contracts import Planner

from .prompts import PLANNER_SYSTEM, PLANNER_USER

logger = get_logger(__name__, component="planner")

PLANNING_TEMPERATURE = 0.8


class GeminiPlanner(Planner):
    """
    Requests a Plan as JSON using the Plan model as response schema.

    Usage:
        planner = GeminiPlanner()
        plan = await planner.plan("Why does e^(i*pi) = -1?")
    """

    def __init__(self, client: Optional[LLMClient] = None, model: str = PLANNER_MODEL):
        self.client = client or LLMClient()
        self.config = PromptConfig(
            model_name=model,
            temperature=PLANNING_TEMPERATURE,
            timeout=LLM_TIMEOUT_SECONDS,
            system_instruction=PLANNER_SYSTEM.template,
            response_schema=Plan,
        )

    async def plan(self, topic: str) -> Plan:
        logger.info("Planning video", extra={"topic": topic[:200], "model": self.config.model_name})
        response = await self.client.generate(PLANNER_USER.format(topic=topic), self.config)

        try:
            plan = Plan.model_validate_json(remove_markdown_wrappers(response))
        except ValidationError as e:
            raise AdapterFault(f"Planner returned an invalid plan: {e}") from e

        logger.info("Plan received", extra={"title": plan.title, "steps": len(plan.steps)})
        return plan
