"""
Prompt template helper.
"""

from dataclasses import dataclass


@dataclass
class PromptTemplate:
    """
    A prompt template with named placeholders.

    Usage:
        template = PromptTemplate(
            template="Create a plan for: {topic}",
            description="Planner user prompt"
        )
        result = template.format(topic="Fourier series")
    """
    template: str
    description: str = ""

    def format(self, **kwargs) -> str:
        """Fill placeholders; literal braces (JSON, code) are left untouched."""
        result = self.template
        for key, value in kwargs.items():
            result = result.replace("{" + key + "}", str(value))
        return result

    def __str__(self) -> str:
        return f"PromptTemplate({self.description})"
