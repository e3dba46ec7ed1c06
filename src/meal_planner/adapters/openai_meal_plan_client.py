"""OpenAI Responses API client for meal plan generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI, OpenAIError

from meal_planner.domain.errors import BackendInvocationError
from meal_planner.services.generation import MealPlanBackend

PLACEHOLDER_API_KEYS = frozenset(
    {"", "your-openai-api-key-here", "your-api-key-here", "changeme"}
)


def backend_available(api_key: str | None) -> bool:
    """Return true when an API key is configured and not a placeholder."""
    return api_key is not None and api_key.strip() not in PLACEHOLDER_API_KEYS


@dataclass
class OpenAIMealPlanClient(MealPlanBackend):
    """Meal plan backend backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
    ) -> "OpenAIMealPlanClient":
        """Create an OpenAI meal plan client."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def invoke(self, prompt: str) -> str:
        """Send the prompt and return the raw text output."""
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": prompt,
            "store": self.store,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        try:
            response = await self.client.responses.create(**request_payload)
        except OpenAIError as exc:
            raise BackendInvocationError(f"OpenAI request failed: {exc}") from exc
        output_text = response.output_text
        if not output_text:
            raise BackendInvocationError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
