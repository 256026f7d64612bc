"""Per-file review model client using Pydantic AI and OpenAI."""

import logging

from pydantic_ai import Agent
from pydantic_ai.models import Model
from pydantic_ai.models.openai import OpenAIResponsesModel
from pydantic_ai.providers.openai import OpenAIProvider
from pydantic_ai.settings import ModelSettings

logger = logging.getLogger(__name__)


def build_openai_model(
    model_name: str, api_key: str, base_url: str | None = None
) -> OpenAIResponsesModel:
    """Create the OpenAI model used for reviews.

    Args:
        model_name: OpenAI model identifier
        api_key: OpenAI API key
        base_url: Optional alternative API base URL

    Returns:
        Configured Pydantic AI model
    """
    provider = OpenAIProvider(api_key=api_key, base_url=base_url)
    return OpenAIResponsesModel(model_name, provider=provider)


class AgentModelClient:
    """Runs a plain-text Pydantic AI agent for each file under review.

    One agent is kept per distinct system prompt; in practice a run uses a
    single prompt, so a single agent.
    """

    def __init__(
        self, model: Model | str, model_settings: ModelSettings | None = None
    ) -> None:
        self.model = model
        self.model_settings = model_settings
        self._agents: dict[str, Agent[None, str]] = {}

    def _get_agent(self, system_prompt: str) -> Agent[None, str]:
        if system_prompt not in self._agents:
            self._agents[system_prompt] = Agent(
                model=self.model,
                output_type=str,
                system_prompt=system_prompt,
                model_settings=self.model_settings,
            )
        return self._agents[system_prompt]

    async def complete(self, system_prompt: str, user_prompt: str) -> str | None:
        """Return the model's review text, or None if it produced nothing."""
        result = await self._get_agent(system_prompt).run(user_prompt)
        output = result.output
        if not output or not output.strip():
            logger.debug("Model returned an empty review")
            return None
        return output
