"""Factory and lifecycle holder for LLM agent instances."""

from collections.abc import Callable

from git_reporter.core.config import Settings
from git_reporter.core.logging import get_logger
from git_reporter.summarization.domain.errors import AdapterError
from git_reporter.summarization.repositories.implementations import (
    LangChainClaudeAgent,
    LangChainOpenAIAgent,
)
from git_reporter.summarization.repositories.interfaces import LLMAgentRepository

logger = get_logger(__name__)


def create_llm_agent(settings: Settings) -> LLMAgentRepository:
    """
    Create an LLM agent instance based on configuration.

    Args:
        settings: Provider choice, credentials and model parameters

    Returns:
        LLM agent instance (OpenAI or Claude)

    Raises:
        AdapterError: If the provider is unknown or its API key is missing
    """
    provider = settings.llm_provider.lower()

    if provider == "openai" or provider == "gpt":
        return LangChainOpenAIAgent(
            api_key=settings.openai_api_key,
            model_name=settings.openai_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )
    elif provider == "anthropic" or provider == "claude":
        return LangChainClaudeAgent(
            api_key=settings.anthropic_api_key,
            model_name=settings.anthropic_model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )
    else:
        raise AdapterError(
            f"Invalid LLM_PROVIDER: {provider}. "
            "Supported values: 'openai', 'gpt', 'anthropic', 'claude'"
        )


class LLMAgentProvider:
    """Lazily builds one agent and keeps it until reset."""

    def __init__(
        self,
        settings: Settings,
        factory: Callable[[Settings], LLMAgentRepository] = create_llm_agent,
    ) -> None:
        """
        Initialize LLMAgentProvider.

        Args:
            settings: Settings passed to the factory
            factory: Callable building an agent from settings
        """
        self._settings = settings
        self._factory = factory
        self._agent: LLMAgentRepository | None = None

    def get(self) -> LLMAgentRepository:
        """
        Return the cached agent, building it on first use.

        Raises:
            AdapterError: If the agent cannot be built
        """
        if self._agent is None:
            logger.debug("llm_agent_created", provider=self._settings.llm_provider)
            self._agent = self._factory(self._settings)
        return self._agent

    def reset(self, settings: Settings | None = None) -> None:
        """
        Drop the cached agent, for example after a configuration change.

        Args:
            settings: Replacement settings for the next agent
        """
        if settings is not None:
            self._settings = settings
        self._agent = None
