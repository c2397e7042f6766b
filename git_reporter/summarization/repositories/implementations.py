"""Concrete implementations of LLM report generation using LangChain."""

from pathlib import Path

from langchain_anthropic import ChatAnthropic
from langchain_openai import ChatOpenAI

from git_reporter.summarization.domain.errors import AdapterError
from git_reporter.summarization.repositories.base_langchain_agent import (
    BaseLangChainAgent,
)


class LangChainOpenAIAgent(BaseLangChainAgent):
    """LangChain implementation using OpenAI for work reports."""

    def __init__(
        self,
        api_key: str | None,
        model_name: str = "gpt-3.5-turbo",
        temperature: float = 0.7,
        max_tokens: int = 2000,
        template_path: Path | None = None,
    ) -> None:
        """
        Initialize the OpenAI agent.

        Args:
            api_key: OpenAI API key
            model_name: Chat model name
            temperature: Sampling temperature
            max_tokens: Maximum length of the generated report
            template_path: Optional custom prompt template

        Raises:
            AdapterError: If the API key is missing
        """
        if not api_key:
            raise AdapterError(
                "OPENAI_API_KEY is required for AI reports. "
                "Please set it in a .env file or as an environment variable."
            )

        self._llm = ChatOpenAI(  # type: ignore[call-arg]
            api_key=api_key,
            model=model_name,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        super().__init__(template_path=template_path)


class LangChainClaudeAgent(BaseLangChainAgent):
    """LangChain implementation using Claude for work reports."""

    def __init__(
        self,
        api_key: str | None,
        model_name: str = "claude-3-5-sonnet-20241022",
        temperature: float = 0.7,
        max_tokens: int = 2000,
        template_path: Path | None = None,
    ) -> None:
        """
        Initialize the Claude agent.

        Args:
            api_key: Anthropic API key
            model_name: Chat model name
            temperature: Sampling temperature
            max_tokens: Maximum length of the generated report
            template_path: Optional custom prompt template

        Raises:
            AdapterError: If the API key is missing
        """
        if not api_key:
            raise AdapterError(
                "ANTHROPIC_API_KEY is required for AI reports. "
                "Please set it in a .env file or as an environment variable."
            )

        self._llm = ChatAnthropic(  # type: ignore[call-arg]
            api_key=api_key,
            model_name=model_name,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        super().__init__(template_path=template_path)
