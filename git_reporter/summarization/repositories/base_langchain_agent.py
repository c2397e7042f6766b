"""Base class for LangChain-based LLM agents."""

from abc import ABC
from pathlib import Path
from typing import TYPE_CHECKING

from langchain_core.messages import HumanMessage, SystemMessage

from git_reporter.core.logging import get_logger
from git_reporter.summarization.domain.errors import AdapterError
from git_reporter.summarization.domain.value_objects import WorkReportInput
from git_reporter.summarization.repositories.interfaces import LLMAgentRepository
from git_reporter.summarization.templates import DEFAULT_TEMPLATE_PATH

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a technical writing assistant that creates professional work "
    "reports from git commit history."
)


class BaseLangChainAgent(LLMAgentRepository, ABC):
    """Base class for LangChain-based work report agents."""

    def __init__(self, template_path: Path | None = None) -> None:
        """Initialize the base agent with common configuration.

        Args:
            template_path: Path to a custom prompt template file.
                          Defaults to the built-in template.
        """
        self._template_path = template_path or DEFAULT_TEMPLATE_PATH
        self._prompt_template = self._load_prompt_template()
        self._llm: BaseChatModel  # Set by subclasses

    def _load_prompt_template(self) -> str:
        """Load the prompt template from file.

        Returns:
            The content of the template file.

        Raises:
            AdapterError: If the template file cannot be read.
        """
        try:
            return self._template_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise AdapterError(
                f"Report prompt template not found: {self._template_path}"
            ) from None
        except OSError as e:
            raise AdapterError(
                f"Failed to read report prompt template: {self._template_path}: {e}"
            ) from e

    def generate_report(self, input_data: WorkReportInput) -> str:
        """
        Generate a Markdown work report from a commit digest.

        Args:
            input_data: Commit digest and its size

        Returns:
            Markdown-formatted report

        Raises:
            AdapterError: If the prompt template is invalid, the LLM API call
                          fails or it returns no content
        """
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=self.format_prompt(input_data)),
        ]

        try:
            response = self._llm.invoke(messages)
        except Exception as e:
            logger.error("llm_call_failed", error=str(e))
            raise AdapterError(f"Failed to generate work report: {str(e)}") from e

        report = self._extract_text(response.content).strip()
        if not report:
            raise AdapterError("No content received from the language model")
        return report

    def format_prompt(self, input_data: WorkReportInput) -> str:
        """
        Fill the prompt template with the commit digest.

        Raises:
            AdapterError: If the template has placeholders other than
                          {commit_count} and {commit_data}, or unbalanced braces
        """
        try:
            return self._prompt_template.format(
                commit_count=input_data.commit_count,
                commit_data=input_data.digest,
            )
        except (KeyError, IndexError, ValueError) as e:
            raise AdapterError(
                f"Invalid report prompt template {self._template_path}: {e!r}"
            ) from e

    @staticmethod
    def _extract_text(content: object) -> str:
        # Handle different response types
        if isinstance(content, str):
            return content
        if isinstance(content, list):
            # Content blocks: plain strings or {"type": "text", "text": ...} dicts
            parts: list[str] = []
            for item in content:
                if isinstance(item, str):
                    parts.append(item)
                elif isinstance(item, dict):
                    parts.append(str(item.get("text", "")))
            return " ".join(part for part in parts if part)
        return str(content)
