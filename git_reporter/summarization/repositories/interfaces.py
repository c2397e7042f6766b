"""Repository interfaces for LLM report generation."""

from abc import ABC, abstractmethod

from git_reporter.summarization.domain.value_objects import WorkReportInput


class LLMAgentRepository(ABC):
    """Interface for LLM-based work report writing."""

    @abstractmethod
    def generate_report(self, input_data: WorkReportInput) -> str:
        """
        Generate a Markdown work report from a commit digest.

        Args:
            input_data: Commit digest and its size

        Returns:
            Markdown-formatted report

        Raises:
            AdapterError: If the model call fails or returns nothing
        """
        ...
