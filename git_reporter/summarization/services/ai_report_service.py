"""Service for AI-written work reports."""

from collections.abc import Sequence

from git_reporter.core.date_format import DEFAULT_DATE_FORMAT
from git_reporter.core.logging import get_logger
from git_reporter.git.domain.entities import Commit
from git_reporter.reporting.services.report_service import bucket_by_day, sorted_day_keys
from git_reporter.summarization.domain.value_objects import WorkReportInput
from git_reporter.summarization.repositories.factory import LLMAgentProvider

logger = get_logger(__name__)


def format_commit_digest(
    commits: Sequence[Commit], date_format: str = DEFAULT_DATE_FORMAT
) -> str:
    """
    Format commits as the plain-text digest handed to the model.

    Args:
        commits: Commits to include
        date_format: Format of the day headings

    Returns:
        Days in ascending order, each followed by
        '- "<message>" by <author> (<hash>)' lines
    """
    bucket = bucket_by_day(commits, date_format)
    lines: list[str] = []
    for day in sorted_day_keys(bucket):
        lines.append(f"## {day}")
        lines.append("")
        lines.extend(
            f'- "{commit.message}" by {commit.author} ({commit.hash})'
            for commit in bucket[day]
        )
        lines.append("")
    return "\n".join(lines)


class AIReportService:
    """Service for rendering a report with a language model."""

    def __init__(
        self, agent_provider: LLMAgentProvider, date_format: str = DEFAULT_DATE_FORMAT
    ) -> None:
        """
        Initialize AIReportService.

        Args:
            agent_provider: Holder of the lazily-built LLM agent
            date_format: Format of the digest's day headings
        """
        self._agent_provider = agent_provider
        self._date_format = date_format

    def render(self, commits: Sequence[Commit]) -> str:
        """
        Generate a Markdown report with the language model.

        Args:
            commits: Commits to report on

        Returns:
            Model-written Markdown

        Raises:
            AdapterError: If the agent cannot be built or the model call fails
        """
        input_data = WorkReportInput(
            digest=format_commit_digest(commits, self._date_format),
            commit_count=len(commits),
        )
        agent = self._agent_provider.get()
        logger.info("ai_report_requested", commits=len(commits))
        return agent.generate_report(input_data)
