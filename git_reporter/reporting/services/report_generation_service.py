"""End-to-end work report generation."""

from collections.abc import Callable, Sequence
from datetime import datetime
from pathlib import Path

from git_reporter.core.logging import get_logger
from git_reporter.git.domain.entities import Commit
from git_reporter.git.domain.value_objects import DateRange
from git_reporter.git.services.branch_annotation_service import BranchAnnotationService
from git_reporter.git.services.commit_retrieval_service import CommitRetrievalService
from git_reporter.notifications.services.notification_service import NotificationService
from git_reporter.reporting.domain.value_objects import NO_COMMITS_MESSAGE, ReportMode
from git_reporter.reporting.services.report_service import ReportService
from git_reporter.summarization.domain.errors import AdapterError
from git_reporter.summarization.services.ai_report_service import AIReportService

logger = get_logger(__name__)

IN_PROGRESS_MESSAGE = "A report is already being generated, please wait."


class ReportGenerationService:
    """Runs retrieval, enrichment and rendering for one report at a time."""

    def __init__(
        self,
        retrieval_service: CommitRetrievalService,
        report_service: ReportService,
        notification_service: NotificationService,
        branch_annotation_service: BranchAnnotationService | None = None,
        ai_report_service: AIReportService | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """
        Initialize ReportGenerationService.

        Args:
            retrieval_service: Service fetching the commits of a period
            report_service: Service rendering local Markdown reports
            notification_service: Service for user-visible notices
            branch_annotation_service: Optional service attributing commits to branches
            ai_report_service: Optional service writing reports with a language model
            clock: Returns the current local time for the report header
        """
        self._retrieval_service = retrieval_service
        self._report_service = report_service
        self._notification_service = notification_service
        self._branch_annotation_service = branch_annotation_service
        self._ai_report_service = ai_report_service
        self._clock = clock
        self._is_generating = False

    @property
    def is_generating(self) -> bool:
        return self._is_generating

    def generate(
        self,
        date_range: DateRange,
        mode: ReportMode = ReportMode.STRUCTURED,
        author: str | None = None,
        annotate_branches: bool = False,
    ) -> str | None:
        """
        Produce a Markdown report for a date range.

        Only one generation runs at a time; a request made while another is in
        flight is refused with a notice.

        Args:
            date_range: Period to report on
            mode: Rendering mode
            author: Optional author filter
            annotate_branches: Resolve the branch of each commit before rendering

        Returns:
            The Markdown report, or None when another generation is running
        """
        if self._is_generating:
            logger.info("report_generation_rejected")
            self._notification_service.warning(IN_PROGRESS_MESSAGE)
            return None

        self._is_generating = True
        try:
            commits = self.collect_commits(date_range, author, annotate_branches)
            return self.render(commits, mode)
        finally:
            self._is_generating = False

    def collect_commits(
        self,
        date_range: DateRange,
        author: str | None = None,
        annotate_branches: bool = False,
    ) -> tuple[Commit, ...]:
        """
        Fetch the commits of a date range, optionally with branch names.

        Args:
            date_range: Period to report on
            author: Optional author filter
            annotate_branches: Resolve the branch of each commit

        Returns:
            Tuple of commits
        """
        commits = self._retrieval_service.get_commits(date_range, author=author)
        if annotate_branches and commits and self._branch_annotation_service is not None:
            commits = self._branch_annotation_service.annotate(commits)
        return commits

    def render(self, commits: Sequence[Commit], mode: ReportMode = ReportMode.STRUCTURED) -> str:
        """
        Render already-fetched commits.

        Args:
            commits: Commits to report on
            mode: Rendering mode

        Returns:
            The Markdown report
        """
        if not commits:
            return NO_COMMITS_MESSAGE

        mode = ReportMode(mode)
        logger.info("rendering_report", mode=mode.value, commits=len(commits))
        if mode == ReportMode.AI:
            return self._render_with_ai(commits)
        if mode == ReportMode.STRUCTURED:
            return self._report_service.render_structured(commits, generated_at=self._clock())
        return self._report_service.render_plain(commits)

    def compose_fallback(self, commits: Sequence[Commit], error: Exception) -> str:
        """
        Build the local report shown when the language model fails.

        Args:
            commits: Commits to report on
            error: The failure, quoted in the report

        Returns:
            Error notice, structured report and raw commit list
        """
        structured = self._report_service.render_structured(
            commits, generated_at=self._clock()
        )
        commit_lines = self._report_service.render_commit_lines(commits)
        return (
            f"> AI report generation failed with error: {error}\n\n"
            f"{structured}\n"
            f"## Commit Summary\n\n"
            f"{commit_lines}\n"
        )

    @staticmethod
    def save_report(report: str, output_file: Path) -> Path:
        """
        Write a report to a Markdown file.

        Args:
            report: Markdown content
            output_file: Destination; parent directories are created

        Returns:
            The path written to
        """
        output_file.parent.mkdir(parents=True, exist_ok=True)
        with output_file.open("w", encoding="utf-8") as f:
            f.write(report)
            if not report.endswith("\n"):
                f.write("\n")
        logger.info("report_saved", path=str(output_file))
        return output_file

    def _render_with_ai(self, commits: Sequence[Commit]) -> str:
        try:
            if self._ai_report_service is None:
                raise AdapterError("AI reports are not configured")
            return self._ai_report_service.render(commits)
        except AdapterError as e:
            logger.warning("ai_report_failed", error=str(e))
            self._notification_service.error(f"Failed to generate report: {e}")
            return self.compose_fallback(commits, e)
