"""Commit retrieval with fallback query strategies."""

from collections.abc import Iterable
from pathlib import Path

from git_reporter.core.logging import get_logger
from git_reporter.git.domain.entities import Commit
from git_reporter.git.domain.errors import AccessError
from git_reporter.git.domain.value_objects import DateRange, LogQueryOptions
from git_reporter.git.repositories.interfaces import GitRepository
from git_reporter.git.services.log_normalizer import LogNormalizer
from git_reporter.notifications.services.notification_service import NotificationService

logger = get_logger(__name__)


class CommitRetrievalService:
    """Service for fetching the commits of a reporting period."""

    def __init__(
        self,
        git_repository: GitRepository,
        repo_path: Path,
        notification_service: NotificationService,
        normalizer: LogNormalizer | None = None,
        all_branches: bool = True,
        broad_limit: int = 100,
        recent_limit: int = 50,
    ) -> None:
        """
        Initialize CommitRetrievalService.

        Args:
            git_repository: Repository implementation for Git operations
            repo_path: Path to the git repository
            notification_service: Service for user-visible notices
            normalizer: Converts raw records to commits. Defaults to LogNormalizer()
            all_branches: Whether date-bounded queries search every branch
            broad_limit: Number of recent commits scanned by the fallback query
            recent_limit: Number of commits returned by the relaxed query
        """
        self._git_repository = git_repository
        self._repo_path = repo_path
        self._notification_service = notification_service
        self._normalizer = normalizer or LogNormalizer()
        self._all_branches = all_branches
        self._broad_limit = broad_limit
        self._recent_limit = recent_limit

    def get_commits(self, date_range: DateRange, author: str | None = None) -> tuple[Commit, ...]:
        """
        Get the commits authored within a date range.

        A range whose two ends are the same instant is treated as a request for
        recent work and answered with the relaxed query. When a date-bounded
        query finds nothing, the most recent commits are fetched without a
        date filter and filtered here by calendar day.

        Never raises: failures are reported as notices and yield an empty tuple.

        Args:
            date_range: Period to report on
            author: Optional author filter

        Returns:
            Tuple of commits, most recent first
        """
        if not self._git_repository.is_repository(self._repo_path):
            self._notification_service.info(
                f"No Git repository found in workspace: {self._repo_path}"
            )
            return ()

        if date_range.is_same_instant:
            logger.info("relaxed_query_used", instant=date_range.start.isoformat())
            return self.get_recent_commits(author=author)

        tight_options = LogQueryOptions(
            after=date_range.start,
            before=date_range.end,
            author=author,
            all_branches=self._all_branches,
        )
        logger.info(
            "fetching_commits",
            start=date_range.start.isoformat(),
            end=date_range.end.isoformat(),
            author=author,
        )

        tight_error: AccessError | None = None
        try:
            commits = self._query(tight_options)
        except AccessError as e:
            logger.warning("date_filtered_query_failed", error=str(e))
            tight_error = e
            commits = ()

        if commits:
            return commits

        logger.info("broad_query_fallback", limit=self._broad_limit)
        broad_options = LogQueryOptions(
            max_count=self._broad_limit,
            author=author,
            all_branches=True,
        )
        try:
            recent = self._query(broad_options)
        except AccessError as e:
            logger.error("broad_query_failed", error=str(e))
            self._notification_service.error(f"Failed to get commits: {tight_error or e}")
            return ()

        filtered = self.filter_by_day(recent, date_range)
        logger.info("client_side_filter", scanned=len(recent), kept=len(filtered))
        if filtered:
            self._notification_service.info(
                f"Git's date filter found no commits; showing {len(filtered)} commit(s) "
                f"found among the {len(recent)} most recent."
            )
        elif tight_error is not None:
            self._notification_service.error(f"Failed to get commits: {tight_error}")
        return filtered

    def get_recent_commits(
        self, limit: int | None = None, author: str | None = None
    ) -> tuple[Commit, ...]:
        """
        Get the most recent commits across all branches, regardless of date.

        Args:
            limit: Maximum number of commits. Defaults to the configured recent limit
            author: Optional author filter

        Returns:
            Tuple of commits, most recent first, empty on failure
        """
        if not self._git_repository.is_repository(self._repo_path):
            self._notification_service.info(
                f"No Git repository found in workspace: {self._repo_path}"
            )
            return ()

        options = LogQueryOptions(
            max_count=limit if limit is not None else self._recent_limit,
            author=author,
            all_branches=True,
        )
        try:
            return self._query(options)
        except AccessError as e:
            logger.error("recent_commits_query_failed", error=str(e))
            self._notification_service.error(f"Failed to get commits: {e}")
            return ()

    @staticmethod
    def filter_by_day(commits: Iterable[Commit], date_range: DateRange) -> tuple[Commit, ...]:
        """
        Keep commits whose calendar day falls within the range's days.

        Any time of day on the first or last day counts.

        Args:
            commits: Commits to filter
            date_range: Range whose days bound the result

        Returns:
            Matching commits in input order
        """
        first_day = date_range.start.date()
        last_day = date_range.end.date()
        return tuple(c for c in commits if first_day <= c.date.date() <= last_day)

    def _query(self, options: LogQueryOptions) -> tuple[Commit, ...]:
        records = self._git_repository.query_log(self._repo_path, options)
        commits = self._normalizer.normalize(records)
        logger.debug("commits_found", count=len(commits), options=repr(options))
        return commits
