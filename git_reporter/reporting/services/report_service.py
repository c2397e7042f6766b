"""Markdown report synthesis."""

import re
from collections.abc import Iterable, Sequence
from datetime import datetime

from git_reporter.classification.services.classification_service import (
    ClassificationService,
    clean_message,
)
from git_reporter.core.date_format import DEFAULT_DATE_FORMAT, format_date
from git_reporter.git.domain.entities import Commit
from git_reporter.reporting.domain.value_objects import (
    NO_COMMITS_MESSAGE,
    CommitBucket,
    ReportMode,
)

FOCUS_AREA_LIMIT = 5
GENERATED_ON_FORMAT = "YYYY-MM-DD HH:mm:ss"

_TASK_PREFIX = re.compile(r"^([\w\-]+):")


def bucket_by_day(commits: Iterable[Commit], date_format: str = DEFAULT_DATE_FORMAT) -> CommitBucket:
    """
    Group commits by their formatted authoring day.

    Args:
        commits: Commits to group
        date_format: Format used to build the day-key

    Returns:
        Mapping of day-key to commits, keys in first-seen order
    """
    bucket: CommitBucket = {}
    for commit in commits:
        bucket.setdefault(format_date(commit.date, date_format), []).append(commit)
    return bucket


def sorted_day_keys(bucket: CommitBucket, descending: bool = False) -> list[str]:
    """Day-keys of a bucket in ascending (or descending) key order."""
    return sorted(bucket, reverse=descending)


def chronological(commits: Iterable[Commit]) -> list[Commit]:
    """Commits sorted oldest first."""
    return sorted(commits, key=lambda commit: commit.date)


class ReportService:
    """Service for rendering commits into Markdown work reports."""

    def __init__(
        self,
        classification_service: ClassificationService | None = None,
        date_format: str = DEFAULT_DATE_FORMAT,
    ) -> None:
        """
        Initialize ReportService.

        Args:
            classification_service: Service used to categorize commits.
                                    Defaults to ClassificationService()
            date_format: Format for day-keys and date spans
        """
        self._classification_service = classification_service or ClassificationService()
        self._date_format = date_format

    def render(
        self,
        commits: Sequence[Commit],
        mode: ReportMode = ReportMode.STRUCTURED,
        generated_at: datetime | None = None,
    ) -> str:
        """
        Render commits as a Markdown report.

        Args:
            commits: Commits to report on, in any order
            mode: PLAIN or STRUCTURED; AI reports are produced by the generation service
            generated_at: When given, the structured report states its generation time

        Returns:
            Markdown document, or a single sentence when there are no commits

        Raises:
            ValueError: If mode is AI
        """
        match ReportMode(mode):
            case ReportMode.PLAIN:
                return self.render_plain(commits)
            case ReportMode.STRUCTURED:
                return self.render_structured(commits, generated_at=generated_at)
            case _:
                raise ValueError("AI reports are rendered by ReportGenerationService")

    def render_plain(self, commits: Sequence[Commit]) -> str:
        """
        Render the day-grouped commit list with a short summary.

        Days keep the order in which they first appear in the input.

        Args:
            commits: Commits to report on

        Returns:
            Markdown report
        """
        if not commits:
            return NO_COMMITS_MESSAGE

        lines = ["# Work Report", ""]
        for day, day_commits in bucket_by_day(commits, self._date_format).items():
            lines.append(f"## {day}")
            lines.append("")
            lines.extend(f"- {commit.message} ({commit.hash})" for commit in day_commits)
            lines.append("")

        lines.append("## Summary")
        lines.append("")
        lines.append(f"Total commits: {len(commits)}")
        lines.append(f"Time period: {self._time_period(commits)}")
        lines.append("")

        task_counts = self.count_task_prefixes(commits)
        if task_counts:
            lines.append("Work areas:")
            lines.extend(f"- {task}: {count} commits" for task, count in task_counts.items())
            lines.append("")

        return "\n".join(lines)

    def render_structured(
        self, commits: Sequence[Commit], generated_at: datetime | None = None
    ) -> str:
        """
        Render the layered report.

        Sections: Executive Summary, Daily Work Breakdown (days ascending,
        commits grouped by category), Work Metrics and Focus Areas.

        Args:
            commits: Commits to report on
            generated_at: Optional generation time stated under the title

        Returns:
            Markdown report
        """
        if not commits:
            return NO_COMMITS_MESSAGE

        bucket = bucket_by_day(commits, self._date_format)
        lines = ["# Work Report"]
        if generated_at is not None:
            lines.append(f"Generated on: {format_date(generated_at, GENERATED_ON_FORMAT)}")
        lines.append("")

        lines.extend(self._executive_summary(commits))
        lines.extend(self._daily_breakdown(bucket))
        lines.extend(self._work_metrics(commits, bucket))
        lines.extend(self._focus_areas(commits))

        return "\n".join(lines)

    def render_commit_list(self, commits: Sequence[Commit]) -> str:
        """
        Render the browsable commit list, most recent day first.

        Args:
            commits: Commits to list

        Returns:
            One heading per day followed by one line per commit
        """
        if not commits:
            return NO_COMMITS_MESSAGE

        bucket = bucket_by_day(commits, self._date_format)
        lines: list[str] = []
        for day in sorted_day_keys(bucket, descending=True):
            day_commits = bucket[day]
            lines.append(f"{day} ({len(day_commits)} commits)")
            for commit in day_commits:
                branch = f" [{commit.branch}]" if commit.branch else ""
                lines.append(
                    f"  {commit.hash}  {commit.date:%H:%M}  {commit.author}{branch}  "
                    f"{commit.message}"
                )
            lines.append("")
        return "\n".join(lines)

    @staticmethod
    def render_commit_lines(commits: Iterable[Commit]) -> str:
        """Raw "- message (hash)" lines, one per commit."""
        return "\n".join(f"- {commit.message} ({commit.hash})" for commit in commits)

    @staticmethod
    def count_task_prefixes(commits: Iterable[Commit]) -> dict[str, int]:
        """Count the leading "word:" token of each commit message."""
        counts: dict[str, int] = {}
        for commit in commits:
            match = _TASK_PREFIX.match(commit.message)
            if match:
                task = match.group(1)
                counts[task] = counts.get(task, 0) + 1
        return counts

    def _time_period(self, commits: Sequence[Commit]) -> str:
        ordered = chronological(commits)
        start = format_date(ordered[0].date, self._date_format)
        end = format_date(ordered[-1].date, self._date_format)
        return f"{start} to {end}"

    def _executive_summary(self, commits: Sequence[Commit]) -> list[str]:
        lines = ["## Executive Summary", ""]

        features = self._classification_service.identify_features(commits)
        if features:
            lines.append("### Key Features Implemented:")
            lines.extend(f"- {feature}" for feature in features)
            lines.append("")

        bug_fixes = self._classification_service.identify_bug_fixes(commits)
        if bug_fixes:
            lines.append("### Bug Fixes:")
            lines.extend(f"- {bug_fix}" for bug_fix in bug_fixes)
            lines.append("")

        return lines

    def _daily_breakdown(self, bucket: CommitBucket) -> list[str]:
        lines = ["## Daily Work Breakdown", ""]
        for day in sorted_day_keys(bucket):
            lines.append(f"### {day}")
            lines.append("")
            categories = self._classification_service.classify(bucket[day])
            for category, category_commits in categories.items():
                lines.append(f"**{category.label}:**")
                lines.extend(
                    f"- {clean_message(commit.message)} ({commit.hash})"
                    for commit in category_commits
                )
                lines.append("")
        return lines

    def _work_metrics(self, commits: Sequence[Commit], bucket: CommitBucket) -> list[str]:
        days_worked = len(bucket)
        commits_per_day = f"{len(commits) / days_worked:.1f}" if days_worked else "0"
        return [
            "## Work Metrics",
            "",
            f"- **Total commits:** {len(commits)}",
            f"- **Days worked:** {days_worked}",
            f"- **Commits per day:** {commits_per_day}",
            f"- **Time period:** {self._time_period(commits)}",
            "",
        ]

    def _focus_areas(self, commits: Sequence[Commit]) -> list[str]:
        top = self._classification_service.top_keywords(commits, FOCUS_AREA_LIMIT)
        if not top:
            return []
        lines = ["## Focus Areas", ""]
        lines.extend(f"- **{keyword}:** {count} occurrences" for keyword, count in top)
        lines.append("")
        return lines
