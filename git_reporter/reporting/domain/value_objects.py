"""Value objects for the reporting domain."""

from enum import Enum

from git_reporter.git.domain.entities import Commit

NO_COMMITS_MESSAGE = "No commits found in the selected time period."

# Day-key (formatted with the configured date format) -> commits of that day
CommitBucket = dict[str, list[Commit]]


class ReportMode(str, Enum):
    """How a report is rendered."""

    PLAIN = "plain"
    STRUCTURED = "structured"
    AI = "ai"
