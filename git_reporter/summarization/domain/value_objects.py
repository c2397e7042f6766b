"""Value objects for Summarization domain."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkReportInput:
    """Input data for an AI-written work report.

    Attributes:
        digest: Commits grouped by day, one line per commit
        commit_count: Number of commits in the digest
    """

    digest: str
    commit_count: int
