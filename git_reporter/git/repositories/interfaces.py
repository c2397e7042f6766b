"""Repository interfaces for Git operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from git_reporter.git.domain.value_objects import LogQueryOptions, RawLogRecord


class GitRepository(ABC):
    """Interface for Git repository operations."""

    @abstractmethod
    def is_repository(self, repo_path: Path) -> bool:
        """
        Check whether the given directory is a git repository.

        This is a filesystem probe only; no git process is spawned.

        Args:
            repo_path: Directory to check

        Returns:
            True if the directory holds git metadata
        """
        ...

    @abstractmethod
    def query_log(self, repo_path: Path, options: LogQueryOptions) -> tuple[RawLogRecord, ...]:
        """
        Run a git log query and return its raw records.

        Args:
            repo_path: Path to the git repository
            options: Date bounds, caps and filters for the query

        Returns:
            Raw records, most recent first

        Raises:
            AccessError: If git cannot be run, exits non-zero or its output is unreadable
        """
        ...

    @abstractmethod
    def list_branches(self, repo_path: Path) -> tuple[str, ...]:
        """
        List local branch names.

        Args:
            repo_path: Path to the git repository

        Returns:
            Branch names in git's listing order

        Raises:
            AccessError: If the branch listing fails
        """
        ...

    @abstractmethod
    def list_branch_history(
        self, repo_path: Path, branch: str, max_count: int
    ) -> tuple[str, ...]:
        """
        List the short hashes reachable from a branch.

        Args:
            repo_path: Path to the git repository
            branch: Branch to start the history from
            max_count: Maximum number of hashes to return

        Returns:
            Short commit hashes, most recent first

        Raises:
            AccessError: If the history query fails
        """
        ...

    @abstractmethod
    def list_branches_containing(self, repo_path: Path, commit_hash: str) -> tuple[str, ...]:
        """
        List local branches that contain a commit.

        Args:
            repo_path: Path to the git repository
            commit_hash: Hash of the commit

        Returns:
            Branch names, current branch marker stripped

        Raises:
            AccessError: If the containment query fails
        """
        ...
