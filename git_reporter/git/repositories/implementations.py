"""Concrete implementation of Git repository operations."""

import subprocess
from datetime import datetime
from pathlib import Path

from git_reporter.core.logging import get_logger
from git_reporter.git.domain.errors import AccessError
from git_reporter.git.domain.value_objects import LogQueryOptions, RawLogRecord
from git_reporter.git.repositories.interfaces import GitRepository

logger = get_logger(__name__)

# Field and record separators that cannot appear in commit text typed by a user
FIELD_SEPARATOR = "\x1f"
RECORD_SEPARATOR = "\x1e"

LOG_FIELDS: tuple[str, ...] = ("hash", "author_name", "author_email", "date", "message", "body")
LOG_FORMAT = "%x1e" + "%x1f".join(("%h", "%an", "%ae", "%ad", "%s", "%b"))

GIT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class GitRepositoryImpl(GitRepository):
    """Concrete implementation of Git repository operations using git commands."""

    def __init__(self, git_executable: str = "git") -> None:
        """
        Initialize GitRepositoryImpl.

        Args:
            git_executable: Name or path of the git binary
        """
        self._git_executable = git_executable

    def is_repository(self, repo_path: Path) -> bool:
        git_dir = repo_path / ".git"
        # Worktrees and submodules use a .git file pointing elsewhere
        return git_dir.is_dir() or git_dir.is_file()

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
        args = self.build_log_args(options)
        output = self._run(repo_path, args)
        records = self.parse_log_output(output)
        logger.debug("git_log_parsed", args=args, records=len(records))
        return records

    def list_branches(self, repo_path: Path) -> tuple[str, ...]:
        output = self._run(repo_path, ["branch", "--format=%(refname:short)"])
        return tuple(
            name for name in (line.strip() for line in output.splitlines())
            if name and not self._is_detached_marker(name)
        )

    def list_branch_history(
        self, repo_path: Path, branch: str, max_count: int
    ) -> tuple[str, ...]:
        output = self._run(repo_path, ["log", branch, "-n", str(max_count), "--format=%h", "--"])
        return tuple(line.strip() for line in output.splitlines() if line.strip())

    def list_branches_containing(self, repo_path: Path, commit_hash: str) -> tuple[str, ...]:
        output = self._run(repo_path, ["branch", "--contains", commit_hash])
        branches: list[str] = []
        for line in output.splitlines():
            name = line.strip()
            if name.startswith("*"):
                name = name[1:].strip()
            if name and not self._is_detached_marker(name):
                branches.append(name)
        return tuple(branches)

    @staticmethod
    def build_log_args(options: LogQueryOptions) -> list[str]:
        """
        Translate query options into git log arguments.

        Args:
            options: Query options

        Returns:
            Argument list, without the leading "git"
        """
        args = ["log"]
        if options.ref:
            args.append(options.ref)
        if options.all_branches:
            args.append("--all")
        if options.after is not None:
            args.append(f"--after={format_git_date(options.after)}")
        if options.before is not None:
            args.append(f"--before={format_git_date(options.before)}")
        if options.max_count is not None:
            args.extend(["-n", str(options.max_count)])
        if options.author:
            args.append(f"--author={options.author}")
        args.append("--date=iso-strict")
        args.append(f"--pretty=format:{LOG_FORMAT}")
        return args

    @staticmethod
    def parse_log_output(output: str) -> tuple[RawLogRecord, ...]:
        """
        Split formatted git log output into raw records.

        Records with fewer fields than expected are kept with the missing keys
        absent; repairing them is the normalizer's job.

        Args:
            output: Text produced with LOG_FORMAT

        Returns:
            Raw records in output order
        """
        records: list[RawLogRecord] = []
        for chunk in output.split(RECORD_SEPARATOR):
            if not chunk.strip():
                continue
            values = chunk.strip("\n").split(FIELD_SEPARATOR, len(LOG_FIELDS) - 1)
            record: RawLogRecord = {}
            for key, value in zip(LOG_FIELDS, values):
                record[key] = value.strip()
            records.append(record)
        return tuple(records)

    def _run(self, repo_path: Path, args: list[str]) -> str:
        """Run a git command in the repository and return its stdout."""
        try:
            result = subprocess.run(
                [self._git_executable, *args],
                cwd=repo_path,
                capture_output=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise AccessError(
                f"Failed to run {self._git_executable}", git_args=args, diagnostic=str(e)
            ) from e
        except OSError as e:
            raise AccessError("Failed to start git", git_args=args, diagnostic=str(e)) from e
        except subprocess.CalledProcessError as e:
            stderr = e.stderr.decode("utf-8", errors="replace").strip() if e.stderr else ""
            raise AccessError(
                f"git {args[0]} exited with status {e.returncode}",
                git_args=args,
                diagnostic=stderr or str(e),
            ) from e

        try:
            return result.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise AccessError(
                f"git {args[0]} produced output that is not valid UTF-8",
                git_args=args,
                diagnostic=str(e),
            ) from e

    @staticmethod
    def _is_detached_marker(name: str) -> bool:
        return name == "HEAD" or name.startswith("(")


def format_git_date(value: datetime) -> str:
    """Render a datetime the way git date filters expect it."""
    return value.strftime(GIT_DATE_FORMAT)
