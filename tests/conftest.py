"""Shared fixtures and fakes for the git_reporter tests."""

from collections.abc import Sequence
from datetime import datetime
from pathlib import Path

import pytest

from git_reporter.git.domain.entities import Commit
from git_reporter.git.domain.errors import AccessError
from git_reporter.git.domain.value_objects import LogQueryOptions, RawLogRecord
from git_reporter.git.repositories.interfaces import GitRepository
from git_reporter.notifications.repositories.implementations import InMemoryNotifierImpl
from git_reporter.notifications.services.notification_service import NotificationService
from git_reporter.summarization.domain.errors import AdapterError
from git_reporter.summarization.domain.value_objects import WorkReportInput
from git_reporter.summarization.repositories.interfaces import LLMAgentRepository


def make_commit(
    message: str,
    date: datetime,
    commit_hash: str = "abc1234",
    author: str = "Alice",
    branch: str | None = None,
) -> Commit:
    return Commit(hash=commit_hash, date=date, message=message, author=author, branch=branch)


def make_record(
    message: str,
    date: str,
    commit_hash: str = "abc1234",
    author: str = "Alice",
) -> RawLogRecord:
    return {
        "hash": commit_hash,
        "author_name": author,
        "author_email": f"{author.lower()}@example.com",
        "date": date,
        "message": message,
        "body": "",
    }


class FakeGitRepository(GitRepository):
    """In-memory GitRepository that replays canned answers."""

    def __init__(
        self,
        log_responses: Sequence[Sequence[RawLogRecord] | Exception] = (),
        is_repo: bool = True,
        branches: Sequence[str] = (),
        histories: dict[str, Sequence[str]] | None = None,
        containing: dict[str, Sequence[str]] | None = None,
    ) -> None:
        self._log_responses = list(log_responses)
        self._is_repo = is_repo
        self._branches = tuple(branches)
        self._histories = histories or {}
        self._containing = containing or {}
        self.queries: list[LogQueryOptions] = []
        self.history_calls: list[tuple[str, int]] = []
        self.containment_calls: list[str] = []

    def is_repository(self, repo_path: Path) -> bool:
        return self._is_repo

    def query_log(self, repo_path: Path, options: LogQueryOptions) -> tuple[RawLogRecord, ...]:
        self.queries.append(options)
        response = self._log_responses.pop(0) if self._log_responses else ()
        if isinstance(response, Exception):
            raise response
        return tuple(response)

    def list_branches(self, repo_path: Path) -> tuple[str, ...]:
        return self._branches

    def list_branch_history(
        self, repo_path: Path, branch: str, max_count: int
    ) -> tuple[str, ...]:
        self.history_calls.append((branch, max_count))
        history = self._histories.get(branch)
        if isinstance(history, Exception):
            raise history
        return tuple(history or ())[:max_count]

    def list_branches_containing(self, repo_path: Path, commit_hash: str) -> tuple[str, ...]:
        self.containment_calls.append(commit_hash)
        result = self._containing.get(commit_hash, ())
        if isinstance(result, Exception):
            raise result
        return tuple(result)


class FakeLLMAgent(LLMAgentRepository):
    """Agent returning a fixed report or raising a fixed error."""

    def __init__(self, report: str = "# AI Report", error: AdapterError | None = None) -> None:
        self._report = report
        self._error = error
        self.inputs: list[WorkReportInput] = []

    def generate_report(self, input_data: WorkReportInput) -> str:
        self.inputs.append(input_data)
        if self._error is not None:
            raise self._error
        return self._report


@pytest.fixture
def notifier() -> InMemoryNotifierImpl:
    return InMemoryNotifierImpl()


@pytest.fixture
def notification_service(notifier: InMemoryNotifierImpl) -> NotificationService:
    return NotificationService(notifier)


@pytest.fixture
def access_error() -> AccessError:
    return AccessError("git log exited with status 128", diagnostic="fatal: bad revision")
