from datetime import datetime
from pathlib import Path

import pytest

from conftest import FakeGitRepository, FakeLLMAgent, make_record
from git_reporter.core.config import Settings
from git_reporter.git.domain.value_objects import DateRange
from git_reporter.git.services.branch_annotation_service import BranchAnnotationService
from git_reporter.git.services.commit_retrieval_service import CommitRetrievalService
from git_reporter.notifications.domain.value_objects import NoticeLevel
from git_reporter.reporting.domain.value_objects import NO_COMMITS_MESSAGE, ReportMode
from git_reporter.reporting.services.report_generation_service import (
    IN_PROGRESS_MESSAGE,
    ReportGenerationService,
)
from git_reporter.reporting.services.report_service import ReportService
from git_reporter.summarization.domain.errors import AdapterError
from git_reporter.summarization.domain.value_objects import WorkReportInput
from git_reporter.summarization.repositories.factory import LLMAgentProvider
from git_reporter.summarization.services.ai_report_service import AIReportService

REPO = Path("/work/repo")
FIXED_NOW = datetime(2024, 3, 16, 8, 0, 0)
RANGE = DateRange(start=datetime(2024, 3, 14), end=datetime(2024, 3, 15, 23, 59, 59, 999000))

RECORDS = [
    make_record("chore: bump deps", "2024-03-15T11:00:00", commit_hash="ccccccc"),
    make_record("fix: null check", "2024-03-14T15:00:00", commit_hash="bbbbbbb"),
    make_record("feat: add login", "2024-03-14T09:00:00", commit_hash="aaaaaaa"),
]


def _build(
    notification_service,
    git_repo: FakeGitRepository | None = None,
    agent=None,
) -> ReportGenerationService:
    git_repo = git_repo or FakeGitRepository(log_responses=[RECORDS])
    ai_report_service = None
    if agent is not None:
        provider = LLMAgentProvider(Settings(), factory=lambda settings: agent)
        ai_report_service = AIReportService(provider)
    return ReportGenerationService(
        CommitRetrievalService(git_repo, REPO, notification_service),
        ReportService(),
        notification_service,
        branch_annotation_service=BranchAnnotationService(git_repo, REPO),
        ai_report_service=ai_report_service,
        clock=lambda: FIXED_NOW,
    )


def test_structured_report(notification_service) -> None:
    """The structured report carries the generation time and all commits."""
    report = _build(notification_service).generate(RANGE)

    assert report is not None
    assert "Generated on: 2024-03-16 08:00:00" in report
    assert "- **Total commits:** 3" in report
    assert "- **Days worked:** 2" in report


def test_plain_report(notification_service) -> None:
    report = _build(notification_service).generate(RANGE, mode=ReportMode.PLAIN)
    assert report is not None
    assert "## Summary" in report
    assert "Generated on:" not in report


def test_no_commits_yields_sentence(notification_service) -> None:
    """An empty period is not an error."""
    git_repo = FakeGitRepository(log_responses=[[], []])
    service = _build(notification_service, git_repo=git_repo, agent=FakeLLMAgent())
    assert service.generate(RANGE, mode=ReportMode.AI) == NO_COMMITS_MESSAGE


def test_ai_report_success(notification_service, notifier) -> None:
    """The model receives a digest of every commit, grouped by day."""
    agent = FakeLLMAgent(report="# Weekly Report\n\nGood progress.")
    report = _build(notification_service, agent=agent).generate(RANGE, mode=ReportMode.AI)

    assert report == "# Weekly Report\n\nGood progress."
    assert len(agent.inputs) == 1
    digest = agent.inputs[0].digest
    assert agent.inputs[0].commit_count == 3
    assert digest.index("## 2024-03-14") < digest.index("## 2024-03-15")
    assert '- "feat: add login" by Alice (aaaaaaa)' in digest
    assert notifier.notices == []


def test_ai_failure_falls_back_to_local_report(notification_service, notifier) -> None:
    """A failed model call yields the structured report plus raw commits."""
    agent = FakeLLMAgent(error=AdapterError("rate limited"))
    report = _build(notification_service, agent=agent).generate(RANGE, mode=ReportMode.AI)

    assert report is not None
    assert report.startswith("> AI report generation failed with error: rate limited")
    assert "## Work Metrics" in report
    assert "## Commit Summary" in report
    assert "- feat: add login (aaaaaaa)" in report
    assert notifier.texts(NoticeLevel.ERROR) == ["Failed to generate report: rate limited"]


def test_ai_mode_without_agent_falls_back(notification_service, notifier) -> None:
    report = _build(notification_service).generate(RANGE, mode=ReportMode.AI)
    assert report is not None
    assert "AI reports are not configured" in report
    assert len(notifier.texts(NoticeLevel.ERROR)) == 1


def test_missing_credentials_fall_back(notification_service) -> None:
    """Agent construction errors surface through the same fallback."""
    provider = LLMAgentProvider(Settings(llm_provider="openai", openai_api_key=None))
    service = ReportGenerationService(
        CommitRetrievalService(FakeGitRepository(log_responses=[RECORDS]), REPO, notification_service),
        ReportService(),
        notification_service,
        ai_report_service=AIReportService(provider),
        clock=lambda: FIXED_NOW,
    )
    report = service.generate(RANGE, mode=ReportMode.AI)
    assert report is not None
    assert "OPENAI_API_KEY" in report


class ReentrantAgent(FakeLLMAgent):
    """Agent that asks for a second report while the first is in flight."""

    def __init__(self) -> None:
        super().__init__()
        self.service: ReportGenerationService | None = None
        self.nested_results: list[str | None] = []

    def generate_report(self, input_data: WorkReportInput) -> str:
        assert self.service is not None
        assert self.service.is_generating
        self.nested_results.append(self.service.generate(RANGE))
        return super().generate_report(input_data)


def test_concurrent_generation_is_rejected(notification_service, notifier) -> None:
    """A request made during a generation is refused with a notice."""
    agent = ReentrantAgent()
    service = _build(notification_service, agent=agent)
    agent.service = service

    report = service.generate(RANGE, mode=ReportMode.AI)

    assert report == "# AI Report"
    assert agent.nested_results == [None]
    assert notifier.texts(NoticeLevel.WARNING) == [IN_PROGRESS_MESSAGE]
    assert not service.is_generating


def test_guard_is_released_after_failure(notification_service) -> None:
    """An exception during generation does not leave the guard set."""
    git_repo = FakeGitRepository(log_responses=[RuntimeError("boom")])
    service = _build(notification_service, git_repo=git_repo)

    with pytest.raises(RuntimeError):
        service.generate(RANGE)
    assert not service.is_generating


def test_branch_annotation_is_opt_in(notification_service) -> None:
    git_repo = FakeGitRepository(
        log_responses=[RECORDS, RECORDS],
        branches=["main", "feature-x"],
        histories={"main": ["aaaaaaa"], "feature-x": ["aaaaaaa", "bbbbbbb", "ccccccc"]},
    )
    service = _build(notification_service, git_repo=git_repo)

    plain = service.collect_commits(RANGE)
    assert all(c.branch is None for c in plain)
    assert git_repo.history_calls == []

    annotated = service.collect_commits(RANGE, annotate_branches=True)
    assert [c.branch for c in annotated] == ["feature-x", "feature-x", "feature-x"]


def test_repeated_generation_reruns_retrieval(notification_service) -> None:
    git_repo = FakeGitRepository(log_responses=[RECORDS, RECORDS])
    service = _build(notification_service, git_repo=git_repo)
    service.generate(RANGE)
    service.generate(RANGE)
    assert len(git_repo.queries) == 2


def test_save_report(tmp_path: Path) -> None:
    """Reports are written with parent directories and a trailing newline."""
    target = tmp_path / "reports" / "week.md"
    written = ReportGenerationService.save_report("# Work Report", target)

    assert written == target
    assert target.read_text(encoding="utf-8") == "# Work Report\n"
